from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scheme_handshake.errors import DispatchRejected
from scheme_handshake.utils.patterns import validate_scheme


class InvocationTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    scheme: str
    path_segment: str = ""                   # the session identifier, if any
    query_parameters: Mapping[str, str] = Field(default_factory=dict, validate_default=True)

    @field_validator("scheme")
    @classmethod
    def _check_scheme(cls, value: str) -> str:
        return validate_scheme(value)

    @field_validator("query_parameters")
    @classmethod
    def _freeze_query(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))


class InvocationResult(BaseModel):
    dispatched: bool
    url: str

    def raise_for_status(self) -> "InvocationResult":
        """Raise DispatchRejected if the environment declined the dispatch."""
        if not self.dispatched:
            raise DispatchRejected(self.url)
        return self
