import os

from pydantic import BaseModel, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_ENVIRONMENTS = ("memory", "xdg")


class Settings(BaseModel):
    environment: str = "memory"
    caller_scheme: str = "app1"
    callee_scheme: str = "app2"
    log_level: str = "WARNING"
    xdg_timeout: float = 5

    @field_validator("environment")
    @classmethod
    def _check_environment(cls, value: str) -> str:
        if value not in _ENVIRONMENTS:
            raise ValueError(f"must be one of {', '.join(_ENVIRONMENTS)}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        if value not in _LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(_LOG_LEVELS)}")
        return value

    @field_validator("xdg_timeout")
    @classmethod
    def _check_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be a positive number of seconds")
        return value

    @classmethod
    def from_env(cls) -> "Settings":
        """Read HANDSHAKE_* variables; call load_dotenv() first to pick up a .env file.

        Raises pydantic.ValidationError on a malformed value.
        """
        return cls(
            environment=os.getenv("HANDSHAKE_ENVIRONMENT", "memory").lower(),
            caller_scheme=os.getenv("HANDSHAKE_CALLER_SCHEME", "app1"),
            callee_scheme=os.getenv("HANDSHAKE_CALLEE_SCHEME", "app2"),
            log_level=os.getenv("HANDSHAKE_LOG_LEVEL", "WARNING").upper(),
            xdg_timeout=os.getenv("HANDSHAKE_XDG_TIMEOUT", "5"),
        )
