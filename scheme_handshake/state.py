"""Per-process session state, constructed once per endpoint and passed explicitly."""
from dataclasses import dataclass, field


@dataclass
class ProcessSessionState:
    # last identifier received; overwritten on every invocation, never cleared
    identifier: str = ""
    launched: bool = False
    # diagnostic only, excluded from equality
    invocation_count: int = field(default=0, compare=False)

    @property
    def phase(self) -> str:
        if not self.launched:
            return "not-launched"
        return "launched-with-identifier" if self.identifier else "launched"
