from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

class Stage(str, Enum):
    COLLECT = "COLLECT"
    MINE = "MINE"
    RENDER = "RENDER"
    WRITE = "WRITE"
    DONE = "DONE"

class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"

@dataclass(frozen=True)
class Round:
    """One enumeration round: the candidate classes, or the final signal."""
    types: List[type] = field(default_factory=list)
    final: bool = False

@dataclass(frozen=True)
class TypeResult:
    table: str
    ok: bool
    message: str
    artifact: Optional[str] = None
