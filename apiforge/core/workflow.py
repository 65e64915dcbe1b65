from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

class ProjectState(str, Enum):
    UNCONFIGURED = "UNCONFIGURED"
    DIRTY = "DIRTY"
    SAVED_STALE = "SAVED_STALE"
    GENERATED = "GENERATED"

@dataclass(frozen=True)
class GenerationResult:
    project_id: int
    backend_type: str
    state: ProjectState
    selected_file: str
    files: Dict[str, str] = field(default_factory=dict)
