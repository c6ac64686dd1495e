"""todo_scan — find TODO markers in a source tree and summarise their tags."""

__all__ = [
    "__version__",
    "scan_project",
    "validate_config",
    "Priority",
    "DueBucket",
    "Record",
    "ScanConfig",
    "PatternConfig",
    "load_config",
]
__version__ = "0.1.0"

from todo_scan.api import scan_project, validate_config  # noqa: E402, F401
from todo_scan.core.config import PatternConfig, ScanConfig, load_config  # noqa: E402, F401
from todo_scan.model import DueBucket, Priority  # noqa: E402, F401
from todo_scan.model.record import Record  # noqa: E402, F401
