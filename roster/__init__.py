"""
Roster - person record editor for save-file backends.

Decodes, filters, sorts and edits person records, and coalesces edits
into backend persistence calls.
"""

from .config import RosterConfig, load_config
from .protocols import BackendError, BackendProtocol, RosterError, UnsupportedFieldError
from .session import ProfessionSession
from .types import Person

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("roster-editor")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "BackendError",
    "BackendProtocol",
    "Person",
    "ProfessionSession",
    "RosterConfig",
    "RosterError",
    "UnsupportedFieldError",
    "load_config",
]
