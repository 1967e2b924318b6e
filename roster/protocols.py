"""
roster Protocol Definitions
===========================

Interface contracts between the record pipeline and its external
collaborator (the save-file backend).

Components and their roles:
- Backend:  Owns the save file. Lists, persists, translates. Remote.
- Session:  Owns one category's in-memory collection. Optimistic edits.
- Pipeline: Codecs, filter, sort, mutation. Pure, synchronous.

Error handling philosophy:
- Decode problems (bad dates, bad decimals) never raise; they degrade to None/0
- Unsupported field names raise UnsupportedFieldError (programmer error)
- Remote failures raise BackendError; the session logs and reports them
- Editing a record that is no longer loaded is a no-op
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, runtime_checkable

# =============================================================================
# ERRORS
# =============================================================================


class RosterError(Exception):
    """Base for all roster errors."""

    pass


class UnsupportedFieldError(RosterError, ValueError):
    """Raised when a field name is outside the mutation dispatch table."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Unsupported field: {field_name!r}")


class InvalidPayloadError(RosterError, ValueError):
    """Raised when a partial-edit payload fails schema validation."""

    pass


class BackendError(RosterError):
    """Raised when a call to the backend collaborator fails."""

    def __init__(self, command: str, message: str):
        self.command = command
        super().__init__(f"{command} failed: {message}")


# =============================================================================
# BACKEND PROTOCOL
# =============================================================================


@runtime_checkable
class BackendProtocol(Protocol):
    """The remote procedure surface of the save-file backend.

    Every call is a suspension point. Records come back as wire dicts;
    the session resolves them into ``Person`` values.
    """

    async def list_by_category(self, category: str) -> List[Dict[str, Any]]:
        """All records of one category (profession)."""
        ...

    async def update_one(self, category: str, person_id: str, edit: Dict[str, Any]) -> None:
        """Persist exactly one semantic edit on one record."""
        ...

    async def update_many(self, category: str, group_id: str, field: str, value: float) -> int:
        """Set one field on every record of a group. Returns the count touched."""
        ...

    async def get_translation_table(self, language_code: str) -> List[str]:
        """Flat name table for a language; the index is the name id."""
        ...

    async def get_current_date(self) -> str:
        """In-simulation current date, long form ("June 14, 2010")."""
        ...
