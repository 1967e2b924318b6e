"""Partial-edit payloads for ``update_one``.

A payload carries exactly one semantic edit, keyed by its wire name
(``{"mood": 0.5}``, ``{"addTrait": "LAZY"}``). Payloads are checked
against ``UPDATE_SCHEMA`` before they leave the process.
"""

import logging
from typing import Any, Dict, Optional, Union

from jsonschema import Draft7Validator

from roster.person.updater import SUPPORTED_FIELDS, TEXT_FIELDS, normalize_field_name, tag_id_for
from roster.protocols import InvalidPayloadError, UnsupportedFieldError

logger = logging.getLogger(__name__)

Number = Union[int, float]

_NUMBER = {"type": "number"}
_INTEGER = {"type": "integer"}
_TEXT = {"type": "string", "minLength": 1}
_NULLABLE_NUMBER = {"type": ["number", "null"]}
_NULLABLE_TEXT = {"type": ["string", "null"]}

UPDATE_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "PersonUpdate",
    "type": "object",
    "properties": {
        "firstNameId": _NULLABLE_TEXT,
        "lastNameId": _NULLABLE_TEXT,
        "customName": {"type": "string"},
        "gender": _INTEGER,
        "studioId": _NULLABLE_TEXT,
        "mood": _NUMBER,
        "attitude": _NUMBER,
        "selfEsteem": _NUMBER,
        "readiness": _NUMBER,
        "state": _INTEGER,
        "skill": _NUMBER,
        "limit": _NUMBER,
        "art": _NULLABLE_NUMBER,
        "com": _NULLABLE_NUMBER,
        "addTrait": _TEXT,
        "removeTrait": _TEXT,
        "addGenre": _TEXT,
        "removeGenre": _TEXT,
        "portraitBaseId": _INTEGER,
        "birthYear": _INTEGER,
        "isShady": {"type": "boolean"},
        "bonusCardMoney": _INTEGER,
        "bonusCardInfluencePoints": _INTEGER,
    },
    "additionalProperties": False,
    "minProperties": 1,
    "maxProperties": 1,
}

Draft7Validator.check_schema(UPDATE_SCHEMA)
_VALIDATOR = Draft7Validator(UPDATE_SCHEMA)

_INTEGER_FIELDS = frozenset(
    {
        "gender",
        "state",
        "portraitBaseId",
        "birthYear",
        "bonusCardMoney",
        "bonusCardInfluencePoints",
    }
)


def validate_update_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``payload`` unchanged if it is one well-typed edit.

    Raises:
        InvalidPayloadError: On the first schema violation.
    """
    errors = sorted(_VALIDATOR.iter_errors(payload), key=lambda err: list(err.path))
    if errors:
        first = errors[0]
        path = ".".join(str(part) for part in first.path) or "(root)"
        raise InvalidPayloadError(f"Schema validation failed at {path}: {first.message}")
    return payload


def build_update_payload(field: str, value: Optional[Number]) -> Dict[str, Any]:
    """Payload persisting the numeric edit ``update_field(person, field, value)`` made locally.

    ART/COM tags travel as ``art``/``com`` (``None`` removes them); any
    other tag is a genre and becomes ``addGenre``/``removeGenre``.

    Raises:
        UnsupportedFieldError: ``field`` is not an editable numeric field.
        InvalidPayloadError: The resulting payload fails validation.
    """
    tag_id = tag_id_for(field)
    if tag_id is not None:
        name = normalize_field_name(field)
        if name != field:
            payload: Dict[str, Any] = {name: value}
        elif value is None:
            payload = {"removeGenre": tag_id}
        else:
            payload = {"addGenre": tag_id}
    elif field not in SUPPORTED_FIELDS:
        raise UnsupportedFieldError(field)
    elif field == "isShady":
        payload = {"isShady": value == 1}
    else:
        number = 0 if value is None else value
        payload = {field: int(number) if field in _INTEGER_FIELDS else number}
    return validate_update_payload(payload)


def build_text_payload(field: str, value: Optional[str]) -> Dict[str, Any]:
    """Payload for a name field edit. A cleared custom name is sent as ``""``."""
    if field not in TEXT_FIELDS:
        raise UnsupportedFieldError(field)
    if field == "customName" and value is None:
        value = ""
    return validate_update_payload({field: value})


def build_trait_payload(trait: str, add: bool = True) -> Dict[str, Any]:
    return validate_update_payload({"addTrait" if add else "removeTrait": trait})
