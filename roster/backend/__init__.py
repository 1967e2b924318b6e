"""Backend adapters and partial-edit payloads."""

from roster.backend.http import HttpBackend
from roster.backend.payload import (
    build_text_payload,
    build_trait_payload,
    build_update_payload,
    validate_update_payload,
)

__all__ = [
    "HttpBackend",
    "build_text_payload",
    "build_trait_payload",
    "build_update_payload",
    "validate_update_payload",
]
