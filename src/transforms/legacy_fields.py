"""Explicit presence model for legacy record fields.

Legacy rows distinguish a missing column, an explicit null, and the
``"-"`` no-value token. This module keeps those states apart so that
legitimate falsy values such as ``0`` are never dropped by accident.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from core.types import RawRecord

FieldPresence = Literal["absent", "null", "placeholder", "present"]


@dataclass(frozen=True)
class LegacyValue:
    """One field read from a legacy record."""

    presence: FieldPresence
    value: object = None

    @property
    def is_usable(self) -> bool:
        """Return whether the field carries a real value."""
        return self.presence == "present"


def read_legacy_field(record: RawRecord, key: str, missing_token: str) -> LegacyValue:
    """Read a field and classify its presence.

    Args:
        record: Legacy record mapping.
        key: Legacy field name.
        missing_token: Token the legacy data uses for "no value".

    Returns:
        Classified field value.
    """
    if key not in record:
        return LegacyValue(presence="absent")
    value = record[key]
    if value is None:
        return LegacyValue(presence="null")
    if isinstance(value, str) and value.strip() == missing_token:
        return LegacyValue(presence="placeholder", value=value)
    return LegacyValue(presence="present", value=value)
