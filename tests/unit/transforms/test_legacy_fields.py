"""Unit tests for legacy field presence classification."""

from __future__ import annotations

from transforms.legacy_fields import read_legacy_field


def test_read_legacy_field_distinguishes_presence_states() -> None:
    """Absent, null, placeholder, and present values are kept apart."""
    record = {"null": None, "dash": " - ", "zero": 0}

    states = [
        read_legacy_field(record, key, "-").presence
        for key in ("missing", "null", "dash", "zero")
    ]

    assert states == ["absent", "null", "placeholder", "present"]


def test_read_legacy_field_keeps_falsy_values_usable() -> None:
    """Zero and False are real values, not missing ones."""
    record = {"zero": 0, "flag": False}

    assert read_legacy_field(record, "zero", "-").is_usable
    assert read_legacy_field(record, "flag", "-").value is False
