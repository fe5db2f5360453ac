"""Core constants used across migration modules.

This module centralizes defaults and canonical schema literals.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_CURRENT_DB_PATH = "./shared/currentDb.json"
DEFAULT_MONGO_URI = "mongodb://localhost:27017"
DEFAULT_DB_NAME = "uems"
MATERIALS_COLLECTION_NAME = "materials"
PREVIEW_DOCUMENT_LIMIT = 5
PREVIEW_JSON_INDENT = 2
PLACEHOLDER_COMPANY_ID = "<provide companyId>"

PRICE_CURRENCY = "RUB"
UNIT_SYSTEM = "SI"
SPEC_STANDARD = "GOST"
DOCUMENT_VERSION = 1
METER_UNIT = "m"
MILLIMETER_UNIT = "mm"
MILLIMETERS_PER_METER = 1000

LEGACY_PRICE_KEYS = (
    "Стоимость,  руб./кг. без НДС",
    "Стоимость, руб./кг. без НДС",
)
LEGACY_GRADE_KEY = "Марка стали"
LEGACY_DIAMETER_KEY = "d"
LEGACY_WALL_THICKNESS_KEY = "S,мм"
LEGACY_RAW_ID_KEY = "id"
UNSPECIFIED_GRADE = "Без марки"
MISSING_VALUE_TOKEN = "-"
