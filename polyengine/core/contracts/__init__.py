"""
Contract Validation Module

JSON Schema контракт сериализованного полинома.
"""

from .validators import SCHEMA_DIR, SCHEMA_VERSION, load_schema, validate_polynomial

__all__ = [
    "SCHEMA_DIR",
    "SCHEMA_VERSION",
    "load_schema",
    "validate_polynomial",
]
