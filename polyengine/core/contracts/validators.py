"""
JSON Schema контракт документа polynomial

Документ, который строят Polynomial.to_dict и принимает Polynomial.from_dict:

    {"schema_version": "1", "variable": "x",
     "terms": [{"coefficient": 3.0, "exponent": 2}, ...]}

Схема проверяет только форму документа. Инварианты Term Store
(порядок, уникальность показателей, элиминация малых коэффициентов)
восстанавливаются при сборке через Polynomial.add_term.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Final

import jsonschema
from jsonschema import Draft202012Validator

SCHEMA_VERSION: Final[str] = "1"

SCHEMA_DIR: Final[Path] = Path(__file__).parent / "schema"


@lru_cache(maxsize=None)
def load_schema(schema_name: str, schema_dir: Path = SCHEMA_DIR) -> Dict[str, Any]:
    """
    Чтение и meta-валидация схемы schema_dir/<schema_name>.json.

    Raises:
        FileNotFoundError: Если файл схемы не найден
        ValueError: Если файл не является валидной JSON Schema (Draft 2020-12)
    """
    schema_path = schema_dir / f"{schema_name}.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_path}")

    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    try:
        Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {schema_path.name}: {e}") from e

    return schema


@lru_cache(maxsize=None)
def _polynomial_validator() -> Draft202012Validator:
    return Draft202012Validator(load_schema("polynomial"))


def validate_polynomial(data: Dict[str, Any]) -> None:
    """
    Raises:
        jsonschema.ValidationError: Если документ не соответствует схеме polynomial
    """
    _polynomial_validator().validate(data)
