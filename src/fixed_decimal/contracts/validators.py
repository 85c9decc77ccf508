"""
JSON Schema Contract for the Decimal Wire Form

JSON-представление Decimal — голое число (35.23, а не "35.23").
Схема decimal_amount.json поставляется внутри пакета (schema/) и
загружается через importlib.resources, поэтому работает и без
editable-установки.

Валидатор строится один раз при импорте модуля.
"""

import json
from importlib import resources
from typing import Any, Dict, Final

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

# Имя схемы JSON-представления Decimal
DECIMAL_AMOUNT_SCHEMA: Final[str] = "decimal_amount"


def load_schema(schema_name: str) -> Dict[str, Any]:
    """
    Загрузка JSON Schema из ресурсов пакета.

    Args:
        schema_name: Имя схемы без расширения (например, 'decimal_amount')

    Returns:
        Загруженная схема как dict

    Raises:
        FileNotFoundError: Если схема не поставляется с пакетом
        ValueError: Если файл не является валидной JSON Schema
    """
    resource = resources.files(__package__) / "schema" / f"{schema_name}.json"
    if not resource.is_file():
        raise FileNotFoundError(f"Schema not found: {schema_name}.json")

    schema = json.loads(resource.read_text(encoding="utf-8"))

    # meta-validation
    try:
        Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

    return schema


_DECIMAL_AMOUNT_VALIDATOR = Draft202012Validator(load_schema(DECIMAL_AMOUNT_SCHEMA))


def validate_decimal_amount(data: Any) -> None:
    """
    Валидация декодированного JSON документа как decimal_amount.

    Принимает только JSON number (int или float), но не строку, bool или null.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    _DECIMAL_AMOUNT_VALIDATOR.validate(data)
