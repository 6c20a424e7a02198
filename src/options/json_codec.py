"""
JSON Codec — Кодирование Option[T] через pydantic

Option[T] кодируется как nullable T:
- present(v) → ровно то же, во что кодируется сам v
- absent()   → null

Декодирование выполняется как Optional[T]:
- null             → absent
- валидное значение T → present(decoded)
- невалидное значение → OptionDecodeError с цепочкой от pydantic.ValidationError

Кодеки (pydantic.TypeAdapter) кэшируются по типу элемента.
bytes кодируются как base64 (ser_json_bytes / val_json_bytes),
поэтому произвольные байты переживают round trip.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Final, Optional, Union

from pydantic import ConfigDict, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .errors import OptionDecodeError, OptionEncodeError
from .typeinfo import type_name

logger = logging.getLogger(__name__)


# =============================================================================
# КОНФИГУРАЦИЯ
# =============================================================================


@dataclass(frozen=True)
class JsonCodecConfig:
    """
    Конфигурация JSON декодирования.

    strict=True: строгая валидация pydantic ("3" не является int,
    1.5 не является int). strict=False включает lax-приведения pydantic.
    """

    strict: bool = True


DEFAULT_JSON_CONFIG: Final[JsonCodecConfig] = JsonCodecConfig()

# Размер кэша TypeAdapter-ов (по одному на тип элемента)
ADAPTER_CACHE_SIZE: Final[int] = 256

# bytes в JSON кодируются как base64 (произвольные байты, не только UTF-8)
BYTES_JSON_ENCODING: Final[str] = "base64"

ADAPTER_CONFIG: Final[ConfigDict] = ConfigDict(
    ser_json_bytes=BYTES_JSON_ENCODING,
    val_json_bytes=BYTES_JSON_ENCODING,
)


# =============================================================================
# ADAPTERS
# =============================================================================


@lru_cache(maxsize=ADAPTER_CACHE_SIZE)
def nullable_adapter(element_type: Any) -> TypeAdapter:
    """
    TypeAdapter для Optional[element_type].

    Args:
        element_type: Тип T (должен быть поддержан pydantic)

    Returns:
        Закэшированный TypeAdapter
    """
    return TypeAdapter(Optional[element_type], config=ADAPTER_CONFIG)


# =============================================================================
# ENCODE / DECODE
# =============================================================================


def encode_json(value: Any, element_type: Any) -> str:
    """
    Кодирование nullable значения в JSON строку.

    None кодируется как "null" без построения адаптера, поэтому absent
    кодируется для любого T, даже не поддержанного pydantic.

    Args:
        value: Обёрнутое значение или None (absent)
        element_type: Тип T

    Returns:
        JSON текст (для None → "null")

    Raises:
        OptionEncodeError: Если pydantic не может сериализовать значение
    """
    if value is None:
        return "null"
    try:
        return nullable_adapter(element_type).dump_json(value).decode("utf-8")
    except PydanticSerializationError as e:
        name = type_name(element_type)
        logger.debug("Failed to encode Option[%s] to JSON: %s", name, e)
        raise OptionEncodeError(f"Option[{name}].to_json: {e}") from e


def encode_jsonable(value: Any, element_type: Any) -> Any:
    """
    Кодирование nullable значения в JSON-совместимые python объекты.

    Используется для встраивания Option в более крупные документы
    (dict перед json.dumps, jsonschema валидация).
    """
    if value is None:
        return None
    try:
        return nullable_adapter(element_type).dump_python(value, mode="json")
    except PydanticSerializationError as e:
        name = type_name(element_type)
        logger.debug("Failed to encode Option[%s] to JSON: %s", name, e)
        raise OptionEncodeError(f"Option[{name}].to_jsonable: {e}") from e


def decode_json(
    data: Union[str, bytes],
    element_type: Any,
    config: JsonCodecConfig = DEFAULT_JSON_CONFIG,
) -> Any:
    """
    Декодирование JSON как Optional[T].

    Args:
        data: JSON текст
        element_type: Тип T
        config: Конфигурация декодирования

    Returns:
        Декодированное значение T или None (для null)

    Raises:
        OptionDecodeError: Если data не является валидным JSON для Optional[T]
    """
    try:
        return nullable_adapter(element_type).validate_json(data, strict=config.strict)
    except ValidationError as e:
        name = type_name(element_type)
        logger.debug("Failed to decode Option[%s] from JSON: %s", name, e)
        raise OptionDecodeError(f"Option[{name}].from_json: {e}") from e
