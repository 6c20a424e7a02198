"""
JSON Schema Contracts — Контракт JSON представления Option[T]

JSON представление Option[T] — это nullable T:
    {"anyOf": [<схема T>, {"type": "null"}]}

Схема генерируется pydantic (тот же TypeAdapter, что и в json_codec),
проверяется как Draft 2020-12 и используется для валидации payload-ов
через библиотеку jsonschema. Применяется, когда Option-значения приходят
в составе внешних документов, минуя pydantic.
"""

import copy
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from .json_codec import nullable_adapter
from .option import Option
from .typeinfo import type_name

# Диалект, объявляемый в сгенерированных схемах
JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


# =============================================================================
# SCHEMA BUILDER
# =============================================================================


class SchemaBuilder:
    """
    Построитель JSON Schema для Option[T].

    Схемы кэшируются по типу элемента.
    """

    def __init__(self):
        # Кэш построенных схем
        self._schemas: Dict[Any, Dict[str, Any]] = {}

    def build_schema(self, element_type: Any) -> Dict[str, Any]:
        """
        JSON Schema для Option[element_type].

        Args:
            element_type: Тип T

        Returns:
            Схема как dict

        Raises:
            ValueError: Если сгенерированная схема невалидна
        """
        if element_type in self._schemas:
            return self._schemas[element_type]

        schema = dict(nullable_adapter(element_type).json_schema())
        schema.setdefault("$schema", JSON_SCHEMA_DIALECT)

        # Meta-validation
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(
                f"Invalid JSON Schema for Option[{type_name(element_type)}]: {e}"
            ) from e

        self._schemas[element_type] = schema
        return schema


# Глобальный экземпляр построителя
_SCHEMA_BUILDER = SchemaBuilder()


def option_json_schema(element_type: Any) -> Dict[str, Any]:
    """JSON Schema для Option[element_type] (глубокая копия из кэша)."""
    return copy.deepcopy(_SCHEMA_BUILDER.build_schema(element_type))


# =============================================================================
# CONTRACT VALIDATOR
# =============================================================================


class OptionContractValidator:
    """
    Валидатор JSON payload-ов Option[T].

    Инкапсулирует Draft202012Validator для схемы nullable T.
    """

    def __init__(self, element_type: Any):
        """
        Args:
            element_type: Тип T
        """
        self.element_type = element_type
        self.schema = _SCHEMA_BUILDER.build_schema(element_type)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Валидация payload-а.

        Args:
            data: JSON-совместимые данные (результат json.loads)

        Raises:
            ValidationError: Если данные не соответствуют контракту
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        """Проверка валидности без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_option_payload(data: Any, element_type: Any) -> None:
    """
    Валидация JSON payload-а как Option[element_type].

    Raises:
        ValidationError: Если данные не соответствуют контракту
    """
    OptionContractValidator(element_type).validate(data)


def validate_option(option: Option) -> None:
    """
    Проверка, что JSON представление Option соответствует контракту
    его собственного типа элемента.

    Raises:
        ValidationError: Если представление не соответствует контракту
    """
    validate_option_payload(option.to_jsonable(), option.element_type)
