"""
Errors — Таксономия ошибок Option

Два класса ошибок:
- Programmer error: unwrap() на absent значении → UnwrapAbsentError.
  Наследуется от AssertionError, а НЕ от OptionError: это сигнал бага
  вызывающего кода, а не runtime-условие. Вызывающий код, который не может
  гарантировать наличие значения, обязан использовать unwrap_or/unwrap_or_default.
- Recoverable errors (OptionError): ошибки на границах JSON и SQL
  (OptionEncodeError, OptionDecodeError, OptionConversionError).
  Всегда пробрасываются с цепочкой причин (raise ... from exc).
"""

from typing import Any


class UnwrapAbsentError(AssertionError):
    """Извлечение значения из absent Option через unwrap()."""

    pass


class OptionError(Exception):
    """Базовый класс восстановимых ошибок Option."""

    pass


class OptionDecodeError(OptionError, ValueError):
    """
    Ошибка декодирования JSON в Option[T].

    Исходная pydantic.ValidationError доступна через __cause__.
    """

    pass


class OptionEncodeError(OptionError, ValueError):
    """
    Ошибка кодирования Option[T] в JSON.

    Исходная pydantic_core.PydanticSerializationError доступна через __cause__.
    """

    pass


class OptionConversionError(OptionError, TypeError):
    """Ошибка driver-native конверсии значения (SQL путь)."""

    pass


class OptionTypeMismatchError(OptionConversionError):
    """
    Сконвертированное значение не сужается до типа T.

    Attributes:
        value: Значение после driver-native конверсии
        element_type: Целевой тип T
    """

    def __init__(self, message: str, value: Any, element_type: Any):
        super().__init__(message)
        self.value = value
        self.element_type = element_type
