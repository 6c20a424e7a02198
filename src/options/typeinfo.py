"""
TypeInfo — Runtime-информация о типе элемента Option[T]

Python стирает параметры generic-типов в runtime, поэтому Option хранит тип
элемента явно. Модуль содержит две операции над этим тегом:
- type_name: имя типа для диагностики (repr, сообщения ошибок)
- zero_value: нулевое значение типа (содержимое absent Option)
"""

from decimal import Decimal
from typing import Any, Final, get_origin

# =============================================================================
# НУЛЕВЫЕ ЗНАЧЕНИЯ
# =============================================================================

# Типы, у которых T() даёт осмысленное нулевое значение
# Для остальных типов (datetime, пользовательские классы, Any) нулём считается None
ZERO_CONSTRUCTIBLE_TYPES: Final[frozenset] = frozenset(
    {
        bool,
        int,
        float,
        complex,
        Decimal,
        str,
        bytes,
        bytearray,
        list,
        tuple,
        dict,
        set,
        frozenset,
    }
)


def zero_value(element_type: Any) -> Any:
    """
    Нулевое значение типа элемента.

    Args:
        element_type: Тип T (класс или generic alias, например list[int])

    Returns:
        T() для встроенных типов из ZERO_CONSTRUCTIBLE_TYPES, иначе None

    Examples:
        >>> zero_value(int)
        0
        >>> zero_value(list[str])
        []
        >>> zero_value(object) is None
        True
    """
    base = get_origin(element_type) or element_type
    if base in ZERO_CONSTRUCTIBLE_TYPES:
        return base()
    return None


# =============================================================================
# ИМЕНА ТИПОВ
# =============================================================================


def type_name(element_type: Any) -> str:
    """
    Имя типа для диагностического вывода.

    Args:
        element_type: Тип T

    Returns:
        __qualname__ для классов ("int", "datetime"), repr для generic alias
        ("list[int]") и typing-конструкций ("typing.Any")
    """
    if isinstance(element_type, type) and get_origin(element_type) is None:
        return element_type.__qualname__
    return repr(element_type)
