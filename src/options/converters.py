"""
Converters — Driver-native конверсия и сужение типа (SQL путь)

Чтение колонки в Option[T] выполняется в две фазы:
1. Конверсия: значение драйвера → driver-native значение
   (None, int, float, bool, bytes, str, datetime, date, time, Decimal)
   по стандартным правилам ParameterConverter
2. Сужение: driver-native значение → ровно тип T (checked cast)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NULL (None) → absent, без конверсии
2. Тип, который драйвер не умеет представить (произвольный класс),
   отклоняется уже на фазе конверсии, до сужения
3. bool никогда не сужается до int (и других не-bool типов)
4. Ошибки не подавляются и не повторяются: OptionConversionError /
   OptionTypeMismatchError с цепочкой причин
"""

import logging
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Final, Tuple, get_origin

from .errors import OptionConversionError, OptionTypeMismatchError
from .typeinfo import type_name

logger = logging.getLogger(__name__)


# =============================================================================
# DRIVER-NATIVE ЗНАЧЕНИЯ
# =============================================================================

# Множество значений, которые DB-API драйвер принимает и возвращает без конверсии
# (Date, Time и Numeric колонки SQLAlchemy отдают date, time и Decimal)
NATIVE_TYPES: Final[tuple] = (
    type(None),
    bool,
    int,
    float,
    bytes,
    str,
    datetime,
    date,
    time,
    Decimal,
)

# Базовые скалярные типы для приведения подклассов (порядок важен: bool до int)
SCALAR_BASES: Final[tuple] = (bool, int, float, str)


class ParameterConverter:
    """
    Стандартный конвертер значений для SQL драйвера.

    Правила convert_value:
    - Native значения возвращаются как есть
    - Объекты с методом to_sql() (value binders, например Option)
      связываются, результат обязан быть native
    - Enum → значение члена (рекурсивно)
    - bytearray / memoryview → bytes
    - Подклассы bool/int/float/str → базовый тип
    - Подклассы date / time / Decimal → как есть
    - Всё остальное → OptionConversionError
    """

    def __init__(self, native_types: tuple = NATIVE_TYPES):
        """
        Args:
            native_types: Множество native типов драйвера (default: NATIVE_TYPES)
        """
        self.native_types = native_types

    def is_native(self, value: Any) -> bool:
        """Значение принадлежит native множеству драйвера."""
        return type(value) in self.native_types

    def convert_value(self, value: Any) -> Any:
        """
        Конверсия значения в driver-native представление.

        Args:
            value: Значение от драйвера или пользователя

        Returns:
            Native значение

        Raises:
            OptionConversionError: Если тип не поддерживается драйвером
        """
        if self.is_native(value):
            return value

        binder = getattr(value, "to_sql", None)
        if callable(binder):
            bound = binder()
            if not self.is_native(bound):
                raise OptionConversionError(
                    f"non-native value {bound!r} returned by "
                    f"{type_name(type(value))}.to_sql"
                )
            return bound

        if isinstance(value, Enum):
            return self.convert_value(value.value)

        if isinstance(value, (bytearray, memoryview)):
            return bytes(value)

        for base in SCALAR_BASES:
            if isinstance(value, base):
                return base(value)

        if isinstance(value, (date, time, Decimal)):
            return value

        raise OptionConversionError(f"unsupported type {type_name(type(value))}")


DEFAULT_PARAMETER_CONVERTER: Final[ParameterConverter] = ParameterConverter()


# =============================================================================
# СУЖЕНИЕ ТИПА
# =============================================================================


def accepts(element_type: Any, value: Any) -> bool:
    """
    Проверка, что значение сужается ровно до типа T.

    Args:
        element_type: Тип T (класс, generic alias, Any/object)
        value: Native значение

    Returns:
        True если value является экземпляром T
    """
    if element_type is Any or element_type is object:
        return True

    origin = get_origin(element_type)
    target = origin if isinstance(origin, type) else element_type

    if (
        isinstance(value, bool)
        and isinstance(target, type)
        and target is not bool
        and issubclass(bool, target)
    ):
        return False
    return isinstance(value, target)


def scan_value(
    src: Any,
    element_type: Any,
    converter: ParameterConverter = DEFAULT_PARAMETER_CONVERTER,
) -> Tuple[Any, bool]:
    """
    Чтение значения колонки для Option[T].

    Args:
        src: Значение, полученное от драйвера
        element_type: Тип T
        converter: Конвертер driver-native значений

    Returns:
        (value, present): (None, False) для NULL, иначе (суженное значение, True)

    Raises:
        OptionConversionError: Ошибка фазы конверсии
        OptionTypeMismatchError: Сконвертированное значение не является T
    """
    if src is None:
        return None, False

    name = type_name(element_type)
    try:
        native = converter.convert_value(src)
    except OptionConversionError as e:
        logger.debug("Driver conversion failed for Option[%s]: %s", name, e)
        raise OptionConversionError(
            f"Option[{name}].from_sql: failed to convert value from SQL driver: {e}"
        ) from e

    if not accepts(element_type, native):
        logger.debug(
            "Scanned value %r (%s) does not narrow to Option[%s]",
            native,
            type_name(type(native)),
            name,
        )
        raise OptionTypeMismatchError(
            f"Option[{name}].from_sql: failed to convert value {native!r} "
            f"of type {type_name(type(native))} to type {name}",
            value=native,
            element_type=element_type,
        )

    return native, True
