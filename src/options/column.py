"""
Column — SQLAlchemy тип колонки для Option[T]

OptionType оборачивает обычный тип колонки (Integer, String, DateTime, ...):
- bind:   Option → to_sql() (value или NULL), далее конверсия impl типа
- result: значение после impl типа → Option.from_sql(value, T)

Пример:
    Table(
        "test",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("num", OptionType(Integer, int)),
        Column("ts", OptionType(DateTime, datetime)),
    )
"""

from typing import Any

from sqlalchemy.engine import Dialect
from sqlalchemy.sql.type_api import to_instance
from sqlalchemy.types import NullType, TypeDecorator

from .converters import DEFAULT_PARAMETER_CONVERTER, ParameterConverter
from .option import Option


class OptionType(TypeDecorator):
    """
    Тип колонки, хранящий Option[T] как nullable значение impl типа.

    Связываемые значения, не являющиеся Option, оборачиваются через
    Option.from_optional (None → NULL).
    """

    impl = NullType
    cache_ok = True

    def __init__(
        self,
        impl_type: Any,
        element_type: Any,
        converter: ParameterConverter = DEFAULT_PARAMETER_CONVERTER,
    ):
        """
        Args:
            impl_type: Тип колонки SQLAlchemy (класс или экземпляр)
            element_type: Тип T элемента Option
            converter: Конвертер driver-native значений для чтения
        """
        super().__init__()
        self.impl = to_instance(impl_type)
        # Ключ кэша SQLAlchemy читает аргументы __init__ по имени атрибута
        self.impl_type = self.impl
        self.element_type = element_type
        self.converter = converter

    def process_bind_param(self, value: Any, dialect: Dialect) -> Any:
        if value is None:
            return None
        if not isinstance(value, Option):
            value = Option.from_optional(value, self.element_type)
        return value.to_sql()

    def process_result_value(self, value: Any, dialect: Dialect) -> Option:
        return Option.from_sql(value, self.element_type, self.converter)
