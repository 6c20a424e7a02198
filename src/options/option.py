"""
Option — Generic контейнер опционального значения

Option[T] хранит ноль или одно значение типа T и явно различает состояния
present / absent без использования None как sentinel-а.

Неизменяемый value object: любое "изменение" создаёт новый экземпляр.

Интеграции:
- JSON (pydantic): present(v) кодируется как v, absent → null
- SQL (driver-native конверсия + сужение до T): absent ↔ NULL
- pydantic модели: Option[T] можно использовать как тип поля
- Глубокое сравнение: equal() / == используют options.equality.deep_equal

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. absent → _value равно нулевому значению T (typeinfo.zero_value)
2. Отсутствие значения проверяется только по флагу, никогда по _value
3. unwrap() на absent → UnwrapAbsentError (ошибка программиста)
4. map() на absent никогда не вызывает функцию
"""

from typing import (
    Any,
    Callable,
    Generic,
    Optional,
    Tuple,
    TypeVar,
    Union,
    get_args,
    get_type_hints,
)

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from .converters import DEFAULT_PARAMETER_CONVERTER, ParameterConverter, scan_value
from .equality import ATOMIC_TYPES, deep_equal
from .errors import UnwrapAbsentError
from .json_codec import (
    DEFAULT_JSON_CONFIG,
    JsonCodecConfig,
    decode_json,
    encode_json,
    encode_jsonable,
)
from .typeinfo import type_name, zero_value

T = TypeVar("T")
U = TypeVar("U")


def _return_type(func: Callable) -> Any:
    """Тип результата функции по её аннотации (object, если не указан)."""
    if isinstance(func, type):
        return func
    try:
        hints = get_type_hints(func)
    except (TypeError, NameError):
        return object
    return hints.get("return", object)


class Option(Generic[T]):
    """
    Опциональное значение типа T.

    Конструкторы:
        Option.present(value)        → present
        Option.absent(int)           → absent
        Option.from_optional(value)  → None → absent, иначе present
        Option.from_pair(value, ok)  → идиома "value, ok"
        Option()                     → absent (значение по умолчанию)

    Тип элемента хранится явно (element_type): он нужен для repr absent
    значений, unwrap_or_default, декодирования JSON и чтения из SQL.
    В сравнении тип элемента не участвует.
    """

    __slots__ = ("_value", "_present", "_element_type")

    def __init__(self) -> None:
        self._init(None, False, object)

    def _init(self, value: Any, present: bool, element_type: Any) -> None:
        if not present:
            value = zero_value(element_type)
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_present", present)
        object.__setattr__(self, "_element_type", element_type)

    @classmethod
    def _make(cls, value: Any, present: bool, element_type: Any) -> "Option":
        option = cls.__new__(cls)
        option._init(value, present, element_type)
        return option

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> Tuple[Callable, tuple]:
        return (type(self).from_pair, (self._value, self._present, self._element_type))

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def present(cls, value: T, element_type: Any = None) -> "Option[T]":
        """
        Option со значением.

        Args:
            value: Обёрнутое значение
            element_type: Тип T (default: type(value))
        """
        if element_type is None:
            element_type = type(value)
        return cls._make(value, True, element_type)

    @classmethod
    def absent(cls, element_type: Any = object) -> "Option[Any]":
        """
        Option без значения.

        Args:
            element_type: Тип T (default: object)
        """
        return cls._make(None, False, element_type)

    @classmethod
    def from_optional(cls, value: Optional[T], element_type: Any = None) -> "Option[T]":
        """
        Option из nullable значения: None → absent, иначе present(value).

        Мост от "None как отсутствие" к явному Option.
        """
        if value is None:
            return cls.absent(element_type if element_type is not None else object)
        return cls.present(value, element_type)

    @classmethod
    def from_pair(cls, value: T, present: bool, element_type: Any = None) -> "Option[T]":
        """
        Option из пары (value, present).

        Если present ложен, value игнорируется; тип элемента берётся из
        element_type или из type(value).

        Examples:
            >>> Option.from_pair(42, True)
            Option.present(42)
            >>> Option.from_pair(0, False)
            Option.absent(int)
        """
        if present:
            return cls.present(value, element_type)
        if element_type is None:
            element_type = type(value) if value is not None else object
        return cls.absent(element_type)

    # =========================================================================
    # ЗАПРОСЫ И ИЗВЛЕЧЕНИЕ
    # =========================================================================

    @property
    def element_type(self) -> Any:
        """Тип элемента T."""
        return self._element_type

    def is_present(self) -> bool:
        return self._present

    def is_absent(self) -> bool:
        return not self._present

    def unwrap(self) -> T:
        """
        Обёрнутое значение.

        Вызывающий код обязан проверить is_present() заранее.

        Raises:
            UnwrapAbsentError: Если Option absent (ошибка программиста)
        """
        if not self._present:
            raise UnwrapAbsentError(
                f"Option[{type_name(self._element_type)}].unwrap: unwrapping absent value"
            )
        return self._value

    def unwrap_or(self, default: T) -> T:
        """Обёрнутое значение или default для absent."""
        return self._value if self._present else default

    def unwrap_or_default(self) -> T:
        """Обёрнутое значение или нулевое значение T для absent."""
        return self._value if self._present else zero_value(self._element_type)

    def as_optional(self) -> Optional[T]:
        """
        Ссылка на обёрнутый объект или None.

        Возвращается сам объект, а не копия: изменяемый payload,
        изменённый через эту ссылку, изменится и внутри Option.
        """
        return self._value if self._present else None

    # =========================================================================
    # ПРЕОБРАЗОВАНИЕ
    # =========================================================================

    def map(self, func: Callable[[T], U], element_type: Any = None) -> "Option[U]":
        """
        Применение функции к значению.

        Args:
            func: Функция T → U (для absent не вызывается)
            element_type: Тип U для absent результата
                (default: аннотация результата func, иначе object)

        Returns:
            present(func(value)) или absent(U)
        """
        if self._present:
            return type(self).present(func(self._value), element_type)
        if element_type is None:
            element_type = _return_type(func)
        return type(self).absent(element_type)

    # =========================================================================
    # ФОРМАТИРОВАНИЕ
    # =========================================================================

    def to_display_string(self) -> str:
        """str(value) для present, пустая строка для absent."""
        return str(self._value) if self._present else ""

    def to_debug_string(self) -> str:
        """
        Диагностическое представление.

        present → Option.present(<repr значения>)
        absent  → Option.absent(<имя типа>), без значения
        """
        name = type(self).__name__
        if self._present:
            return f"{name}.present({self._value!r})"
        return f"{name}.absent({type_name(self._element_type)})"

    __str__ = to_display_string
    __repr__ = to_debug_string

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    def equal(self, other: "Option[T]") -> bool:
        """
        Глубокое равенство.

        - absent == absent (независимо от типа элемента и истории)
        - absent != present
        - present == present ⇔ deep_equal(value, other.value)
        """
        if self._present != other._present:
            return False
        if not self._present:
            return True
        return deep_equal(self._value, other._value)

    def _deep_equal_fields(self) -> Tuple[Tuple[str, Any], ...]:
        if self._present:
            return (("_present", True), ("_value", self._value))
        return (("_present", False),)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Option):
            return NotImplemented
        return self.equal(other)

    def __hash__(self) -> int:
        if not self._present:
            return hash((Option, False))
        value = self._value
        if isinstance(value, ATOMIC_TYPES) and not isinstance(value, bytearray):
            return hash((Option, True, value))
        return hash((Option, True, type(value)))

    # =========================================================================
    # JSON
    # =========================================================================

    def to_json(self) -> str:
        """
        JSON текст: представление значения для present, "null" для absent.
        """
        return encode_json(self.as_optional(), self._element_type)

    def to_jsonable(self) -> Any:
        """JSON-совместимый python объект (None для absent)."""
        return encode_jsonable(self.as_optional(), self._element_type)

    @classmethod
    def from_json(
        cls,
        data: Union[str, bytes],
        element_type: Any,
        config: Optional[JsonCodecConfig] = None,
    ) -> "Option[Any]":
        """
        Декодирование JSON как Optional[T].

        Raises:
            OptionDecodeError: Невалидный JSON для T
        """
        value = decode_json(data, element_type, config or DEFAULT_JSON_CONFIG)
        return cls.from_optional(value, element_type)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Схема pydantic для полей типа Option[T].

        Валидация: null/None → absent, значение T → present.
        Python режим дополнительно принимает готовый Option: его значение
        проходит ту же валидацию T, что и обычный ввод.
        Сериализация: значение T или null.
        """
        args = get_args(source_type)
        element_type = args[0] if args else Any

        nullable_schema = core_schema.nullable_schema(handler.generate_schema(element_type))
        from_nullable_schema = core_schema.no_info_after_validator_function(
            lambda value: cls.from_optional(value, element_type),
            nullable_schema,
        )
        return core_schema.json_or_python_schema(
            json_schema=from_nullable_schema,
            python_schema=core_schema.no_info_before_validator_function(
                lambda value: value.as_optional() if isinstance(value, cls) else value,
                from_nullable_schema,
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda option: option.as_optional(),
                info_arg=False,
                return_schema=nullable_schema,
            ),
        )

    # =========================================================================
    # SQL
    # =========================================================================

    def to_sql(self) -> Any:
        """
        Значение для связывания параметра: value для present, None (NULL) для absent.

        Конверсию типа выполняет драйвер.
        """
        return self._value if self._present else None

    @classmethod
    def from_sql(
        cls,
        src: Any,
        element_type: Any,
        converter: ParameterConverter = DEFAULT_PARAMETER_CONVERTER,
    ) -> "Option[Any]":
        """
        Чтение значения колонки.

        NULL → absent; иначе driver-native конверсия и сужение до T.

        Raises:
            OptionConversionError: Драйвер не может сконвертировать значение
            OptionTypeMismatchError: Значение не является T
        """
        value, present = scan_value(src, element_type, converter)
        return cls.from_pair(value, present, element_type)


# =============================================================================
# СВОБОДНЫЕ ФУНКЦИИ
# =============================================================================


def present(value: T, element_type: Any = None) -> Option[T]:
    return Option.present(value, element_type)


def absent(element_type: Any = object) -> Option[Any]:
    return Option.absent(element_type)


def from_optional(value: Optional[T], element_type: Any = None) -> Option[T]:
    return Option.from_optional(value, element_type)


def from_pair(value: T, is_present: bool, element_type: Any = None) -> Option[T]:
    return Option.from_pair(value, is_present, element_type)


def map_option(
    option: Option[T], func: Callable[[T], U], element_type: Any = None
) -> Option[U]:
    """Свободная версия Option.map."""
    return option.map(func, element_type)


def equal(left: Option[T], right: Option[T]) -> bool:
    """
    Предикат равенства Option для внешних инструментов сравнения.
    """
    return left.equal(right)


def pointer(option: Option[T]) -> Optional[T]:
    """
    Свободная версия Option.as_optional.

    Используется как трансформер при диффе: Option превращается в nullable
    значение, и дифф показывает расхождения поле за полем вместо
    единственного результата equal().
    """
    return option.as_optional()
