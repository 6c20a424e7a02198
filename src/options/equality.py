"""
Equality — Глубокое структурное сравнение значений

Используется Option.equal() для сравнения обёрнутых значений.

Оператор == в Python недостаточен для payload-ов с вложенными структурами:
классы без собственного __eq__ сравниваются по identity, а собственный __eq__
может игнорировать приватные поля. Поэтому сравнение выполняется рекурсивным
обходом:
- Atomic типы (числа, строки, bytes, datetime, Enum, Decimal, UUID, типы,
  функции) → оператор ==
- Mapping → совпадение ключей + рекурсивно значения
- list/tuple → длина + поэлементно
- set/frozenset → оператор ==
- Остальные объекты → поатрибутно по __dict__ и всем __slots__ в MRO,
  включая приватные атрибуты, без учёта пользовательского __eq__

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Значения разных runtime-типов никогда не равны (1 != 1.0, False != 0)
2. Один и тот же объект всегда равен сам себе (в т.ч. float('nan'))
3. Циклические ссылки не приводят к бесконечной рекурсии
"""

import types
from collections.abc import Mapping
from datetime import date, datetime, time, timedelta, tzinfo
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Final, Iterator, NamedTuple, Optional, Set, Tuple
from uuid import UUID

# =============================================================================
# ПАРАМЕТРЫ СРАВНЕНИЯ
# =============================================================================

# Типы, сравниваемые оператором ==
ATOMIC_TYPES: Final[tuple] = (
    type(None),
    bool,
    int,
    float,
    complex,
    Decimal,
    Fraction,
    str,
    bytes,
    bytearray,
    date,
    datetime,
    time,
    timedelta,
    tzinfo,
    UUID,
    Enum,
    type,
    range,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
)

# Служебные атрибуты, не являющиеся частью значения
IGNORED_ATTRIBUTES: Final[frozenset] = frozenset(
    {"__dict__", "__weakref__", "__pydantic_fields_set__"}
)


class _Missing:
    """Маркер отсутствующего атрибута или ключа."""

    def __repr__(self) -> str:
        return "<missing>"


MISSING: Final = _Missing()


class Difference(NamedTuple):
    """Одно расхождение между двумя значениями."""

    path: str
    left: Any
    right: Any


# =============================================================================
# ОБХОД АТРИБУТОВ
# =============================================================================


def _slot_names(cls: type) -> Iterator[str]:
    """Имена всех __slots__ в MRO с учётом name mangling."""
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name.startswith("__") and not name.endswith("__"):
                name = f"_{klass.__name__.lstrip('_')}{name}"
            yield name


def _state_of(obj: Any) -> dict:
    """
    Поля объекта, участвующие в сравнении.

    Объект может задать поля явно методом _deep_equal_fields()
    (используется Option, чтобы absent значения не сравнивали нулевые payload-ы).
    """
    custom = getattr(type(obj), "_deep_equal_fields", None)
    if custom is not None:
        return dict(custom(obj))

    state = {}
    if hasattr(obj, "__dict__"):
        state.update(vars(obj))
    for name in _slot_names(type(obj)):
        if name in IGNORED_ATTRIBUTES or name in state:
            continue
        state[name] = getattr(obj, name, MISSING)
    for name in IGNORED_ATTRIBUTES:
        state.pop(name, None)
    return state


def _is_atomic(value: Any) -> bool:
    return isinstance(value, ATOMIC_TYPES)


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


def iter_differences(
    left: Any,
    right: Any,
    path: str = "",
    _visited: Optional[Set[Tuple[int, int]]] = None,
) -> Iterator[Difference]:
    """
    Итератор по всем расхождениям между двумя значениями.

    Args:
        left: Первое значение
        right: Второе значение
        path: Префикс пути (для вложенных вызовов)

    Yields:
        Difference(path, left, right) для каждого расходящегося листа.
        Путь записывается как ".attr", "[key]", "[index]".

    Examples:
        >>> list(iter_differences({"a": [1, 2]}, {"a": [1, 3]}))
        [Difference(path="['a'][1]", left=2, right=3)]
    """
    if left is right:
        return
    if type(left) is not type(right):
        yield Difference(path, left, right)
        return
    if _is_atomic(left):
        if left != right:
            yield Difference(path, left, right)
        return

    if _visited is None:
        _visited = set()
    pair = (id(left), id(right))
    if pair in _visited:
        return
    _visited.add(pair)

    if isinstance(left, Mapping):
        for key in list(left.keys()) + [k for k in right.keys() if k not in left]:
            yield from iter_differences(
                left.get(key, MISSING),
                right.get(key, MISSING),
                f"{path}[{key!r}]",
                _visited,
            )
        return

    if isinstance(left, (list, tuple)):
        if len(left) != len(right):
            yield Difference(path, left, right)
            return
        for index, (lhs, rhs) in enumerate(zip(left, right)):
            yield from iter_differences(lhs, rhs, f"{path}[{index}]", _visited)
        return

    if isinstance(left, (set, frozenset)):
        if left != right:
            yield Difference(path, left, right)
        return

    left_state = _state_of(left)
    right_state = _state_of(right)
    if not left_state and not right_state:
        # Объект без наблюдаемого состояния (C-расширения, object())
        if left != right:
            yield Difference(path, left, right)
        return

    for name in list(left_state) + [n for n in right_state if n not in left_state]:
        yield from iter_differences(
            left_state.get(name, MISSING),
            right_state.get(name, MISSING),
            f"{path}.{name}",
            _visited,
        )


def deep_equal(left: Any, right: Any) -> bool:
    """
    Глубокое структурное равенство.

    Returns:
        True если iter_differences не находит ни одного расхождения
    """
    return next(iter_differences(left, right), None) is None
