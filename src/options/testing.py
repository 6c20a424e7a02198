"""
Testing — Интеграция Option с pytest

- assert_option_equal: проверка равенства с подробным диффом
- explain_option_difference: построчное описание расхождений
- pytest_assertrepr_compare: hook pytest, подключается в conftest.py:

      from options.testing import pytest_assertrepr_compare  # noqa: F401

Дифф строится поле за полем через options.equality.iter_differences,
т.е. Option сначала превращается в nullable значение (options.pointer),
а затем сравнивается структурно.
"""

from typing import Any, List, Optional

from .equality import iter_differences
from .option import Option, pointer


def explain_option_difference(left: Option, right: Option) -> List[str]:
    """
    Описание расхождений двух Option.

    Returns:
        Строки отчёта; пустой список если Option равны
    """
    if left == right:
        return []

    lines = [f"{left!r} == {right!r}"]
    if left.is_present() != right.is_present():
        lines.append(
            f"presence differs: left is {'present' if left.is_present() else 'absent'}, "
            f"right is {'present' if right.is_present() else 'absent'}"
        )
        return lines

    for difference in iter_differences(pointer(left), pointer(right), path="value"):
        lines.append(f"  {difference.path}: {difference.left!r} != {difference.right!r}")
    return lines


def assert_option_equal(left: Option, right: Option) -> None:
    """
    Raises:
        AssertionError: С описанием расхождений, если Option не равны
    """
    lines = explain_option_difference(left, right)
    if lines:
        raise AssertionError("\n".join(lines))


def pytest_assertrepr_compare(op: str, left: Any, right: Any) -> Optional[List[str]]:
    if op == "==" and isinstance(left, Option) and isinstance(right, Option):
        return explain_option_difference(left, right) or None
    return None
