"""
Тесты для pytest интеграции (options.testing)
"""

import pytest

from options import Option
from options.testing import (
    assert_option_equal,
    explain_option_difference,
    pytest_assertrepr_compare,
)


class Node:
    def __init__(self, value, child=None):
        self.value = value
        self.child = child


class TestExplainOptionDifference:
    """Тесты построения отчёта о расхождениях"""

    def test_equal_options(self) -> None:
        assert explain_option_difference(Option.present(1), Option.present(1)) == []
        assert explain_option_difference(Option.absent(int), Option.absent(int)) == []

    def test_presence_mismatch(self) -> None:
        lines = explain_option_difference(Option.present(1), Option.absent(int))
        assert lines[0] == "Option.present(1) == Option.absent(int)"
        assert lines[1] == "presence differs: left is present, right is absent"

    def test_field_by_field(self) -> None:
        """Дифф поле за полем для вложенных структур"""
        left = Option.present(Node("test", Node("test")))
        right = Option.present(Node("test", Node("test2")))
        lines = explain_option_difference(left, right)
        assert "  value.child.value: 'test' != 'test2'" in lines
        assert len(lines) == 2


class TestAssertOptionEqual:
    """Тесты assert_option_equal"""

    def test_passes(self) -> None:
        assert_option_equal(Option.present([1]), Option.present([1]))

    def test_fails(self) -> None:
        with pytest.raises(AssertionError, match=r"value\[0\]: 1 != 2"):
            assert_option_equal(Option.present([1]), Option.present([2]))


class TestAssertReprHook:
    """Тесты hook-а pytest_assertrepr_compare"""

    def test_hook_for_options(self) -> None:
        lines = pytest_assertrepr_compare("==", Option.present(1), Option.present(2))
        assert lines is not None
        assert "  value: 1 != 2" in lines

    def test_hook_ignores_other_values(self) -> None:
        assert pytest_assertrepr_compare("==", 1, 2) is None
        assert pytest_assertrepr_compare("!=", Option.present(1), Option.present(1)) is None
