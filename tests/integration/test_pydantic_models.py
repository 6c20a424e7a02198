"""
Тесты Option[T] как типа поля pydantic моделей

Проверяет:
- Валидацию из JSON и python (null → absent, значение → present)
- Сериализацию (значение или null)
- Round trip model_dump_json → model_validate_json
- Ошибки валидации
"""

import json
from datetime import datetime, timezone

import pytest
from pydantic import BaseModel, ValidationError

from options import Option


class Row(BaseModel):
    """Модель строки с опциональными колонками"""

    id: int
    num: Option[int]
    text: Option[str]
    ts: Option[datetime]
    blob: Option[bytes]
    note: Option[str] = Option.absent(str)

    model_config = {"frozen": True}


@pytest.fixture
def present_row() -> Row:
    return Row(
        id=1,
        num=Option.present(3),
        text=Option.present("hello"),
        ts=Option.present(datetime(2021, 2, 3, 4, 5, 6, tzinfo=timezone.utc)),
        blob=Option.present(b"world"),
    )


@pytest.fixture
def absent_row() -> Row:
    return Row(
        id=2,
        num=Option.absent(int),
        text=Option.absent(str),
        ts=Option.absent(datetime),
        blob=Option.absent(bytes),
    )


class TestOptionField:
    """Тесты Option[T] в pydantic моделях"""

    def test_validate_json(self) -> None:
        row = Row.model_validate_json(
            '{"id": 1, "num": 3, "text": null, "ts": "2021-02-03T04:05:06Z", "blob": null}'
        )
        assert row.num == Option.present(3)
        assert row.text.is_absent()
        assert row.text.element_type is str
        assert row.ts.unwrap() == datetime(2021, 2, 3, 4, 5, 6, tzinfo=timezone.utc)
        assert row.blob == Option.absent(bytes)
        assert row.note.is_absent()

    def test_validate_python_plain_values(self) -> None:
        """Python режим принимает значения T и None"""
        row = Row(id=1, num=3, text=None, ts=None, blob=b"x")
        assert row.num == Option.present(3)
        assert row.text.is_absent()
        assert row.blob == Option.present(b"x")

    def test_validate_python_options(self, present_row: Row) -> None:
        """Python режим принимает готовые Option"""
        assert present_row.num == Option.present(3)
        assert present_row.text.unwrap() == "hello"

    def test_validate_python_option_payload(self) -> None:
        """Значение готового Option проходит валидацию типа поля"""
        with pytest.raises(ValidationError):
            Row(id=1, num=Option.present("not an int"), text=None, ts=None, blob=None)

    def test_validate_python_option_retyped(self) -> None:
        """Option на входе пересобирается с типом элемента поля"""
        row = Row(id=1, num=Option.absent(), text=Option.present("x"), ts=None, blob=None)
        assert row.num.element_type is int
        assert row.text == Option.present("x")

    def test_dump_json(self, present_row: Row, absent_row: Row) -> None:
        """present → значение, absent → null"""
        assert json.loads(present_row.model_dump_json()) == {
            "id": 1,
            "num": 3,
            "text": "hello",
            "ts": "2021-02-03T04:05:06Z",
            "blob": "world",
            "note": None,
        }
        assert json.loads(absent_row.model_dump_json()) == {
            "id": 2,
            "num": None,
            "text": None,
            "ts": None,
            "blob": None,
            "note": None,
        }

    def test_dump_python(self, present_row: Row) -> None:
        data = present_row.model_dump()
        assert data["num"] == 3
        assert data["note"] is None

    @pytest.mark.parametrize("row_fixture", ["present_row", "absent_row"])
    def test_roundtrip(self, row_fixture: str, request: pytest.FixtureRequest) -> None:
        row = request.getfixturevalue(row_fixture)
        restored = Row.model_validate_json(row.model_dump_json())
        assert restored == row

    def test_invalid_value(self) -> None:
        with pytest.raises(ValidationError):
            Row.model_validate_json('{"id": 1, "num": "abc", "text": null, "ts": null, "blob": null}')

    def test_missing_required_field(self) -> None:
        """Поле Option[T] без default обязательно (null ≠ отсутствие поля)"""
        with pytest.raises(ValidationError):
            Row.model_validate_json('{"id": 1, "text": null, "ts": null, "blob": null}')
