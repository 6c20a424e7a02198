"""
Интеграционные тесты Option с SQLAlchemy + SQLite (in-memory)

INSERT строки с колонками из Option → SELECT обратно →
Option должны совпасть с исходными поле за полем.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Iterator

import pytest
from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Integer,
    LargeBinary,
    MetaData,
    String,
    Table,
    Time,
    create_engine,
    select,
)
from sqlalchemy.engine import Connection

from options import Option
from options.column import OptionType

metadata = MetaData()

test_table = Table(
    "test",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("num", OptionType(Integer, int)),
    Column("text", OptionType(String, str)),
    Column("ts", OptionType(DateTime, datetime)),
    Column("blob", OptionType(LargeBinary, bytes)),
)

calendar_table = Table(
    "calendar",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("day", OptionType(Date, date)),
    Column("at", OptionType(Time, time)),
)


@dataclass
class Row:
    id: int
    num: Option
    text: Option
    ts: Option
    blob: Option


@pytest.fixture
def connection() -> Iterator[Connection]:
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        metadata.create_all(conn)
        yield conn
    engine.dispose()


def insert_row(conn: Connection, row: Row) -> None:
    conn.execute(
        test_table.insert(),
        {"id": row.id, "num": row.num, "text": row.text, "ts": row.ts, "blob": row.blob},
    )


def select_row(conn: Connection, row_id: int) -> Row:
    result = conn.execute(select(test_table).where(test_table.c.id == row_id)).one()
    return Row(**result._mapping)


class TestSqlRoundTrip:
    """Тесты INSERT → SELECT"""

    @pytest.mark.parametrize(
        "inserted",
        [
            Row(
                id=1,
                num=Option.present(3),
                text=Option.present("hello"),
                ts=Option.present(datetime(2021, 2, 3, 4, 5, 6, 789000)),
                blob=Option.present(b"world"),
            ),
            Row(
                id=1,
                num=Option.absent(int),
                text=Option.absent(str),
                ts=Option.absent(datetime),
                blob=Option.absent(bytes),
            ),
        ],
        ids=["present", "absent"],
    )
    def test_roundtrip(self, connection: Connection, inserted: Row) -> None:
        insert_row(connection, inserted)
        selected = select_row(connection, inserted.id)
        assert selected == inserted

    def test_selected_element_types(self, connection: Connection) -> None:
        """Прочитанные absent значения несут тип элемента колонки"""
        insert_row(
            connection,
            Row(
                id=1,
                num=Option.absent(int),
                text=Option.absent(str),
                ts=Option.absent(datetime),
                blob=Option.absent(bytes),
            ),
        )
        selected = select_row(connection, 1)
        assert repr(selected.num) == "Option.absent(int)"
        assert repr(selected.ts) == "Option.absent(datetime)"

    def test_bind_plain_values(self, connection: Connection) -> None:
        """Значения без Option: None → NULL, иначе present"""
        connection.execute(
            test_table.insert(),
            {"id": 5, "num": 7, "text": None, "ts": None, "blob": b"raw"},
        )
        selected = select_row(connection, 5)
        assert selected.num == Option.present(7)
        assert selected.text == Option.absent(str)
        assert selected.blob == Option.present(b"raw")

    def test_null_stored(self, connection: Connection) -> None:
        """absent хранится как NULL"""
        insert_row(
            connection,
            Row(
                id=3,
                num=Option.absent(int),
                text=Option.present("x"),
                ts=Option.absent(datetime),
                blob=Option.absent(bytes),
            ),
        )
        raw = connection.exec_driver_sql("SELECT num, text FROM test WHERE id = 3").one()
        assert raw[0] is None
        assert raw[1] == "x"


class TestCalendarColumns:
    """Date и Time колонки: драйвер отдаёт date и time"""

    def test_roundtrip_present(self, connection: Connection) -> None:
        connection.execute(
            calendar_table.insert(),
            {"id": 1, "day": Option.present(date(2024, 1, 2)), "at": Option.present(time(4, 5, 6))},
        )
        row = connection.execute(select(calendar_table)).one()
        assert row.day == Option.present(date(2024, 1, 2))
        assert row.at == Option.present(time(4, 5, 6))

    def test_roundtrip_absent(self, connection: Connection) -> None:
        connection.execute(
            calendar_table.insert(),
            {"id": 1, "day": Option.absent(date), "at": Option.absent(time)},
        )
        row = connection.execute(select(calendar_table)).one()
        assert row.day == Option.absent(date)
        assert row.at.element_type is time
