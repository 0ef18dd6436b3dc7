import logging
import sqlite3
from datetime import date, datetime, time
from decimal import Decimal

import pytest

from micromodel.database import DatabaseEngine, bind_param


@pytest.fixture
def engine():
    with DatabaseEngine(":memory:", echo=False) as engine:
        engine.execute_script("CREATE TABLE item (id INTEGER PRIMARY KEY, label TEXT, seen TEXT);")
        yield engine


def test_bind_param_formats_temporal_values():
    moment = datetime(2012, 5, 1, 13, 30)
    assert bind_param(date(2012, 5, 1)) == "2012-05-01"
    assert bind_param(moment) == "2012-05-01 13:30:00"
    assert bind_param(moment, "date") == "2012-05-01"
    assert bind_param(moment, "time") == "13:30:00"
    assert bind_param(time(8, 15)) == "08:15:00"
    assert bind_param(Decimal("1.50")) == "1.50"
    assert bind_param("plain", "text") == "plain"


def test_prepared_statement_round_trip(engine):
    stmt = engine.prepare("INSERT INTO item (label, seen) VALUES (:label, :seen)")
    stmt.bind_value("label", "first").bind_value("seen", date(2020, 1, 2), "date").execute()
    assert stmt.last_insert_id == 1

    rows = engine.prepare("SELECT * FROM item").execute().fetch_all()
    assert rows == [{"id": 1, "label": "first", "seen": "2020-01-02"}]

    missing = engine.prepare("SELECT * FROM item WHERE id = :id").bind_value("id", 9).execute()
    assert missing.fetch_one() is None


def test_statement_keeps_its_own_insert_id(engine):
    first = engine.prepare("INSERT INTO item (label) VALUES (:label)").bind_value("label", "first")
    assert first.last_insert_id is None
    first.execute()
    engine.execute("INSERT INTO item (label) VALUES (:label)", {"label": "second"})
    assert first.last_insert_id == 1


def test_delete_reports_rowcount(engine):
    engine.execute("INSERT INTO item (label) VALUES (:label)", {"label": "x"})
    assert engine.delete("item", {"id": 1}) == 1
    assert engine.delete("item", {"id": 1}) == 0
    assert engine.fetch_all("SELECT * FROM item") == []


def test_statements_autocommit(tmp_path):
    path = str(tmp_path / "auto.sqlite")
    with DatabaseEngine(path, echo=False) as writer:
        writer.execute_script("CREATE TABLE item (id INTEGER PRIMARY KEY, label TEXT);")
        writer.execute("INSERT INTO item (label) VALUES (:label)", {"label": "kept"})
        with DatabaseEngine(path, echo=False) as reader:
            assert reader.fetch_one("SELECT label FROM item") == {"label": "kept"}


def test_database_errors_propagate(engine):
    with pytest.raises(sqlite3.OperationalError):
        engine.execute("SELECT * FROM nowhere")


def test_statements_are_logged(caplog):
    caplog.set_level(logging.INFO, logger="MicroModel")
    with DatabaseEngine(":memory:") as engine:
        engine.fetch_all("SELECT :n AS n", {"n": 1})
    assert "[SQL EXECUTE]: SELECT :n AS n | [PARAMS]: {'n': 1}" in caplog.text
