import sqlite3
import logging
from datetime import date, datetime, time
from decimal import Decimal

from micromodel.builder import QueryBuilder
from micromodel.orm_types import FieldKind


def bind_param(value, kind=None):
    """Convert a value to something sqlite3 binds natively.

    Temporal values are stored as ISO-8601 text, formatted by the field kind
    when one is given.
    """
    if kind is not None:
        kind = FieldKind.coerce(kind)
    if isinstance(value, datetime):
        if kind is FieldKind.DATE:
            return value.date().isoformat()
        if kind is FieldKind.TIME:
            return value.time().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    return value


class Statement:
    """A prepared statement collecting named parameters before execution."""

    def __init__(self, engine, sql):
        self.engine = engine
        self.sql = sql
        self.params = {}
        self._cursor = None

    def __repr__(self):
        return f"<Statement {self.sql} params={self.params}>"

    def bind_value(self, name, value, kind=None):
        self.params[name] = bind_param(value, kind)
        return self

    def execute(self):
        self._cursor = self.engine.execute(self.sql, self.params)
        return self

    @property
    def rowcount(self):
        return self._cursor.rowcount if self._cursor is not None else -1

    @property
    def last_insert_id(self):
        return self._cursor.lastrowid if self._cursor is not None else None

    def fetch_all(self):
        return [dict(row) for row in self._cursor.fetchall()]

    def fetch_one(self):
        row = self._cursor.fetchone()
        return dict(row) if row is not None else None


class DatabaseEngine:
    logger = logging.getLogger("MicroModel")

    def __init__(self, db_path=":memory:", echo=True, **connect_kwargs):
        if not self.logger.handlers and not logging.getLogger().handlers:
            logging.basicConfig(level=logging.INFO)
        self.db_path = db_path
        self.echo = echo
        self.connection = sqlite3.connect(db_path, isolation_level=None, **connect_kwargs)
        self.connection.row_factory = sqlite3.Row
        self.query_builder = QueryBuilder()

    def __repr__(self):
        return f"<DatabaseEngine {self.db_path}>"

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _log(self, sql, params=None):
        if not self.echo:
            return
        msg = f"[SQL EXECUTE]: {sql}"
        if params:
            msg += f" | [PARAMS]: {params}"
        self.logger.info(msg)

    def prepare(self, sql):
        return Statement(self, sql)

    def execute(self, sql, params=None):
        self._log(sql, params)
        cursor = self.connection.cursor()
        cursor.execute(sql, params or {})
        return cursor

    def execute_script(self, sql):
        self._log(sql)
        self.connection.executescript(sql)

    def fetch_all(self, sql, params=None):
        return [dict(row) for row in self.execute(sql, params).fetchall()]

    def fetch_one(self, sql, params=None):
        row = self.execute(sql, params).fetchone()
        return dict(row) if row is not None else None

    def delete(self, table_name, criteria):
        sql, params = self.query_builder.build_delete(table_name, criteria)
        return self.execute(sql, params).rowcount

    def close(self):
        self.connection.close()
