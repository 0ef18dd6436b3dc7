import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping

from pydantic_core import to_json, to_jsonable_python

from micromodel.constraints import constraint_kind
from micromodel.exceptions import ConfigurationError, RecordNotFound
from micromodel.orm_types import FieldDescriptor
from micromodel.registry import FieldRegistry
from micromodel.services import Services

logger = logging.getLogger("MicroModel")


class MicroModel(ABC):
    """Active-record mapper for a single table.

    Subclasses implement ``register_fields`` and call ``register`` once per
    column. The table name is ``Meta.table_name`` when given, otherwise the
    lower-cased class name.
    """

    def __init__(self, services, clauses=None):
        if not isinstance(services, Services):
            raise ConfigurationError(
                f"{type(self).__name__} needs a Services container, got {type(services).__name__}"
            )
        self._services = services.check()
        self._db = services.db
        self._fields = FieldRegistry(owner=type(self).__name__)

        self.register_fields()

        if clauses is not None:
            self.read(clauses)

    def __repr__(self):
        return f"<{type(self).__name__}({self.primary_key}={self.pk!r})>"

    def __getitem__(self, name):
        return self.get(name)

    def __setitem__(self, name, value):
        self.set(name, value)

    def __delitem__(self, name):
        self.unset(name)

    def __contains__(self, name):
        return self.contains(name)

    def __iter__(self):
        return iter(self._fields)

    @abstractmethod
    def register_fields(self):
        """Register every column of the table, primary key first."""

    @classmethod
    def table_name(cls):
        meta = getattr(cls, "Meta", None)
        return getattr(meta, "table_name", None) or cls.__name__.lower()

    def register(self, name, kind="text", **options):
        setter = options.pop("setter", None)
        displayable = options.pop("display", True)
        value = options.pop("value", None)
        constraints = options.pop("constraints", None)
        primary_key = options.pop("primary_key", False)
        self._fields.add(FieldDescriptor(
            name, kind, value=value, setter=setter, displayable=displayable,
            constraints=constraints, primary_key=primary_key, options=options,
        ))
        return self

    def register_primary_key(self, name, kind="integer", **options):
        return self.register(name, kind, primary_key=True, **options)

    # Attribute access

    @property
    def primary_key(self):
        return self._fields.primary_key

    @property
    def pk(self):
        return self._fields.value(self.primary_key)

    def fields(self):
        return self._fields

    def get(self, name):
        return self._fields.value(name)

    def set(self, name, value):
        self._fields.assign(name, value)
        return self

    def contains(self, name):
        return name in self._fields

    def unset(self, name):
        self._fields.reset(name)
        return self

    def items(self):
        return [(name, d.value) for name, d in self._fields.items()]

    def populate(self, data):
        for key, value in data.items():
            if key in self._fields:
                self._fields.assign(key, value)
            else:
                logger.debug(f"{type(self).__name__}: skipping unregistered column '{key}'")
        return self

    def spawn(self):
        """A fresh, empty instance of the same model sharing these services."""
        return type(self)(self._services)

    # Reads

    def _where_clauses(self, clauses):
        if isinstance(clauses, Mapping):
            return [(field, "=", value) for field, value in clauses.items()]
        if isinstance(clauses, (list, tuple)):
            return list(clauses)
        return [(self.primary_key, "=", clauses)]

    def _bind_where(self, stmt, params):
        for name, value in params.items():
            stmt.bind_value(name, value)
        return stmt

    def all(self, order=None, where=None):
        sql, params = self._db.query_builder.build_select(self.table_name(), where=where, order=order)
        stmt = self._bind_where(self._db.prepare(sql), params).execute()
        return [self.spawn().populate(row) for row in stmt.fetch_all()]

    def count(self, where=None):
        sql, params = self._db.query_builder.build_count(self.table_name(), where=where)
        row = self._bind_where(self._db.prepare(sql), params).execute().fetch_one()
        return row["total"]

    def read(self, clauses):
        where = self._where_clauses(clauses)
        if not where:
            raise ConfigurationError(f"{type(self).__name__}.read() needs at least one clause")
        sql, params = self._db.query_builder.build_select(self.table_name(), where=where)
        row = self._bind_where(self._db.prepare(sql), params).execute().fetch_one()
        if row is None:
            logger.debug(f"{type(self).__name__}: no row for {clauses!r}")
            raise RecordNotFound(self.table_name(), clauses)

        for name in self._fields:
            self._fields.assign(name, row.get(name))
        return self

    # Writes

    def _bind_fields(self, stmt, items):
        for name, descriptor in items:
            stmt.bind_value(name, descriptor.value, descriptor.kind)
        return stmt

    def create(self):
        pk = self.primary_key
        items = list(self._fields.items())
        sql, _ = self._db.query_builder.build_insert(
            self.table_name(), {name: None for name, _ in items}
        )
        stmt = self._bind_fields(self._db.prepare(sql), items).execute()
        self.set(pk, stmt.last_insert_id)
        return self

    def update(self):
        pk = self.primary_key
        items = self._fields.non_key_items()
        if not items:
            logger.debug(f"{type(self).__name__}: nothing to update besides '{pk}'")
            return self
        sql, _ = self._db.query_builder.build_update(
            self.table_name(), {name: None for name, _ in items}, pk, None
        )
        stmt = self._db.prepare(sql)
        stmt.bind_value(pk, self.pk, self._fields[pk].kind)
        self._bind_fields(stmt, items).execute()
        return self

    def delete(self):
        self._db.delete(self.table_name(), {self.primary_key: self.pk})
        return self

    def save(self):
        return self.create() if self.pk is None else self.update()

    # Forms and validation

    def get_form(self, csrf_protection=None):
        if csrf_protection is None:
            csrf_protection = self._services.settings.csrf_protection
        builder = self._services.form_factory.create_builder(
            self.table_name(),
            self._fields.values_by_name(),
            {"csrf_protection": csrf_protection},
        )
        for name, descriptor in self._fields.non_key_items():
            if not descriptor.displayable:
                continue
            builder.add(name, descriptor.kind, descriptor.form_options())
        return builder.get_form()

    def _violations(self):
        validator = self._services.validator
        for name, descriptor in self._fields.items():
            for constraint in descriptor.constraints:
                messages = validator.validate_value(descriptor.value, constraint, descriptor.kind)
                if messages:
                    yield name, constraint, messages

    def is_valid(self):
        for _ in self._violations():
            return False
        return True

    def get_errors(self):
        errors = {}
        for name, constraint, messages in self._violations():
            errors.setdefault(name, {}).setdefault(constraint_kind(constraint), []).extend(messages)
        return errors

    # Serialization

    def serialize(self):
        pk = self.primary_key
        data = {pk: to_jsonable_python(self.pk)}
        for name, descriptor in self._fields.non_key_items():
            if descriptor.displayable:
                data[name] = to_jsonable_python(descriptor.value)
        return data

    def to_json(self):
        return to_json(self.serialize()).decode()
