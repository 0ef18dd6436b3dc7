from datetime import date, datetime, time
from enum import Enum

from micromodel.exceptions import ConfigurationError


class FieldKind(Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    EMAIL = "email"
    PASSWORD = "password"
    HIDDEN = "hidden"
    URL = "url"
    CHOICE = "choice"
    INTEGER = "integer"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"

    @classmethod
    def coerce(cls, kind):
        if isinstance(kind, cls):
            return kind
        try:
            return cls(str(kind).lower())
        except ValueError:
            raise ConfigurationError(f"Unknown field kind: {kind!r}") from None

    @property
    def python_type(self):
        return _PYTHON_TYPES.get(self, str)

    @property
    def is_temporal(self):
        return self in (FieldKind.DATE, FieldKind.DATETIME, FieldKind.TIME)


_PYTHON_TYPES = {
    FieldKind.INTEGER: int,
    FieldKind.NUMBER: float,
    FieldKind.CHECKBOX: bool,
    FieldKind.DATE: date,
    FieldKind.DATETIME: datetime,
    FieldKind.TIME: time,
}


class FieldDescriptor:
    """Metadata and current value for one table column."""

    def __init__(self, name, kind=FieldKind.TEXT, value=None, setter=None,
                 displayable=True, constraints=None, primary_key=False, options=None):
        if setter is not None and not callable(setter):
            raise ConfigurationError(f"Setter for field '{name}' must be callable")
        self.name = name
        self.kind = FieldKind.coerce(kind)
        self.value = value
        self.setter = setter
        self.displayable = displayable
        self.constraints = list(constraints or [])
        self.primary_key = primary_key
        self.options = dict(options or {})

    def __repr__(self):
        pk = " pk" if self.primary_key else ""
        return f"<FieldDescriptor {self.name}:{self.kind.value}{pk} value={self.value!r}>"

    def assign(self, raw):
        self.value = self.setter(raw) if self.setter is not None else raw

    def form_options(self):
        """Options handed to the form builder: everything but the mapper-private keys."""
        options = dict(self.options)
        if self.constraints:
            options["constraints"] = list(self.constraints)
        return options
