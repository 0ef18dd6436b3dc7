class MicroModelError(Exception):
    """Base class for every error raised by micromodel."""


class ConfigurationError(MicroModelError):
    pass


class UnknownFieldError(MicroModelError, KeyError):
    def __init__(self, name, model=None):
        self.name = name
        self.model = model
        where = f" on {model}" if model else ""
        super().__init__(f"Field '{name}' is not registered{where}")

    def __str__(self):
        return self.args[0]


class RecordNotFound(MicroModelError, LookupError):
    def __init__(self, table_name, clauses):
        self.table_name = table_name
        self.clauses = clauses
        super().__init__(f"No row in '{table_name}' matches {clauses!r}")
