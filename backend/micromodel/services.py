import logging

from micromodel.config import get_settings
from micromodel.database import DatabaseEngine
from micromodel.exceptions import ConfigurationError
from micromodel.forms import FormFactory
from micromodel.validation import Validator

REQUIRED_SERVICES = {
    "db": DatabaseEngine,
    "validator": Validator,
    "form_factory": FormFactory,
}


class Services:
    """The collaborators a model needs: database engine, validator and form factory."""

    def __init__(self, db, validator=None, form_factory=None, settings=None):
        self.db = db
        self.validator = validator if validator is not None else Validator()
        self.form_factory = form_factory if form_factory is not None else FormFactory()
        self.settings = settings if settings is not None else get_settings()

    def __repr__(self):
        return f"<Services db={self.db!r}>"

    @classmethod
    def from_settings(cls, settings=None, **connect_kwargs):
        settings = settings or get_settings()
        logging.getLogger("MicroModel").setLevel(settings.log_level.upper())
        engine = DatabaseEngine(settings.db_path, echo=settings.sql_echo, **connect_kwargs)
        return cls(engine, settings=settings)

    def check(self):
        for name, expected in REQUIRED_SERVICES.items():
            service = getattr(self, name, None)
            if service is None:
                raise ConfigurationError(f"Services must provide '{name}' ({expected.__name__})")
            if not isinstance(service, expected):
                raise ConfigurationError(
                    f"Service '{name}' must be a {expected.__name__}, got {type(service).__name__}"
                )
        return self
