# MicroModel - a single-table active-record mapper with form and validation support
from micromodel.base import MicroModel
from micromodel.database import DatabaseEngine
from micromodel.exceptions import ConfigurationError, MicroModelError, RecordNotFound, UnknownFieldError
from micromodel.forms import Form, FormFactory
from micromodel.orm_types import FieldDescriptor, FieldKind
from micromodel.registry import FieldRegistry
from micromodel.services import Services
from micromodel.validation import Validator

__version__ = "0.1.0"
__all__ = [
    "MicroModel",
    "DatabaseEngine",
    "Services",
    "Validator",
    "Form",
    "FormFactory",
    "FieldDescriptor",
    "FieldKind",
    "FieldRegistry",
    "MicroModelError",
    "ConfigurationError",
    "UnknownFieldError",
    "RecordNotFound",
]
