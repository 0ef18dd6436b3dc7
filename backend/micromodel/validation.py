from typing import Annotated, Any, Optional

from pydantic import AfterValidator, TypeAdapter, ValidationError

from micromodel.constraints import NotBlank
from micromodel.orm_types import FieldKind


class Validator:
    """Evaluates one value against one constraint using pydantic."""

    def annotation_for(self, constraint, kind=None):
        python_type = FieldKind.coerce(kind).python_type if kind is not None else Any
        if isinstance(constraint, NotBlank):
            return Annotated[python_type, AfterValidator(constraint.check)]
        return Optional[Annotated[python_type, constraint]]

    def validate_value(self, value, constraint, kind=None):
        """Return the list of violation messages, empty when the value passes."""
        if isinstance(constraint, NotBlank) and value is None:
            return [constraint.message]
        adapter = TypeAdapter(self.annotation_for(constraint, kind))
        try:
            adapter.validate_python(value)
        except ValidationError as e:
            return [error["msg"] for error in e.errors()]
        return []
