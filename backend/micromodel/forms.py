"""
Form projection of a model's fields.

A ``FormBuilder`` collects ``(name, kind, options)`` entries and produces a
``Form``: an ordered set of ``FormField`` objects carrying the bound data and
its display value, plus a pydantic model generated from the same entries that
checks submitted payloads against each field's constraints.
"""
import re
import secrets
from typing import Annotated, Optional

from pydantic import AfterValidator, Field, ValidationError, create_model
from pydantic_core import to_jsonable_python

from micromodel.constraints import NotBlank
from micromodel.orm_types import FieldKind

CSRF_FIELD = "_token"

# Options the form understands itself; everything else lands in json_schema_extra.
_SCHEMA_OPTIONS = ("label", "help", "required", "constraints")


class FormField:
    def __init__(self, name, kind, options, data=None):
        self.name = name
        self.kind = FieldKind.coerce(kind)
        self.options = dict(options or {})
        self.data = data

    def __repr__(self):
        return f"<FormField {self.name}:{self.kind.value} data={self.data!r}>"

    @property
    def label(self):
        return self.options.get("label", self.name.replace("_", " ").capitalize())

    @property
    def required(self):
        return bool(self.options.get("required", False))

    @property
    def view_data(self):
        if self.data is None:
            return None
        return to_jsonable_python(self.data)

    def annotation(self):
        metadata = []
        nullable = not self.required
        for constraint in self.options.get("constraints", []):
            if isinstance(constraint, NotBlank):
                metadata.append(AfterValidator(constraint.check))
                nullable = False
            else:
                metadata.append(constraint)
        annotation = self.kind.python_type
        if metadata:
            annotation = Annotated[tuple([annotation] + metadata)]
        return Optional[annotation] if nullable else annotation

    def field_info(self):
        extra = {k: v for k, v in self.options.items() if k not in _SCHEMA_OPTIONS}
        blank_forbidden = any(isinstance(c, NotBlank) for c in self.options.get("constraints", []))
        return Field(
            ... if self.required else None,
            validate_default=blank_forbidden,
            title=self.label,
            description=self.options.get("help"),
            json_schema_extra=to_jsonable_python(extra, fallback=repr) or None,
        )


class Form:
    def __init__(self, name, fields, csrf_protection=True):
        self.name = name
        self.fields = {f.name: f for f in fields}
        self.csrf_protection = csrf_protection
        self.csrf_token = secrets.token_urlsafe(16) if csrf_protection else None
        self.errors = {}
        self.submitted = False
        self._schema = None

    def __repr__(self):
        return f"<Form {self.name} fields=[{', '.join(self.fields)}]>"

    def __iter__(self):
        return iter(self.fields.values())

    def __getitem__(self, name):
        return self.fields[name]

    def __contains__(self, name):
        return name in self.fields

    def __len__(self):
        return len(self.fields)

    @property
    def schema(self):
        if self._schema is None:
            model_name = re.sub(r"\W", "", self.name.title()) or "Micro"
            definitions = {f.name: (f.annotation(), f.field_info()) for f in self}
            self._schema = create_model(f"{model_name}Form", **definitions)
        return self._schema

    @property
    def data(self):
        return {f.name: f.data for f in self}

    @property
    def view_data(self):
        return {f.name: f.view_data for f in self}

    def submit(self, payload, clear_missing=True):
        """Bind submitted values to the form, validating them on the way in."""
        payload = dict(payload or {})
        self.errors = {}
        self.submitted = True

        if self.csrf_protection:
            token = payload.pop(CSRF_FIELD, None)
            if token is None or not secrets.compare_digest(str(token), self.csrf_token):
                self.errors[CSRF_FIELD] = ["The CSRF token is invalid."]

        if not clear_missing:
            payload = {**self.data, **payload}

        try:
            validated = self.schema.model_validate(payload)
        except ValidationError as e:
            for error in e.errors():
                name = error["loc"][0] if error["loc"] else self.name
                self.errors.setdefault(name, []).append(error["msg"])
            return self

        if not self.errors:
            for name, value in validated.model_dump().items():
                self.fields[name].data = value
        return self

    def is_valid(self):
        return self.submitted and not self.errors


class FormBuilder:
    def __init__(self, name, data=None, options=None):
        self.name = name
        self.data = dict(data or {})
        self.options = dict(options or {})
        self._entries = []

    def add(self, name, kind="text", options=None):
        self._entries.append((name, kind, dict(options or {})))
        return self

    def get_form(self):
        fields = [
            FormField(name, kind, options, self.data.get(name))
            for name, kind, options in self._entries
        ]
        return Form(self.name, fields, csrf_protection=self.options.get("csrf_protection", True))


class FormFactory:
    def create_builder(self, name, data=None, options=None):
        return FormBuilder(name, data, options)
