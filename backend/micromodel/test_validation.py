import pytest

from micromodel import MicroModel
from micromodel.constraints import Gt, Interval, MaxLen, MinLen, NotBlank, StringConstraints
from micromodel.validation import Validator
from models import Planet


class Note(MicroModel):
    def register_fields(self):
        self.register_primary_key("id")
        self.register("body", "textarea")
        self.register("priority", "integer")


@pytest.fixture
def validator():
    return Validator()


def test_constraint_passes(validator):
    assert validator.validate_value("Mars", MinLen(2), "text") == []
    assert validator.validate_value(5, Gt(0), "integer") == []


def test_constraint_fails_with_messages(validator):
    messages = validator.validate_value("M", MinLen(2), "text")
    assert len(messages) == 1
    assert "at least 2" in messages[0]


def test_none_passes_everything_but_not_blank(validator):
    assert validator.validate_value(None, Gt(0), "number") == []
    assert validator.validate_value(None, NotBlank(), "text") == ["This value should not be blank."]
    assert validator.validate_value("   ", NotBlank(), "text") != []
    assert validator.validate_value("x", NotBlank(), "text") == []


def test_wrong_type_is_a_violation(validator):
    assert validator.validate_value("many", Gt(0), "number") != []


def test_pydantic_string_constraints(validator):
    pattern = StringConstraints(pattern=r"^[A-Z]")
    assert validator.validate_value("Mars", pattern, "text") == []
    assert validator.validate_value("mars", pattern, "text") != []


def test_fields_without_constraints_are_always_valid(services):
    note = Note(services).set("body", None).set("priority", "not a number")
    assert note.is_valid()
    assert note.get_errors() == {}


def test_valid_planet(services):
    planet = Planet(services).set("name", "Mars").set("orbital_period", 686.98)
    assert planet.is_valid()
    assert planet.get_errors() == {}


def test_errors_are_grouped_by_field_and_constraint(services):
    planet = Planet(services).set("name", "x" * 70).set("orbital_period", -1)
    assert not planet.is_valid()

    errors = planet.get_errors()
    assert set(errors) == {"name", "orbital_period"}
    assert list(errors["name"]) == ["MaxLen"]
    assert list(errors["orbital_period"]) == ["Gt"]
    assert "greater than 0" in errors["orbital_period"]["Gt"][0]


def test_every_failing_constraint_is_reported(services):
    planet = Planet(services).set("name", "")
    planet.fields()["name"].constraints.append(MinLen(3))
    errors = planet.get_errors()
    assert set(errors["name"]) == {"NotBlank", "MinLen"}


def test_validation_reads_current_values_not_the_table(seeded):
    planet = Planet(seeded, 1)
    assert planet.is_valid()
    planet["orbital_period"] = 0
    assert not planet.is_valid()
    assert Planet(seeded, 1).is_valid()


def test_writes_do_not_validate(services):
    planet = Planet(services).set("name", "").create()
    assert planet.pk == 1
    assert not Planet(services, 1).is_valid()


def test_interval_on_integer(validator):
    assert validator.validate_value(3, Interval(ge=1, le=5), "integer") == []
    assert validator.validate_value(9, Interval(ge=1, le=5), "integer") != []
    assert validator.validate_value("abc", MaxLen(2), "text") != []
