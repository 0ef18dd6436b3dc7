"""
Constraint objects accepted by ``register(..., constraints=[...])``.

Any metadata pydantic understands inside ``Annotated`` works as a constraint;
the common ones are re-exported here so models only import from one place.
``NotBlank`` is the one constraint that rejects missing values: every other
constraint lets ``None`` through.
"""
from annotated_types import Ge, Gt, Interval, Le, Len, Lt, MaxLen, MinLen, MultipleOf
from pydantic import AfterValidator, StringConstraints


class NotBlank:
    def __init__(self, message="This value should not be blank."):
        self.message = message

    def __repr__(self):
        return "NotBlank()"

    def check(self, value):
        if isinstance(value, str) and not value.strip():
            raise ValueError(self.message)
        return value


def constraint_kind(constraint):
    return type(constraint).__name__


__all__ = [
    "AfterValidator",
    "Ge",
    "Gt",
    "Interval",
    "Le",
    "Len",
    "Lt",
    "MaxLen",
    "MinLen",
    "MultipleOf",
    "NotBlank",
    "StringConstraints",
    "constraint_kind",
]
