from micromodel import MicroModel
from micromodel.constraints import Gt, MaxLen, NotBlank
from micromodel.setters import strip, to_date, to_float

SCHEMA = """
CREATE TABLE IF NOT EXISTS planet (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    orbital_period REAL,
    discovered TEXT,
    notes TEXT
);
"""


class Planet(MicroModel):
    def register_fields(self):
        (self.register_primary_key("id")
            .register("name", "text", label="Name", setter=strip,
                      constraints=[NotBlank(), MaxLen(64)])
            .register("orbital_period", "number", label="Orbital period (days)", setter=to_float,
                      constraints=[Gt(0)])
            .register("discovered", "date", setter=to_date, help="First recorded observation")
            .register("notes", "textarea", display=False))
