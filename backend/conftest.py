import pytest

from micromodel import DatabaseEngine, MicroModel, Services
from micromodel.config import Settings
from models import SCHEMA, Planet


class Moon(MicroModel):
    """Key registered explicitly after another field."""

    class Meta:
        table_name = "moons"

    def register_fields(self):
        self.register("name", "text")
        self.register_primary_key("moon_id")
        self.register("planet_id", "integer")


@pytest.fixture
def settings():
    return Settings(db_path=":memory:", sql_echo=False, log_level="DEBUG")


@pytest.fixture
def services(settings):
    engine = DatabaseEngine(":memory:", echo=False, check_same_thread=False)
    engine.execute_script(SCHEMA)
    engine.execute_script(
        "CREATE TABLE moons (moon_id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT, planet_id INTEGER);"
    )
    yield Services(engine, settings=settings)
    engine.close()


@pytest.fixture
def seeded(services):
    rows = [
        ("Mercury", 87.97, None),
        ("Venus", 224.7, "1610-12-01"),
        ("Earth", 365.25, None),
    ]
    for name, period, discovered in rows:
        services.db.execute(
            "INSERT INTO planet (name, orbital_period, discovered) VALUES (:name, :period, :discovered)",
            {"name": name, "period": period, "discovered": discovered},
        )
    return services


@pytest.fixture
def planet(services):
    return Planet(services)
