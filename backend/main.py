from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from micromodel import Services
from micromodel.config import get_settings

from models import SCHEMA
from endpoints.planets_endpoints import router as planets_router


def create_app(services=None):
    app = FastAPI(title="Planets")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if services is None:
        # Sync endpoints run on worker threads.
        services = Services.from_settings(get_settings(), check_same_thread=False)
    services.db.execute_script(SCHEMA)
    app.state.services = services

    app.include_router(planets_router)
    return app


app = create_app()
