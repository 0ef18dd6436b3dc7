from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from micromodel import ConfigurationError, RecordNotFound, Services
from deps import get_services
from models import Planet

router = APIRouter()


class PlanetPayload(BaseModel):
    name: str | None = None
    orbital_period: float | None = None
    discovered: date | None = None
    notes: str | None = None


def _get_planet(services, planet_id):
    try:
        return Planet(services, planet_id)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Planet not found")


def _save(planet, payload):
    planet.populate(payload.model_dump(exclude_unset=True))
    errors = planet.get_errors()
    if errors:
        raise HTTPException(status_code=422, detail=errors)
    return planet.save()


@router.get("/api/planets")
def list_planets(
    services: Services = Depends(get_services),
    name: str = Query(None),
    min_period: float = Query(None),
    order_by: str = Query("id"),
    order_dir: str = Query("ASC"),
):
    where = []
    if name:
        where.append(("name", "LIKE", f"%{name}%"))
    if min_period is not None:
        where.append(("orbital_period", ">=", min_period))
    try:
        planets = Planet(services).all(f"{order_by} {order_dir}", where)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [p.serialize() for p in planets]


@router.get("/api/planets/{planet_id}")
def get_planet(planet_id: int, services: Services = Depends(get_services)):
    return _get_planet(services, planet_id).serialize()


@router.get("/api/planets/{planet_id}/form")
def get_planet_form(planet_id: int, services: Services = Depends(get_services)):
    form = _get_planet(services, planet_id).get_form()
    return {
        "csrf_token": form.csrf_token,
        "fields": [
            {
                "name": f.name,
                "kind": f.kind.value,
                "label": f.label,
                "required": f.required,
                "value": f.view_data,
            }
            for f in form
        ],
    }


@router.post("/api/planets", status_code=201)
def create_planet(payload: PlanetPayload, services: Services = Depends(get_services)):
    planet = _save(Planet(services), payload)
    return planet.serialize()


@router.put("/api/planets/{planet_id}")
def update_planet(planet_id: int, payload: PlanetPayload, services: Services = Depends(get_services)):
    planet = _save(_get_planet(services, planet_id), payload)
    return planet.serialize()


@router.delete("/api/planets/{planet_id}")
def delete_planet(planet_id: int, services: Services = Depends(get_services)):
    _get_planet(services, planet_id).delete()
    return {"message": "Planet deleted"}
