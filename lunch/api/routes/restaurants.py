from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from lunch.domain.errors import DuplicateNameError, NoCandidatesError, NotFoundError
from lunch.infra.Lunch_Store import LunchStore
from lunch.utilities.validators import RestaurantInput, RollInput

router = APIRouter(prefix="/api")


def get_store(request: Request) -> LunchStore:
    """The single store owned by the application (see create_app)."""
    return request.app.state.store


def _already_exists(e: DuplicateNameError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": f"Restaurant '{e.name}' already exists"})


@router.get("/restaurants")
def list_restaurants(category: Optional[str] = Query(default=None), store: LunchStore = Depends(get_store)):
    """All restaurants sorted by name, or only those in ``category`` (any casing)."""
    if category:
        restaurants = store.list_by_category(category)
    else:
        restaurants = store.list_all()
    return [r.to_dict() for r in restaurants]


@router.post("/restaurants")
def add_restaurant(payload: RestaurantInput, store: LunchStore = Depends(get_store)):
    try:
        store.add(payload.name, payload.category)
    except DuplicateNameError as e:
        return _already_exists(e)
    return {"status": "success"}


@router.put("/restaurants/{name:path}")
def update_restaurant(name: str, payload: RestaurantInput, store: LunchStore = Depends(get_store)):
    try:
        store.update(name, payload.name, payload.category)
    except NotFoundError as e:
        return JSONResponse(status_code=404, content={"error": f"Restaurant '{e.name}' not found"})
    except DuplicateNameError as e:
        return _already_exists(e)
    return {"status": "success"}


@router.delete("/restaurants/{name:path}")
def delete_restaurant(name: str, store: LunchStore = Depends(get_store)):
    store.delete(name)
    return {"status": "success"}


@router.post("/roll")
def roll_lunch(payload: RollInput, store: LunchStore = Depends(get_store)):
    try:
        chosen = store.roll(payload.category)
    except NoCandidatesError:
        return JSONResponse(status_code=404, content={"error": "No restaurants found!"})
    return chosen.to_dict()


@router.get("/history")
def recent_history(store: LunchStore = Depends(get_store)):
    """Recent picks, newest first."""
    return [pick.to_dict() for pick in store.recent_picks()]
