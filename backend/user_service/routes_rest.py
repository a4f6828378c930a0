"""REST-style user endpoints.

Endpoints implemented:
- POST /v1/users
- GET /v1/users?page&limit
- GET /v1/users/{user_id}
- PUT /v1/users/{user_id}
- DELETE /v1/users/{user_id}

Successful responses are `{"data": ...}`; every handled failure is a
400 with `{"error": "<message>"}`.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from .deps import get_user_service
from .errors import ServiceError
from .schemas import UserIn
from .services import UserService, parse_id

router = APIRouter(prefix="/v1/users", tags=["users"])


def error_response(exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": exc.message})


@router.post("")
def create_user(payload: UserIn, svc: UserService = Depends(get_user_service)):
    """Create a user and return its new id."""
    try:
        user = svc.create(payload.username, payload.name, payload.phone)
    except ServiceError as e:
        return error_response(e)
    return {"data": user.id}


@router.get("")
def list_users(page: int = 0, limit: int = 0, svc: UserService = Depends(get_user_service)):
    """List users newest first.

    `page` and `limit` fall back to the configured defaults when missing
    or not positive. `paging.total` counts every stored user.
    """
    try:
        users, paging = svc.list(page, limit)
    except ServiceError as e:
        return error_response(e)
    return {"data": [u.model_dump() for u in users], "paging": paging.model_dump()}


@router.get("/{user_id}")
def read_user(user_id: str, svc: UserService = Depends(get_user_service)):
    try:
        user = svc.get(parse_id(user_id))
    except ServiceError as e:
        return error_response(e)
    return {"data": user.model_dump()}


@router.put("/{user_id}")
def update_user(user_id: str, payload: UserIn, svc: UserService = Depends(get_user_service)):
    """Replace username, name and phone of an existing user."""
    try:
        svc.update(parse_id(user_id), payload.username, payload.name, payload.phone)
    except ServiceError as e:
        return error_response(e)
    return {"data": True}


@router.delete("/{user_id}")
def delete_user(user_id: str, svc: UserService = Depends(get_user_service)):
    try:
        svc.delete(parse_id(user_id))
    except ServiceError as e:
        return error_response(e)
    return {"data": True}
