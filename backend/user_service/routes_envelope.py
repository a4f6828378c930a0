"""Envelope-style user endpoints.

Every request is `{requestId, requestTime, data: {username, name, phone}}`
and every response is an envelope carrying a two-digit `responseCode`:

| code | meaning |
|------|---------|
| 00 | success |
| 01 / 02 / 03 | blank username / name / phone |
| 04 | duplicate username (create) |
| 05 | insert failed (create) |
| 07 | user not found (search) |
| 09 | user not found (update) |
| 10 | update or delete failed |

Failures that have no code for an operation (e.g. deleting an unknown
username) are returned as a plain `{"error": ...}` body. All failures use
HTTP 400.
"""

import uuid
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from . import models
from .deps import get_user_service
from .errors import BlankFieldError, DuplicateError, NotFoundError, ServiceError, StorageError
from .routes_rest import error_response, list_users
from .schemas import EnvelopeData, EnvelopeIn, EnvelopeOut
from .services import UserService, trim

router = APIRouter(tags=["users-envelope"])

SUCCESS = "00"
SUCCESS_MESSAGE = "Success"
BLANK_CODES = {"username": "01", "name": "02", "phone": "03"}
FAILURE_CODES = {
    "create": {DuplicateError: "04", StorageError: "05"},
    "search": {NotFoundError: "07"},
    "update": {NotFoundError: "09", StorageError: "10"},
    "delete": {StorageError: "10"},
}


def response_code(operation: str, exc: ServiceError) -> Optional[str]:
    """Map a service error to the envelope code for `operation`, if any."""
    if isinstance(exc, BlankFieldError):
        return BLANK_CODES[exc.field]
    for error_type, code in FAILURE_CODES[operation].items():
        if isinstance(exc, error_type):
            return code
    return None


def envelope(payload: EnvelopeIn, code: str, message: str, data: Optional[EnvelopeData] = None, status_code: int = 200) -> JSONResponse:
    out = EnvelopeOut(
        response_id=payload.request_id or uuid.uuid4().hex,
        response_time=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        response_code=code,
        response_message=message,
        data=data or EnvelopeData(),
    )
    return JSONResponse(status_code=status_code, content=out.model_dump(by_alias=True))


def user_data(user: models.User) -> EnvelopeData:
    return EnvelopeData(username=user.username, name=user.name, phone=user.phone)


def failure(operation: str, payload: EnvelopeIn, exc: ServiceError) -> JSONResponse:
    code = response_code(operation, exc)
    if code is None:
        return error_response(exc)
    return envelope(payload, code, exc.message, status_code=400)


@router.post("/v1/users")
def create_user(payload: EnvelopeIn, svc: UserService = Depends(get_user_service)):
    data = payload.data
    try:
        user = svc.create(data.username, data.name, data.phone)
    except ServiceError as e:
        return failure("create", payload, e)
    return envelope(payload, SUCCESS, SUCCESS_MESSAGE, user_data(user))


# listing is identical in both shapes
router.add_api_route("/v1/users", list_users, methods=["GET"])


@router.post("/search-user")
def search_user(payload: EnvelopeIn, svc: UserService = Depends(get_user_service)):
    """Look a user up by `data.username`."""
    try:
        user = svc.get_by_username(payload.data.username)
    except ServiceError as e:
        return failure("search", payload, e)
    return envelope(payload, SUCCESS, SUCCESS_MESSAGE, user_data(user))


@router.post("/update-user")
def update_user(payload: EnvelopeIn, svc: UserService = Depends(get_user_service)):
    """Overwrite name and phone of the user named in `data.username`."""
    data = payload.data
    try:
        user = svc.update_by_username(data.username, data.name, data.phone)
    except ServiceError as e:
        return failure("update", payload, e)
    return envelope(payload, SUCCESS, SUCCESS_MESSAGE, user_data(user))


@router.delete("/v1/users")
def delete_user(payload: EnvelopeIn, svc: UserService = Depends(get_user_service)):
    try:
        svc.delete_by_username(payload.data.username)
    except ServiceError as e:
        return failure("delete", payload, e)
    return envelope(payload, SUCCESS, SUCCESS_MESSAGE, EnvelopeData(username=trim(payload.data.username)))
