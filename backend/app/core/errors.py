"""Error taxonomy and the handlers that render it as the JSON envelope.

Every failure leaves the API as ``{"status": false, "message": ...}`` plus
``errors`` (field-level validation messages) or ``error`` (store failure text)
when there is something more to say.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        errors: Optional[List[Dict[str, Any]]] = None,
        error: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message or self.default_message
        self.errors = errors
        self.error = error
        self.headers = headers
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"status": False, "message": self.message}
        if self.errors is not None:
            body["errors"] = self.errors
        if self.error is not None:
            body["error"] = self.error
        return body


class ValidationFailed(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation errors"

    def __init__(self, fields: Mapping[str, str], message: Optional[str] = None, location: str = "body"):
        self.fields = dict(fields)
        errors = [{"field": f, "message": m, "location": location} for f, m in self.fields.items()]
        super().__init__(message, errors=errors)


class BadRequest(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class Unauthenticated(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Basic"})


class Forbidden(APIError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Endpoint not found"


class Internal(APIError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


def _field_message(err: Mapping[str, Any]) -> str:
    # Validators raise ValueError with the user-facing text; pydantic keeps it in ctx
    ctx = err.get("ctx") or {}
    if err.get("type") == "value_error" and ctx.get("error") is not None:
        return str(ctx["error"])
    return str(err.get("msg", "Invalid value"))


def validation_failed_from(exc: RequestValidationError) -> ValidationFailed:
    fields: Dict[str, str] = {}
    location = "body"
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ())]
        if loc:
            location = loc[0]
        name = ".".join(loc[1:]) or location
        # First failing rule per field wins
        fields.setdefault(name, _field_message(err))
    return ValidationFailed(fields, location=location)


def _render(exc: APIError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(exc.to_body()),
        headers=exc.headers,
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return _render(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _render(validation_failed_from(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return _render(NotFound())
    error = APIError(str(exc.detail), headers=getattr(exc, "headers", None))
    error.status_code = exc.status_code
    return _render(error)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _render(Internal())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
