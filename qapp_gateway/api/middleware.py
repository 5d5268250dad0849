import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from qapp_gateway.external.control_plane_client import ControlPlaneError

logger = logging.getLogger(__name__)


def _error_response(message: str, status_code: int, headers=None) -> PlainTextResponse:
    # Les erreurs sont renvoyées en texte brut, suivies d'un saut de ligne
    return PlainTextResponse(f"{message}\n", status_code=status_code, headers=headers)


def _format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "invalid request"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(str(exc.detail), exc.status_code, getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = _format_validation_errors(exc)
    logger.info(f"Requête invalide sur {request.url.path}: {message}")
    return _error_response(message, status.HTTP_400_BAD_REQUEST)


async def control_plane_exception_handler(request: Request, exc: ControlPlaneError):
    logger.error(f"Erreur qappctl sur {request.method} {request.url.path}: {exc}")
    return _error_response(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)


def setup_middlewares(app: FastAPI) -> None:
    """Enregistre la traduction des exceptions en réponses HTTP"""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ControlPlaneError, control_plane_exception_handler)
