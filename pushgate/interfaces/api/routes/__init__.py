from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from .push_notifications import request_validation_error_handler
from .push_notifications import router as push_notifications_router


def register_routes(app: FastAPI) -> None:
    """Registra todos los routers de la API en la aplicación FastAPI."""

    app.include_router(push_notifications_router)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
