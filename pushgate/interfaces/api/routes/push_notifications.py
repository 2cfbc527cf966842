"""Ruta para despachar notificaciones push a los dispositivos registrados."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pushgate.application.use_cases.push_notifications import send_push_notification
from pushgate.domain.exceptions import NotificationNotFoundError, NotificationStatusConflictError
from pushgate.infrastructure.database import get_db
from pushgate.infrastructure.push import PushChannelConfig
from pushgate.interfaces.api.dependencies import get_push_channel_config
from pushgate.interfaces.api.schemas import (
    DispatchErrorResponse,
    SendPushNotificationRequest,
    SendPushNotificationResponse,
)

router = APIRouter(tags=["push-notifications"])
logger = logging.getLogger(__name__)


def _error_response(message: str) -> JSONResponse:
    body = DispatchErrorResponse(error=message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(),
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Responde a cuerpos inválidos con el mismo formato de error del envío."""

    logger.warning("Invalid push dispatch request on %s: %s", request.url.path, exc.errors())
    return _error_response("Invalid request body")


@router.post(
    "/send-push-notification",
    response_model=SendPushNotificationResponse,
    response_model_exclude_unset=True,
    responses={500: {"model": DispatchErrorResponse}},
)
def dispatch_push_notification(
    payload: SendPushNotificationRequest,
    db: Session = Depends(get_db),
    config: PushChannelConfig = Depends(get_push_channel_config),
):
    """Envía la notificación indicada y devuelve el conteo de entregas."""

    notification_id = (payload.notification_id or "").strip()
    if not notification_id:
        return _error_response("notification_id is required")

    try:
        result = send_push_notification(db, notification_id, config=config)
    except (NotificationNotFoundError, NotificationStatusConflictError) as exc:
        logger.warning("Push dispatch rejected: %s (%s)", exc, notification_id)
        return _error_response(str(exc))
    except SQLAlchemyError:
        logger.exception("Push dispatch failed for notification %s", notification_id)
        return _error_response("Notification store unavailable")

    return SendPushNotificationResponse(**result.to_payload())
