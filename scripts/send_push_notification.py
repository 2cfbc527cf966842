"""Utility script to dispatch a push notification from the command line."""

from __future__ import annotations

import argparse
import json
import logging

from sqlalchemy.exc import SQLAlchemyError

from pushgate.application.use_cases.push_notifications import send_push_notification
from pushgate.config import get_settings
from pushgate.domain.exceptions import NotificationNotFoundError
from pushgate.infrastructure.database import SessionLocal, initialize_database
from pushgate.infrastructure.push import PushChannelConfig


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for a single dispatch."""

    parser = argparse.ArgumentParser(
        description="Send a stored push notification to its audience.",
    )
    parser.add_argument("notification_id", help="Identificador de la notificación a enviar")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Número de envíos concurrentes (por defecto: PUSH_DISPATCH_MAX_WORKERS)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Muestra el detalle de cada envío en la consola.",
    )
    return parser.parse_args()


def main() -> None:
    """Dispatch the notification given on the command line and print the tally."""

    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = get_settings()
    if args.workers is not None:
        if args.workers < 1:
            raise SystemExit("--workers debe ser mayor o igual a 1.")
        settings = settings.model_copy(update={"push_dispatch_max_workers": args.workers})
    config = PushChannelConfig.from_settings(settings)

    initialize_database()

    session = SessionLocal()
    try:
        result = send_push_notification(session, args.notification_id, config=config)
    except NotificationNotFoundError as exc:
        raise SystemExit(f"No se pudo enviar la notificación: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error al acceder a la base de datos: {exc}") from exc
    else:
        print(json.dumps(result.to_payload(), indent=2))
    finally:
        session.close()


if __name__ == "__main__":
    main()
