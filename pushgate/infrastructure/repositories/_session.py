"""Session helpers shared by the repositories."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session


@contextmanager
def rollback_on_error(session: Session) -> Iterator[Session]:
    """Roll back ``session`` when a database error escapes the block."""

    try:
        yield session
    except SQLAlchemyError:
        session.rollback()
        raise
