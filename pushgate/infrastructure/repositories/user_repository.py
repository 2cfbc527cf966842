"""Read access to the user attributes used for audience segments."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from pushgate.infrastructure.models import UserModel

from ._session import rollback_on_error

_SEGMENT_COLUMNS = {
    "role": UserModel.role,
    "subscription_plan": UserModel.subscription_plan,
}


class UserRepository:
    """Resolve user identifiers for audience predicates."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_ids_matching(self, attribute: str, values: Iterable[str]) -> Sequence[str]:
        """Return ids of users whose ``attribute`` is one of ``values``."""

        column = _SEGMENT_COLUMNS.get(attribute)
        if column is None:
            raise ValueError(f"Unsupported user attribute '{attribute}'")
        allowed = list(values)
        if not allowed:
            return []
        query = (
            self.session.query(UserModel.id)
            .filter(column.in_(allowed))
            .order_by(UserModel.id)
        )
        with rollback_on_error(self.session):
            rows = query.all()
        return [str(row.id) for row in rows]

    def create(
        self,
        *,
        user_id: str,
        role: str = "user",
        subscription_plan: str | None = None,
        email: str | None = None,
    ) -> str:
        model = UserModel(id=user_id, role=role, subscription_plan=subscription_plan, email=email)
        with rollback_on_error(self.session):
            self.session.add(model)
            self.session.commit()
        return user_id


__all__ = ["UserRepository"]
