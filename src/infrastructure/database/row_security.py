"""Row-level write authorization enforced at flush time.

Every session flush checks each new, modified and deleted row of an owned
table against the principal bound to the session. A violation aborts the flush
before any SQL is emitted.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import event, inspect
from sqlalchemy.orm import Session

from domain.policies import WriteAction, authorize_write
from infrastructure.database.models import Base

PRINCIPAL_KEY = "acting_principal_id"


def bind_principal(session: Session, principal_id: UUID) -> None:
    """Attach the acting principal to a (sync) session."""
    session.info[PRINCIPAL_KEY] = principal_id


def get_principal(session: Session) -> UUID | None:
    """Return the principal bound to a session, if any."""
    return session.info.get(PRINCIPAL_KEY)


def _owner_values(obj: Base, column: str) -> tuple[Any, Any]:
    """Return (stored owner, pending owner) for a mapped object."""
    attr = inspect(obj).attrs[column]
    history = attr.history
    if history.deleted:
        stored = history.deleted[0]
    elif history.unchanged:
        stored = history.unchanged[0]
    else:
        stored = attr.value
    return stored, attr.value


def check_row_security(session: Session) -> None:
    """Authorize every pending write in ``session`` against its bound principal."""
    principal_id = get_principal(session)

    for obj in session.new:
        column = getattr(obj, "__owner_column__", None)
        if column:
            authorize_write(obj.__tablename__, WriteAction.INSERT, principal_id, getattr(obj, column))

    for obj in session.dirty:
        column = getattr(obj, "__owner_column__", None)
        if not column:
            continue
        stored, pending = _owner_values(obj, column)
        authorize_write(obj.__tablename__, WriteAction.UPDATE, principal_id, stored)
        if pending != stored:
            authorize_write(obj.__tablename__, WriteAction.INSERT, principal_id, pending)

    for obj in session.deleted:
        column = getattr(obj, "__owner_column__", None)
        if column:
            stored, _ = _owner_values(obj, column)
            authorize_write(obj.__tablename__, WriteAction.DELETE, principal_id, stored)


@event.listens_for(Session, "before_flush")
def _before_flush(session: Session, flush_context: Any, instances: Any) -> None:
    check_row_security(session)
