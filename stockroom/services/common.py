# stockroom/services/common.py
#
# Small helpers shared by the service modules.

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockroom.core.errors import InvalidInputError, NotFoundError


def require_row(db: Session, model, pk: int, label: str):
    row = db.get(model, pk)

    if row is None:
        raise NotFoundError(f"{label} #{pk} not found")

    return row


def commit(db: Session, *rows) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    for row in rows:
        db.refresh(row)


def apply_updates(row, updates: dict, required: tuple = ()) -> None:
    for field, value in updates.items():
        if value is None and field in required:
            raise InvalidInputError(f"{field} cannot be empty")
        setattr(row, field, value)
