# app/repositories/record_repo.py
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.models.record import Collection, Record

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class StoreOutcome:
    """
    Result of a write or clear.

    The store never raises on write failures; callers inspect `ok`
    and decide whether to surface the problem.
    """

    ok: bool
    error: str | None = None

    @classmethod
    def success(cls) -> "StoreOutcome":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str) -> "StoreOutcome":
        return cls(ok=False, error=error)


class RecordRepository:
    """
    Whole-collection key/value persistence.

    - One JSON blob per Collection key.
    - Reads return None for a missing, unreadable or mis-shaped blob.
    - Writes overwrite the full blob; last writer wins.
    - No business logic (seeding, lookups) lives here.
    """

    # ----- Reads -----

    def _read_raw(self, session: Session, key: Collection) -> str | None:
        try:
            record = session.get(Record, key.value)
        except SQLAlchemyError:
            logger.exception("Record store read failed for %s", key.value)
            return None
        return record.value if record else None

    def read_list(self, session: Session, key: Collection, item_type: type[T]) -> list[T] | None:
        """
        Read a collection blob as a list of `item_type`.

        Returns:
            The decoded list, or None if there is no usable blob.
        """
        raw = self._read_raw(session, key)
        if raw is None:
            return None
        try:
            return TypeAdapter(list[item_type]).validate_json(raw)
        except ValidationError as e:
            logger.warning(
                "Discarding unreadable %s blob (%d errors)", key.value, e.error_count()
            )
            return None

    def read_one(self, session: Session, key: Collection, model: type[T]) -> T | None:
        """Read a single-record blob (the current session slot)."""
        raw = self._read_raw(session, key)
        if raw is None:
            return None
        try:
            return model.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(
                "Discarding unreadable %s blob (%d errors)", key.value, e.error_count()
            )
            return None

    # ----- Writes -----

    def write(self, session: Session, key: Collection, value: Any) -> StoreOutcome:
        """
        Serialize `value` (a model or a list of models) and overwrite the blob.
        """
        try:
            payload = to_json(value).decode("utf-8")
        except PydanticSerializationError as e:
            logger.error("Could not serialize %s: %s", key.value, e)
            return StoreOutcome.failure(str(e))

        try:
            record = session.get(Record, key.value)
            if record is None:
                record = Record(key=key.value, value=payload)
            else:
                record.value = payload
                record.updated_at = datetime.now(timezone.utc)
            session.add(record)
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.exception("Record store write failed for %s", key.value)
            return StoreOutcome.failure(str(e))

        return StoreOutcome.success()

    def clear(self, session: Session, key: Collection) -> StoreOutcome:
        """Delete the blob; clearing an absent key succeeds."""
        try:
            record = session.get(Record, key.value)
            if record is not None:
                session.delete(record)
                session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.exception("Record store clear failed for %s", key.value)
            return StoreOutcome.failure(str(e))

        return StoreOutcome.success()
