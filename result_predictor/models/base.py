# result_predictor/models/base.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime


def _utcnow():
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_on = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_on = Column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )
