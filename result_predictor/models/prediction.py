# result_predictor/models/prediction.py
from sqlalchemy import Column, JSON, String

from result_predictor.database import Base
from result_predictor.models.base import TimestampMixin


class PredictionList(Base, TimestampMixin):
    """
    The full list of prediction records owned by one user identity.
    The list is always read and written as a whole.
    """

    __tablename__ = "prediction_lists"

    user_id = Column(String, primary_key=True, comment="Authenticated user identity")
    records = Column(JSON, nullable=False, default=list)
