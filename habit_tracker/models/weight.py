"""Body-weight tracking models"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from uuid import uuid4

from habit_tracker.models.habit import Number


class WeightLog(BaseModel):
    """A point-in-time body-weight measurement"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    date: str  # YYYY-MM-DD (UTC+05:30), several entries per day allowed
    weight: Number  # kilograms
    updated_at: int
