"""Habit definition models"""
from typing import Literal, Optional, Union
from pydantic import BaseModel, ConfigDict

HabitType = Literal["boolean", "counter", "duration"]
HabitCategory = Literal["fitness", "nutrition", "wellness", "discipline"]

# Display order of categories
HABIT_CATEGORIES: tuple[str, ...] = ("fitness", "nutrition", "wellness", "discipline")

Number = Union[int, float]


class HabitFields(BaseModel):
    """Everything about a habit except its id (the payload for creating one)"""
    model_config = ConfigDict(extra="ignore")

    name: str
    emoji: str = "💪"
    type: HabitType = "boolean"
    target: Optional[Number] = None  # counter/duration: value that completes the day
    unit: Optional[str] = None  # "glasses", "hours", ...
    category: HabitCategory = "fitness"
    color: str = "#f59e0b"


class Habit(HabitFields):
    """A trackable habit"""
    id: str

    @property
    def is_numeric(self) -> bool:
        """Counter and duration habits accumulate a value"""
        return self.type in ("counter", "duration")
