"""Built-in habit catalog and category presentation attributes"""
from habit_tracker.models.habit import Habit

DEFAULT_HABITS: list[Habit] = [
    # FITNESS
    Habit(id="gym", name="Gym Session", emoji="🏋️", type="boolean", category="fitness", color="#10b981"),
    Habit(id="boxing", name="Boxing", emoji="🥊", type="boolean", category="fitness", color="#ef4444"),
    Habit(id="cardio", name="Cardio", emoji="🏃", type="boolean", category="fitness", color="#6366f1"),
    Habit(id="stretching", name="Stretching", emoji="🧘", type="boolean", category="fitness", color="#ec4899"),

    # NUTRITION
    Habit(id="creatine", name="Creatine", emoji="💊", type="boolean", category="nutrition", color="#f59e0b"),
    Habit(id="protein", name="Protein Shake", emoji="🥤", type="boolean", category="nutrition", color="#f97316"),
    Habit(id="vitamins", name="Vitamins", emoji="💊", type="boolean", category="nutrition", color="#eab308"),
    Habit(id="clean-eating", name="Clean Eating", emoji="🥗", type="boolean", category="nutrition", color="#22c55e"),

    # WELLNESS
    Habit(
        id="water",
        name="Water",
        emoji="💧",
        type="counter",
        target=8,
        unit="glasses",
        category="wellness",
        color="#0ea5e9",
    ),
    Habit(id="sleep", name="Sleep 7+ hrs", emoji="😴", type="boolean", category="wellness", color="#8b5cf6"),

    # DISCIPLINE
    Habit(id="no-junk", name="No Junk Food", emoji="📵", type="boolean", category="discipline", color="#f43f5e"),
    Habit(id="no-alcohol", name="No Alcohol", emoji="🚫", type="boolean", category="discipline", color="#a855f7"),
]

CATEGORY_LABELS: dict[str, str] = {
    "fitness": "💪 Fitness",
    "nutrition": "🥗 Nutrition",
    "wellness": "✨ Wellness",
    "discipline": "🎯 Discipline",
}

CATEGORY_COLORS: dict[str, str] = {
    "fitness": "#10b981",
    "nutrition": "#f59e0b",
    "wellness": "#0ea5e9",
    "discipline": "#a855f7",
}


def default_habits() -> list[Habit]:
    """Fresh copies of the built-in catalog (callers may mutate them)"""
    return [habit.model_copy() for habit in DEFAULT_HABITS]
