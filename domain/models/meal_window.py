"""
Meal windows: the fixed minute-of-day intervals that map a clock time to a meal.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from domain.enums import Meal


@dataclass(frozen=True)
class MealWindow:
    """A named minute-of-day interval, inclusive on both ends."""

    meal: Meal
    start_minute: int
    end_minute: int

    def contains(self, minute_of_day: int) -> bool:
        return self.start_minute <= minute_of_day <= self.end_minute


# Checked in this order; the first match wins.
MEAL_WINDOWS: Tuple[MealWindow, ...] = (
    MealWindow(Meal.BREAKFAST, 450, 600),  # 07:30 - 10:00
    MealWindow(Meal.LUNCH, 720, 870),  # 12:00 - 14:30
    MealWindow(Meal.SNACKS, 1020, 1115),  # 17:00 - 18:35
    MealWindow(Meal.DINNER, 1170, 1290),  # 19:30 - 21:30
)


def window_for(minute_of_day: int) -> Optional[MealWindow]:
    """Return the window containing ``minute_of_day`` or None when no meal is served."""
    for window in MEAL_WINDOWS:
        if window.contains(minute_of_day):
            return window
    return None
