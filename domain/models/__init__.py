"""
Domain models package - plain value objects used by the aggregation core.
"""

from domain.models.meal_window import MealWindow, MEAL_WINDOWS, window_for

__all__ = [
    "MealWindow",
    "MEAL_WINDOWS",
    "window_for",
]
