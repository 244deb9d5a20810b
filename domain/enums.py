"""
Domain enums for MealTrack.
Contains the enumeration types used across the attendance models.
"""

import enum


class Meal(str, enum.Enum):
    """Meals served in a day, in classification order"""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    SNACKS = "Snacks"
    DINNER = "Dinner"


class Presence(str, enum.Enum):
    """Attendance status of one person for one meal"""

    PRESENT = "Present"
    ABSENT = "Absent"
