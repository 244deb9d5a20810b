from pydantic import BaseModel, ConfigDict, Field
from typing import List
from datetime import date, datetime

from domain.enums import Presence


class CheckInRecord(BaseModel):
    """One timestamped swipe as stored in the check-in collection.

    Field aliases are the stored document keys; the Python names are accepted
    as well so records can be built directly in code.
    """

    identifier_id: str = Field(..., alias="uniqueId", description="Card or person identifier")
    display_name: str = Field(..., alias="name", description="Name shown in the summary")
    roll_number: str = Field(..., alias="rollNo", description="Roll number used by the filter")
    timestamp: datetime = Field(..., alias="date", description="Full date-time of the swipe")
    time: str = Field(..., description="12-hour clock string, e.g. '08:15 am'")

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class AttendanceRow(BaseModel):
    """Presence of one person across the four meals of one calendar day"""

    identifier_id: str = Field(..., alias="uniqueId")
    display_name: str = Field(..., alias="name")
    roll_number: str = Field(..., alias="rollNo")
    calendar_day: date = Field(..., alias="date")
    breakfast: Presence = Field(Presence.ABSENT, alias="Breakfast")
    lunch: Presence = Field(Presence.ABSENT, alias="Lunch")
    snacks: Presence = Field(Presence.ABSENT, alias="Snacks")
    dinner: Presence = Field(Presence.ABSENT, alias="Dinner")

    model_config = ConfigDict(frozen=True, populate_by_name=True, use_enum_values=True)


class MealTotals(BaseModel):
    """Distinct (person, day) pairs present for each meal"""

    breakfast: int = Field(0, ge=0, alias="Breakfast")
    lunch: int = Field(0, ge=0, alias="Lunch")
    snacks: int = Field(0, ge=0, alias="Snacks")
    dinner: int = Field(0, ge=0, alias="Dinner")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class AttendanceSummary(BaseModel):
    """Presence rows plus per-meal headcounts for one date window"""

    rows: List[AttendanceRow] = Field(default_factory=list)
    totals: MealTotals = Field(default_factory=MealTotals)

    model_config = ConfigDict(populate_by_name=True)
