"""Commit history models."""

from datetime import date, datetime, tzinfo
from typing import List, Optional

from pydantic import BaseModel

# English names regardless of the process locale
DAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class CommitRecord(BaseModel):
    """A commit parsed from ``git log --pretty=format:%s|%an|%ct``."""

    message: str
    author: str
    timestamp: int  # Epoch seconds

    def local_time(self, tz: Optional[tzinfo] = None) -> datetime:
        """Get the commit time in ``tz`` (system local zone by default)."""
        return datetime.fromtimestamp(self.timestamp, tz=tz).astimezone(tz)

    def time_label(self, tz: Optional[tzinfo] = None) -> str:
        """Format the commit time like ``2:05 PM``."""
        moment = self.local_time(tz)
        hour = moment.hour % 12 or 12
        suffix = "AM" if moment.hour < 12 else "PM"
        return f"{hour}:{moment.minute:02d} {suffix}"


class DayGroup(BaseModel):
    """Commits made on one local calendar day."""

    day: date
    commits: List[CommitRecord] = []

    @property
    def is_empty(self) -> bool:
        return not self.commits

    @property
    def label(self) -> str:
        """Format the day like ``Sunday, 10 March 2024``."""
        day = self.day
        return (
            f"{DAY_NAMES[day.weekday()]}, {day.day} "
            f"{MONTH_NAMES[day.month - 1]} {day.year}"
        )
