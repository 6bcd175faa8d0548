"""Diary schemas."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import DiaryStatus, Feeling, OpenType, Weather


class DiaryInput(BaseModel):
    """Fields submitted when writing or editing a diary.

    The API receives these as multipart form fields alongside an optional
    image, so the title is not length-checked here: a blank title is rejected
    by the service with a domain error.
    """

    date: dt.date
    title: str = ""
    content: str | None = None
    weather: Weather = Weather.SUNNY
    feeling: Feeling = Feeling.HAPPY
    open_type: OpenType = OpenType.PRIVATE


class DiaryResponse(BaseModel):
    """A single diary with like information for the requester."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    date: dt.date
    title: str
    content: str | None
    weather: Weather
    feeling: Feeling
    open_type: OpenType
    image: str | None
    status: DiaryStatus
    created_at: dt.datetime
    updated_at: dt.datetime
    like_count: int = 0
    is_liked: bool = False


class DiaryMonthlyItem(BaseModel):
    """Calendar cell summary for one day."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    date: dt.date
    title: str
    weather: Weather
    feeling: Feeling
    open_type: OpenType
    image: str | None


class DiaryMonthlyResponse(BaseModel):
    """Diaries of one month keyed by day of month; days without a diary are absent."""

    user_id: int
    year_month: str = Field(..., pattern=r"^\d{4}-\d{2}$")
    diaries: dict[int, DiaryMonthlyItem]


class LikeResponse(BaseModel):
    """State after a like toggle."""

    diary_id: int
    is_liked: bool
    like_count: int
