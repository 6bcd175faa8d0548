"""Diary API endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from src.api.dependencies import get_current_user, get_diary_service, read_image
from src.models.enums import Feeling, OpenType, Weather
from src.models.user import User
from src.schemas.diary import DiaryInput, DiaryMonthlyResponse, DiaryResponse, LikeResponse
from src.services.diary_service import DiaryService

router = APIRouter(prefix="/api/v1/diary", tags=["diary"])


def diary_form(
    diary_date: Annotated[date, Form(alias="date")],
    title: Annotated[str, Form(max_length=100)] = "",
    content: Annotated[str | None, Form()] = None,
    weather: Annotated[Weather, Form()] = Weather.SUNNY,
    feeling: Annotated[Feeling, Form()] = Feeling.HAPPY,
    open_type: Annotated[OpenType, Form()] = OpenType.PRIVATE,
) -> DiaryInput:
    """Collect the multipart diary fields sent next to the optional image."""
    return DiaryInput(
        date=diary_date,
        title=title,
        content=content,
        weather=weather,
        feeling=feeling,
        open_type=open_type,
    )


@router.post("", response_model=DiaryResponse, status_code=status.HTTP_201_CREATED)
async def add_diary(
    data: Annotated[DiaryInput, Depends(diary_form)],
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[DiaryService, Depends(get_diary_service)],
    image: Annotated[UploadFile | None, File()] = None,
):
    """Write a diary for a date, optionally with an image.

    Note: This endpoint must remain async because UploadFile.read() is async.
    """
    diary = service.add_diary(current_user, data, await read_image(image))
    return service.to_response(diary, current_user)


@router.get("/month", response_model=DiaryMonthlyResponse)
def get_monthly_diaries(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[DiaryService, Depends(get_diary_service)],
    year_month: Annotated[str, Query(alias="date", description="YYYY-MM")],
    user_id: int | None = None,
):
    """Get a month of diaries keyed by day; defaults to the current user's calendar."""
    owner_id = user_id if user_id is not None else current_user.id
    return service.find_diary_by_month(year_month, owner_id, current_user)


@router.get("/friend/{diary_id}", response_model=DiaryResponse)
def get_friend_diary(
    diary_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[DiaryService, Depends(get_diary_service)],
):
    """Read another user's diary if its visibility allows it."""
    return service.find_friend_diary(diary_id, current_user)


@router.get("/{diary_date}", response_model=DiaryResponse | None)
def get_diary(
    diary_date: date,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[DiaryService, Depends(get_diary_service)],
):
    """Get the current user's diary for a date (null when none was written)."""
    return service.find_diary(diary_date, current_user)


@router.put("/{diary_id}", response_model=DiaryResponse)
async def update_diary(
    diary_id: int,
    data: Annotated[DiaryInput, Depends(diary_form)],
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[DiaryService, Depends(get_diary_service)],
    image: Annotated[UploadFile | None, File()] = None,
):
    """Edit a diary; a new image replaces the previous one.

    Note: This endpoint must remain async because UploadFile.read() is async.
    """
    diary = service.update_diary(diary_id, current_user, data, await read_image(image))
    return service.to_response(diary, current_user)


@router.delete("/{diary_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_diary(
    diary_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[DiaryService, Depends(get_diary_service)],
):
    """Soft delete a diary (author only)."""
    service.delete_diary(diary_id, current_user)


@router.put("/{diary_id}/like", response_model=LikeResponse)
def like_diary(
    diary_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[DiaryService, Depends(get_diary_service)],
):
    """Toggle the current user's like on a diary."""
    return service.like_diary(diary_id, current_user)
