"""Diary service: write, edit, delete, like and read diaries.

Visibility of someone else's diary follows one rule, applied to single
reads, likes and monthly calendars alike: the owner always sees their diary,
anyone sees a PUBLIC diary, and confirmed friends also see FRIEND diaries.
PRIVATE diaries are visible to the owner only.
"""

import logging
import re
from calendar import monthrange
from datetime import date

from sqlalchemy import func
from sqlalchemy.orm import Session

from src.exceptions import BadRequestError, ForbiddenError, NotFoundError
from src.models.diary import Diary, LikeDiary
from src.models.enums import OpenType
from src.models.user import User
from src.schemas.diary import (
    DiaryInput,
    DiaryMonthlyItem,
    DiaryMonthlyResponse,
    DiaryResponse,
    LikeResponse,
)
from src.services.friend_service import are_friends
from src.services.image_service import ImageService, ImageUpload
from src.services.user_service import get_active_user

logger = logging.getLogger(__name__)

YEAR_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def parse_year_month(value: str) -> tuple[date, date]:
    """Turn ``YYYY-MM`` into the first and last day of that month."""
    match = YEAR_MONTH_PATTERN.match(value or "")
    if not match:
        raise BadRequestError("Month must be formatted as YYYY-MM")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise BadRequestError("Month must be between 01 and 12")
    try:
        return date(year, month, 1), date(year, month, monthrange(year, month)[1])
    except ValueError as e:
        raise BadRequestError(f"Invalid month {value}") from e


class DiaryService:
    """Service for diary entries and their likes."""

    def __init__(self, db: Session, image_service: ImageService | None = None):
        self.db = db
        self.image_service = image_service or ImageService()

    # --- Lookups ---

    def _active_diary_on(self, user_id: int, day: date) -> Diary | None:
        return (
            self.db.query(Diary)
            .filter(Diary.user_id == user_id, Diary.date == day, Diary.deleted_at.is_(None))
            .first()
        )

    def _get_diary(self, diary_id: int) -> Diary:
        """Get a diary that exists and is not deleted."""
        diary = self.db.query(Diary).filter(Diary.id == diary_id).first()
        if diary is None:
            raise NotFoundError("Diary not found")
        if diary.is_deleted:
            raise NotFoundError("Diary has already been deleted")
        return diary

    def _like_count(self, diary_id: int) -> int:
        return (
            self.db.query(func.count())
            .select_from(LikeDiary)
            .filter(LikeDiary.diary_id == diary_id)
            .scalar()
            or 0
        )

    def _get_like(self, user_id: int, diary_id: int) -> LikeDiary | None:
        return self.db.get(LikeDiary, (user_id, diary_id))

    def to_response(self, diary: Diary, user: User) -> DiaryResponse:
        response = DiaryResponse.model_validate(diary)
        response.like_count = self._like_count(diary.id)
        response.is_liked = self._get_like(user.id, diary.id) is not None
        return response

    def can_view(self, diary: Diary, user: User) -> bool:
        """Apply the visibility rule for ``user`` reading ``diary``."""
        if diary.user_id == user.id:
            return True
        if diary.open_type == OpenType.PUBLIC:
            return True
        if diary.open_type == OpenType.PRIVATE:
            return False
        return are_friends(self.db, user.id, diary.user_id)

    # --- Mutations ---

    def add_diary(self, user: User, data: DiaryInput, image: ImageUpload | None = None) -> Diary:
        """Write the user's diary for a date."""
        if not data.title.strip():
            raise BadRequestError("Diary title is required")

        if self._active_diary_on(user.id, data.date) is not None:
            logger.warning(f"User {user.id} already has a diary on {data.date}")
            raise BadRequestError("A diary already exists for this date")

        diary = Diary(
            user_id=user.id,
            date=data.date,
            title=data.title,
            content=data.content,
            weather=data.weather,
            feeling=data.feeling,
            open_type=data.open_type,
        )

        if image is not None and image.data:
            diary.image = self.image_service.upload_image(image.data, image.content_type)

        self.db.add(diary)
        self.db.commit()
        self.db.refresh(diary)
        logger.info(f"User {user.id} wrote diary {diary.id} for {diary.date}")
        return diary

    def update_diary(
        self,
        diary_id: int,
        user: User,
        data: DiaryInput,
        image: ImageUpload | None = None,
    ) -> Diary:
        """Edit an existing diary owned by the user."""
        diary = self._get_diary(diary_id)

        if diary.user_id != user.id:
            logger.warning(f"User {user.id} tried to edit diary {diary_id} of user {diary.user_id}")
            raise ForbiddenError("Only the author can edit this diary")

        other = self._active_diary_on(user.id, data.date)
        if other is not None and other.id != diary.id:
            raise BadRequestError("A diary already exists for this date")

        if not data.title.strip():
            raise BadRequestError("Diary title is required")

        # Store the new image before touching the row; a rejected upload leaves it as it was
        replaced_image = None
        if image is not None and image.data:
            new_image = self.image_service.upload_image(image.data, image.content_type)
            replaced_image, diary.image = diary.image, new_image

        diary.title = data.title
        diary.content = data.content
        diary.date = data.date
        diary.weather = data.weather
        diary.feeling = data.feeling
        diary.open_type = data.open_type

        self.db.commit()
        self.db.refresh(diary)

        if replaced_image:
            self.image_service.delete_image(replaced_image)
        logger.info(f"User {user.id} updated diary {diary.id}")
        return diary

    def delete_diary(self, diary_id: int, user: User) -> None:
        """Soft-delete a diary, dropping its image and likes."""
        diary = self._get_diary(diary_id)

        if diary.user_id != user.id:
            raise ForbiddenError("Only the author can delete this diary")

        image_url, diary.image = diary.image, None

        self.db.query(LikeDiary).filter(LikeDiary.diary_id == diary.id).delete(
            synchronize_session=False
        )
        diary.soft_delete()
        self.db.commit()

        # Only drop the file once the row no longer references it
        if image_url:
            self.image_service.delete_image(image_url)
        logger.info(f"User {user.id} deleted diary {diary.id}")

    def like_diary(self, diary_id: int, user: User) -> LikeResponse:
        """Toggle the user's like on a diary they can see."""
        diary = self._get_diary(diary_id)

        if not self.can_view(diary, user):
            raise ForbiddenError("You cannot like this diary")

        like = self._get_like(user.id, diary.id)
        if like is not None:
            self.db.delete(like)
            liked = False
        else:
            self.db.add(LikeDiary(user_id=user.id, diary_id=diary.id))
            liked = True
        self.db.commit()

        return LikeResponse(diary_id=diary.id, is_liked=liked, like_count=self._like_count(diary.id))

    # --- Reads ---

    def find_diary(self, day: date, user: User) -> DiaryResponse | None:
        """The user's own diary for a date, or None."""
        diary = self._active_diary_on(user.id, day)
        if diary is None:
            return None
        return self.to_response(diary, user)

    def find_friend_diary(self, diary_id: int, user: User) -> DiaryResponse:
        """Someone's diary by id, subject to the visibility rule."""
        diary = self._get_diary(diary_id)
        if not self.can_view(diary, user):
            logger.warning(f"User {user.id} denied access to diary {diary_id}")
            raise ForbiddenError("You do not have access to this diary")
        return self.to_response(diary, user)

    def find_diary_by_month(
        self,
        year_month: str,
        owner_id: int,
        user: User,
    ) -> DiaryMonthlyResponse:
        """Calendar for one month: day of month -> diary summary.

        Only days with a diary appear. For another user's calendar, diaries
        the requester cannot see are left out.
        """
        first_day, last_day = parse_year_month(year_month)

        if owner_id != user.id and get_active_user(self.db, owner_id) is None:
            raise NotFoundError("User not found")

        diaries = (
            self.db.query(Diary)
            .filter(
                Diary.user_id == owner_id,
                Diary.date >= first_day,
                Diary.date <= last_day,
                Diary.deleted_at.is_(None),
            )
            .order_by(Diary.date)
            .all()
        )

        if owner_id != user.id:
            friends = are_friends(self.db, user.id, owner_id)
            allowed = {OpenType.PUBLIC, OpenType.FRIEND} if friends else {OpenType.PUBLIC}
            diaries = [d for d in diaries if d.open_type in allowed]

        return DiaryMonthlyResponse(
            user_id=owner_id,
            year_month=year_month,
            diaries={d.date.day: DiaryMonthlyItem.model_validate(d) for d in diaries},
        )
