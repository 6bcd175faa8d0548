"""Diary and diary-like models."""

from sqlalchemy import Column, Date, Enum, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import DiaryStatus, Feeling, OpenType, Weather
from src.models.mixins import SoftDeleteMixin, TimestampMixin


def _enum_values(enum_cls):
    return [e.value for e in enum_cls]


class Diary(Base, TimestampMixin, SoftDeleteMixin):
    """A user's journal entry for one date."""

    __tablename__ = "diaries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    title = Column(String(100), nullable=False)
    content = Column(Text, nullable=True)
    weather = Column(
        Enum(Weather, name="weather", values_callable=_enum_values),
        default=Weather.SUNNY,
        nullable=False,
    )
    feeling = Column(
        Enum(Feeling, name="feeling", values_callable=_enum_values),
        default=Feeling.HAPPY,
        nullable=False,
    )
    open_type = Column(
        Enum(OpenType, name="opentype", values_callable=_enum_values),
        default=OpenType.PRIVATE,
        nullable=False,
    )
    image = Column(String(500), nullable=True)

    # Relationships
    user = relationship("User", backref="diaries")
    likes = relationship("LikeDiary", back_populates="diary")

    # One active diary per user and date; deleted rows keep their date
    __table_args__ = (
        Index(
            "ix_diaries_user_date",
            "user_id",
            "date",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    @property
    def status(self) -> DiaryStatus:
        return DiaryStatus.DELETED if self.is_deleted else DiaryStatus.ACTIVE


class LikeDiary(Base):
    """A user liking a diary, keyed by the (user, diary) pair."""

    __tablename__ = "like_diaries"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    diary_id = Column(Integer, ForeignKey("diaries.id"), primary_key=True, index=True)

    # Relationships
    user = relationship("User")
    diary = relationship("Diary", back_populates="likes")
