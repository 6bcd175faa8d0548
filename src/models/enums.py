"""Enums for model fields."""

from enum import Enum


class UserRole(str, Enum):
    """Account roles."""

    USER = "USER"
    ADMIN = "ADMIN"


class Weather(str, Enum):
    """Weather recorded on a diary entry."""

    SUNNY = "SUNNY"
    CLOUDY = "CLOUDY"
    RAINY = "RAINY"
    SNOWY = "SNOWY"
    WINDY = "WINDY"


class Feeling(str, Enum):
    """Mood recorded on a diary entry."""

    HAPPY = "HAPPY"
    EXCITED = "EXCITED"
    CALM = "CALM"
    SAD = "SAD"
    ANGRY = "ANGRY"
    TIRED = "TIRED"


class OpenType(str, Enum):
    """Who may read a diary entry besides its owner."""

    PUBLIC = "PUBLIC"
    FRIEND = "FRIEND"
    PRIVATE = "PRIVATE"


class DiaryStatus(str, Enum):
    """Lifecycle state of a diary entry."""

    ACTIVE = "ACTIVE"
    DELETED = "DELETED"


class FriendStatus(str, Enum):
    """State of a friend relationship row."""

    WAITING = "WAITING"
    ACCEPTED = "ACCEPTED"
