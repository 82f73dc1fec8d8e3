"""Common domain types."""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4


def generate_id() -> str:
    """Generate a new UUID string."""
    return str(uuid4())


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class NoticeType(str, Enum):
    """Notice type enum."""
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class Notice:
    """Transient message the client shows after an action."""
    message: str
    type: NoticeType = NoticeType.SUCCESS

    @classmethod
    def success(cls, message: str) -> "Notice":
        return cls(message=message, type=NoticeType.SUCCESS)

    @classmethod
    def error(cls, message: str) -> "Notice":
        return cls(message=message, type=NoticeType.ERROR)
