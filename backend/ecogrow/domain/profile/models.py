"""Profile domain models."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Role names that can be granted."""
    ADMIN = "admin"
    USER = "user"


@dataclass
class Profile:
    """Profile domain model."""
    id: str
    full_name: str
    eco_coins: int
    created_at: datetime
    updated_at: datetime
    location: Optional[str] = None
    badges: list[str] = field(default_factory=list)


@dataclass
class RoleGrant:
    """A row asserting that a user holds a role; its existence is the only signal."""
    id: str
    user_id: str
    role: Role
    created_at: datetime


@dataclass
class UserRank:
    """Result of the get_user_rank procedure."""
    rank: int
    total_users: int
