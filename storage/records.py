"""Entity records shared by every storage backend."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from typing import Optional

from werkzeug.security import check_password_hash

USER_ROLES = ("citizen", "verifier", "admin")
REPORT_CATEGORIES = ("dumping", "segregation", "composting")
REPORT_STATUSES = ("pending", "verified", "rejected")

CITIZEN_STARTING_BONUS = 25
POINTS_BY_CATEGORY = {
    "dumping": 10,
    "segregation": 15,
    "composting": 20,
}
DEFAULT_REPORT_POINTS = 10

DEFAULT_REWARDS = (
    {
        "name": "₹50 Electricity Bill Discount",
        "description": "Valid for 30 days",
        "cost": 50,
        "category": "electricity",
    },
    {
        "name": "₹100 Water Bill Discount",
        "description": "Valid for 30 days",
        "cost": 75,
        "category": "water",
    },
    {
        "name": "₹150 Shopping Voucher",
        "description": "Local grocery stores",
        "cost": 100,
        "category": "voucher",
    },
    {
        "name": "Plant a Tree Certificate",
        "description": "Environmental contribution",
        "cost": 150,
        "category": "tree",
    },
)


def starting_points(role: str) -> int:
    """Return the balance a freshly registered user starts with."""

    return CITIZEN_STARTING_BONUS if role == "citizen" else 0


def points_for_category(category: str) -> int:
    return POINTS_BY_CATEGORY.get(category, DEFAULT_REPORT_POINTS)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class UserRecord:
    """A registered user as handed out by storage."""

    id: str
    email: str
    password_hash: str = field(repr=False)
    name: str
    role: str
    address: Optional[str] = None
    zone: Optional[str] = None
    green_points: int = 0
    created_at: Optional[datetime] = None

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return check_password_hash(self.password_hash, password)

    def with_points(self, green_points: int) -> "UserRecord":
        return replace(self, green_points=green_points)

    def to_dict(self) -> dict:
        """Serialize the user without any password material."""

        data = asdict(self)
        data.pop("password_hash", None)
        data["created_at"] = _isoformat(self.created_at)
        return data


@dataclass(frozen=True)
class ReportRecord:
    """A citizen's waste report."""

    id: str
    user_id: str
    category: str
    location: str
    description: Optional[str] = None
    status: str = "pending"
    points: int = 0
    verified_by: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["created_at"] = _isoformat(self.created_at)
        return data


@dataclass(frozen=True)
class RewardRecord:
    id: str
    name: str
    description: str
    cost: int
    category: str

    def to_dict(self) -> dict:
        return asdict(self)
