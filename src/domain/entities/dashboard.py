"""Read models produced by the dashboard aggregator."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from domain.entities.profile import SkillProfile
from domain.entities.user import User


class ActivityTypes:
    """Activity item type constants."""

    REQUEST = "request"
    RESPONSE = "response"
    EXCHANGE = "exchange"
    REVIEW = "review"


@dataclass
class ActivityItem:
    """One entry of a user's activity feed."""

    type: str
    title: str
    description: str
    entity_id: UUID
    occurred_at: datetime


@dataclass
class DashboardStats:
    requests: int = 0
    responses: int = 0
    open_requests: int = 0
    completed_requests: int = 0
    completion_rate: float = 0.0
    earned_credits: int = 0
    credits: int = 0
    rating: float = 0.0
    review_count: int = 0
    pending_exchanges: int = 0
    # skill -> number of mentions across the user's profiles
    skill_distribution: dict[str, int] = field(default_factory=dict)


@dataclass
class DashboardSummary:
    """Everything the dashboard page shows in one payload."""

    user: User
    profile: SkillProfile | None
    stats: DashboardStats
    recent_activity: list[ActivityItem] = field(default_factory=list)
