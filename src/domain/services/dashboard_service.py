"""Dashboard aggregation over requests, exchanges, profiles and reviews."""

from collections import Counter
from collections.abc import Callable
from uuid import UUID

from core.exceptions import UserNotFoundError
from domain.entities.dashboard import (
    ActivityItem,
    ActivityTypes,
    DashboardStats,
    DashboardSummary,
)
from domain.entities.exchange import ExchangeProposal
from domain.entities.pagination import DEFAULT_PAGE_SIZE, Page, paginate
from domain.entities.profile import SkillProfile
from domain.entities.service_request import ServiceRequest, ServiceRequestStatus
from domain.repositories.unit_of_work import IUnitOfWork

CREDITS_PER_COMPLETED_REQUEST = 10
RECENT_ACTIVITY_LIMIT = 5


class DashboardService:
    """Read-only fan-out that builds a user's dashboard. Owns no state."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_summary(self, user_id: UUID) -> DashboardSummary:
        """Build the dashboard summary for a user.

        Raises:
            UserNotFoundError: If the user has no user record.
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            requests = await uow.service_requests.get_for_requester(user_id)
            responded = await uow.service_requests.get_responded_by(user_id)
            exchanges = await uow.exchanges.get_for_user(user_id)
            profiles = await uow.profiles.get_all_for_owner(user_id)

        profile = max(profiles, key=lambda p: p.created_at) if profiles else None
        completed = sum(1 for r in requests if r.status == ServiceRequestStatus.COMPLETED)

        stats = DashboardStats(
            requests=len(requests),
            responses=len(responded),
            open_requests=sum(1 for r in requests if r.status == ServiceRequestStatus.OPEN),
            completed_requests=completed,
            completion_rate=(completed / len(requests)) * 100 if requests else 0.0,
            earned_credits=completed * CREDITS_PER_COMPLETED_REQUEST,
            credits=profile.credits if profile else 0,
            rating=profile.rating if profile else 0.0,
            review_count=len(profile.reviews) if profile else 0,
            pending_exchanges=sum(
                1 for e in exchanges if e.recipient_id == user_id and e.is_pending
            ),
            skill_distribution=self._skill_distribution(profiles),
        )

        activity = self._build_activity(user_id, requests, responded, exchanges, profiles)
        return DashboardSummary(
            user=user,
            profile=profile,
            stats=stats,
            recent_activity=activity[:RECENT_ACTIVITY_LIMIT],
        )

    async def get_activity(
        self,
        user_id: UUID,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[ActivityItem]:
        """Get one page of the user's merged activity feed, newest first."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            requests = await uow.service_requests.get_for_requester(user_id)
            responded = await uow.service_requests.get_responded_by(user_id)
            exchanges = await uow.exchanges.get_for_user(user_id)
            profiles = await uow.profiles.get_all_for_owner(user_id)

        activity = self._build_activity(user_id, requests, responded, exchanges, profiles)
        return paginate(activity, page, page_size)

    @staticmethod
    def _skill_distribution(profiles: list[SkillProfile]) -> dict[str, int]:
        """Count each skill named as primary or wanted across the profiles."""
        counts: Counter[str] = Counter()
        for profile in profiles:
            counts[profile.primary_skill] += 1
            counts.update(profile.looking_for)
        return dict(counts)

    @staticmethod
    def _build_activity(
        user_id: UUID,
        requests: list[ServiceRequest],
        responded: list[ServiceRequest],
        exchanges: list[ExchangeProposal],
        profiles: list[SkillProfile],
    ) -> list[ActivityItem]:
        items: list[ActivityItem] = []

        for request in requests:
            items.append(
                ActivityItem(
                    type=ActivityTypes.REQUEST,
                    title=f"New request: {request.title}",
                    description=f"You created a request for {request.skill_needed}",
                    entity_id=request.id,
                    occurred_at=request.created_at,
                )
            )

        for request in responded:
            for response in request.responses:
                if response.responder_id != user_id:
                    continue
                items.append(
                    ActivityItem(
                        type=ActivityTypes.RESPONSE,
                        title=f"Response to: {request.title}",
                        description=f"You responded to a request for {request.skill_needed}",
                        entity_id=request.id,
                        occurred_at=response.created_at,
                    )
                )

        for exchange in exchanges:
            if exchange.sender_id == user_id:
                title = "Exchange proposed"
                description = (
                    f"You offered {exchange.sender_skill} for {exchange.recipient_skill}"
                )
            else:
                title = "Exchange proposal received"
                description = (
                    f"You were offered {exchange.sender_skill} for {exchange.recipient_skill}"
                )
            items.append(
                ActivityItem(
                    type=ActivityTypes.EXCHANGE,
                    title=f"{title} ({exchange.status.value})",
                    description=description,
                    entity_id=exchange.id,
                    occurred_at=exchange.created_at,
                )
            )

        for profile in profiles:
            for review in profile.reviews:
                items.append(
                    ActivityItem(
                        type=ActivityTypes.REVIEW,
                        title=f"New {review.rating}-star review",
                        description=review.comment,
                        entity_id=profile.id,
                        occurred_at=review.created_at,
                    )
                )

        items.sort(key=lambda item: item.occurred_at, reverse=True)
        return items
