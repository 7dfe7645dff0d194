"""Unit tests for Dashboard service layer."""

from datetime import datetime, timedelta
from uuid import UUID, uuid4

import pytest

from core.exceptions import UserNotFoundError
from domain.entities.dashboard import ActivityTypes
from domain.entities.exchange import ExchangeProposal, ExchangeStatus
from domain.entities.profile import Review
from domain.entities.service_request import (
    ServiceRequest,
    ServiceRequestStatus,
    ServiceResponse,
)
from domain.entities.user import User
from domain.services.dashboard_service import DashboardService
from tests.unit.conftest import FakeUnitOfWork, make_profile

NOW = datetime(2026, 3, 1, 12, 0, 0)


@pytest.fixture
def service(uow: FakeUnitOfWork, user_id: UUID) -> DashboardService:
    uow.users.get.return_value = User(id=user_id, email="ada@example.com", name="Ada")
    uow.service_requests.get_for_requester.return_value = []
    uow.service_requests.get_responded_by.return_value = []
    uow.exchanges.get_for_user.return_value = []
    uow.profiles.get_all_for_owner.return_value = []
    return DashboardService(lambda: uow)


def _request(
    requester_id: UUID,
    status: ServiceRequestStatus = ServiceRequestStatus.OPEN,
    minutes_ago: int = 0,
    title: str = "Need help",
) -> ServiceRequest:
    return ServiceRequest(
        requester_id=requester_id,
        requester_name="Ada",
        title=title,
        description="d",
        skill_needed="Graphic Design",
        skill_offered="Web Development",
        status=status,
        created_at=NOW - timedelta(minutes=minutes_ago),
    )


class TestDashboardServiceSummary:
    @pytest.mark.asyncio
    async def test_empty_user(self, service: DashboardService, user_id: UUID) -> None:
        summary = await service.get_summary(user_id)

        assert summary.user.name == "Ada"
        assert summary.profile is None
        assert summary.stats.requests == 0
        assert summary.stats.completion_rate == 0.0
        assert summary.stats.rating == 0.0
        assert summary.recent_activity == []

    @pytest.mark.asyncio
    async def test_request_counters_and_credits(
        self, service: DashboardService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.service_requests.get_for_requester.return_value = [
            _request(user_id, ServiceRequestStatus.OPEN),
            _request(user_id, ServiceRequestStatus.IN_PROGRESS),
            _request(user_id, ServiceRequestStatus.COMPLETED),
            _request(user_id, ServiceRequestStatus.COMPLETED),
        ]

        stats = (await service.get_summary(user_id)).stats

        assert stats.requests == 4
        assert stats.open_requests == 1
        assert stats.completed_requests == 2
        assert stats.completion_rate == 50.0
        assert stats.earned_credits == 20

    @pytest.mark.asyncio
    async def test_profile_stats_come_from_newest_profile(
        self, service: DashboardService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        old = make_profile(user_id, created_at=NOW - timedelta(days=3), credits=99)
        new = make_profile(user_id, created_at=NOW, credits=7)
        new.add_review(Review(reviewer_id=uuid4(), rating=5, comment="great"))
        new.add_review(Review(reviewer_id=uuid4(), rating=4, comment="good"))
        uow.profiles.get_all_for_owner.return_value = [new, old]

        summary = await service.get_summary(user_id)

        assert summary.profile is new
        assert summary.stats.credits == 7
        assert summary.stats.rating == 4.5
        assert summary.stats.review_count == 2

    @pytest.mark.asyncio
    async def test_skill_distribution_counts_every_profile(
        self, service: DashboardService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.profiles.get_all_for_owner.return_value = [
            make_profile(user_id, primary_skill="Web Development", looking_for=["Graphic Design"]),
            make_profile(
                user_id,
                primary_skill="Graphic Design",
                looking_for=["Web Development", "Video Editing"],
            ),
        ]

        stats = (await service.get_summary(user_id)).stats

        assert stats.skill_distribution == {
            "Web Development": 2,
            "Graphic Design": 2,
            "Video Editing": 1,
        }

    @pytest.mark.asyncio
    async def test_skill_distribution_empty_without_profiles(
        self, service: DashboardService, user_id: UUID
    ) -> None:
        stats = (await service.get_summary(user_id)).stats

        assert stats.skill_distribution == {}

    @pytest.mark.asyncio
    async def test_only_received_pending_exchanges_count(
        self, service: DashboardService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        received = ExchangeProposal(
            sender_id=uuid4(), recipient_id=user_id, sender_skill="a", recipient_skill="b"
        )
        sent = ExchangeProposal(
            sender_id=user_id, recipient_id=uuid4(), sender_skill="a", recipient_skill="b"
        )
        resolved = ExchangeProposal(
            sender_id=uuid4(),
            recipient_id=user_id,
            sender_skill="a",
            recipient_skill="b",
            status=ExchangeStatus.ACCEPTED,
        )
        uow.exchanges.get_for_user.return_value = [received, sent, resolved]

        stats = (await service.get_summary(user_id)).stats

        assert stats.pending_exchanges == 1

    @pytest.mark.asyncio
    async def test_recent_activity_is_five_newest(
        self, service: DashboardService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        requests = [_request(user_id, minutes_ago=i, title=f"r{i}") for i in range(7)]
        uow.service_requests.get_for_requester.return_value = list(reversed(requests))

        summary = await service.get_summary(user_id)

        assert [a.title for a in summary.recent_activity] == [
            f"New request: r{i}" for i in range(5)
        ]

    @pytest.mark.asyncio
    async def test_unknown_user(self, service: DashboardService, uow: FakeUnitOfWork) -> None:
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.get_summary(uuid4())


class TestDashboardServiceActivity:
    @pytest.mark.asyncio
    async def test_merges_all_sources_newest_first(
        self, service: DashboardService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        own = _request(user_id, minutes_ago=30, title="Logo")
        theirs = _request(uuid4(), minutes_ago=60, title="Copy")
        theirs.responses = [
            ServiceResponse(responder_id=uuid4(), message="x", created_at=NOW - timedelta(minutes=50)),
            ServiceResponse(responder_id=user_id, message="me", created_at=NOW - timedelta(minutes=20)),
        ]
        exchange = ExchangeProposal(
            sender_id=user_id,
            recipient_id=uuid4(),
            sender_skill="Web Development",
            recipient_skill="SEO Optimization",
            created_at=NOW - timedelta(minutes=10),
        )
        profile = make_profile(user_id)
        profile.reviews = [
            Review(reviewer_id=uuid4(), rating=4, comment="Solid", created_at=NOW - timedelta(minutes=40))
        ]
        uow.service_requests.get_for_requester.return_value = [own]
        uow.service_requests.get_responded_by.return_value = [theirs]
        uow.exchanges.get_for_user.return_value = [exchange]
        uow.profiles.get_all_for_owner.return_value = [profile]

        page = await service.get_activity(user_id, page=1, page_size=10)

        assert [a.type for a in page.items] == [
            ActivityTypes.EXCHANGE,
            ActivityTypes.RESPONSE,
            ActivityTypes.REQUEST,
            ActivityTypes.REVIEW,
        ]
        exchange_item, response_item, request_item, review_item = page.items
        assert exchange_item.title == "Exchange proposed (pending)"
        assert exchange_item.description == "You offered Web Development for SEO Optimization"
        assert response_item.title == "Response to: Copy"
        assert response_item.entity_id == theirs.id
        assert request_item.title == "New request: Logo"
        assert review_item.title == "New 4-star review"
        assert review_item.entity_id == profile.id
        assert page.total == 4

    @pytest.mark.asyncio
    async def test_received_exchange_wording(
        self, service: DashboardService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.exchanges.get_for_user.return_value = [
            ExchangeProposal(
                sender_id=uuid4(),
                recipient_id=user_id,
                sender_skill="Video Editing",
                recipient_skill="Data Analysis",
                status=ExchangeStatus.REJECTED,
            )
        ]

        page = await service.get_activity(user_id)

        (item,) = page.items
        assert item.title == "Exchange proposal received (rejected)"
        assert item.description == "You were offered Video Editing for Data Analysis"

    @pytest.mark.asyncio
    async def test_pagination(
        self, service: DashboardService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.service_requests.get_for_requester.return_value = [
            _request(user_id, minutes_ago=i) for i in range(12)
        ]

        page = await service.get_activity(user_id, page=2, page_size=5)

        assert len(page.items) == 5
        assert page.total == 12
        assert page.total_pages == 3
