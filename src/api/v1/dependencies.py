"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.repositories.blob_storage import IBlobStorage
from domain.services.dashboard_service import DashboardService
from domain.services.exchange_service import ExchangeService
from domain.services.portfolio_service import PortfolioService
from domain.services.profile_service import ProfileService
from domain.services.review_service import ReviewService
from domain.services.service_request_service import ServiceRequestService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.storage.local_storage import LocalBlobStorage
from infrastructure.storage.supabase_storage import SupabaseBlobStorage


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_blob_storage() -> IBlobStorage:
    """Get the configured blob storage backend."""
    if settings.storage_backend == "supabase":
        return SupabaseBlobStorage(
            supabase_url=settings.supabase_url,
            service_key=settings.supabase_service_role_key,
            bucket=settings.supabase_storage_bucket,
            timeout=settings.storage_timeout_seconds,
        )
    return LocalBlobStorage(
        root_dir=settings.local_storage_dir,
        url_prefix=settings.local_storage_url_prefix,
    )


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory(), get_blob_storage())


@lru_cache
def get_review_service() -> ReviewService:
    """Get Review service instance."""
    return ReviewService(get_uow_factory())


@lru_cache
def get_portfolio_service() -> PortfolioService:
    """Get Portfolio service instance."""
    return PortfolioService(
        get_uow_factory(),
        get_blob_storage(),
        tmp_dir=settings.upload_tmp_dir,
    )


@lru_cache
def get_service_request_service() -> ServiceRequestService:
    """Get ServiceRequest service instance."""
    return ServiceRequestService(get_uow_factory())


@lru_cache
def get_exchange_service() -> ExchangeService:
    """Get Exchange service instance."""
    return ExchangeService(get_uow_factory())


@lru_cache
def get_dashboard_service() -> DashboardService:
    """Get Dashboard service instance."""
    return DashboardService(get_uow_factory())
