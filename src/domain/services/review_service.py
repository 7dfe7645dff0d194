"""Review service: the rating aggregate of a skill profile."""

import math
from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

from core.exceptions import (
    DuplicateReviewError,
    ForbiddenError,
    ProfileNotFoundError,
    ReviewNotFoundError,
    ValidationError,
)
from domain.entities.pagination import DEFAULT_PAGE_SIZE, Page, paginate
from domain.entities.profile import Review
from domain.repositories.unit_of_work import IUnitOfWork

MIN_RATING = 1
MAX_RATING = 5


@dataclass
class ReviewPage:
    """A page of reviews plus the profile's current mean rating."""

    page: Page[Review]
    rating: float


class ReviewService:
    """Service layer for profile reviews.

    Every mutation locks the profile row, appends or removes the review and
    recomputes the mean in the same transaction.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def add_review(
        self,
        profile_id: UUID,
        reviewer_id: UUID,
        rating: object,
        comment: str | None,
    ) -> tuple[Review, float]:
        """Add a review to a profile.

        Returns:
            Tuple of (new review, updated mean rating).

        Raises:
            ValidationError: If rating is not an integer 1-5 or comment is blank.
            ProfileNotFoundError: If the profile does not exist.
            DuplicateReviewError: If the reviewer already reviewed this profile.
        """
        value = self._validate_rating(rating)
        if not isinstance(comment, str) or not comment.strip():
            raise ValidationError("Comment is required")

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id, for_update=True)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))

            if profile.review_by(reviewer_id):
                raise DuplicateReviewError(str(profile_id))

            review = Review(reviewer_id=reviewer_id, rating=value, comment=comment.strip())
            profile.add_review(review)

            updated = await uow.profiles.update(profile)
            await uow.commit()

            return review, updated.rating

    async def get_reviews(
        self,
        profile_id: UUID,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> ReviewPage:
        """Get one page of a profile's reviews in chronological order."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))

            return ReviewPage(page=paginate(profile.reviews, page, page_size), rating=profile.rating)

    async def delete_review(
        self,
        profile_id: UUID,
        review_id: UUID,
        requester_id: UUID,
        is_admin: bool = False,
    ) -> float:
        """Delete a review. Only its author or an administrator may do so.

        Returns:
            The recomputed mean rating (0.0 when no reviews remain).
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id, for_update=True)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))

            review = profile.find_review(review_id)
            if not review:
                raise ReviewNotFoundError(str(review_id))

            if review.reviewer_id != requester_id and not is_admin:
                raise ForbiddenError("Not authorized to delete this review")

            profile.remove_review(review_id)
            updated = await uow.profiles.update(profile)
            await uow.commit()

            return updated.rating

    @staticmethod
    def _validate_rating(rating: object) -> int:
        """Accept integers (or integral floats) in [1, 5]."""
        if isinstance(rating, bool):
            value = None
        elif isinstance(rating, int):
            value = rating
        elif isinstance(rating, float) and math.isfinite(rating) and rating.is_integer():
            value = int(rating)
        else:
            value = None

        if value is None or not MIN_RATING <= value <= MAX_RATING:
            # NaN and infinities cannot be rendered back as JSON
            non_finite = isinstance(rating, float) and not math.isfinite(rating)
            shown = repr(rating) if non_finite else rating
            raise ValidationError(
                "Invalid rating value",
                details={"rating": shown, "min": MIN_RATING, "max": MAX_RATING},
            )
        return value
