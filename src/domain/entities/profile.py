"""Skill profile aggregate with its embedded reviews and portfolio."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class PortfolioItemType(StrEnum):
    """Kind of asset a portfolio item points to."""

    IMAGE = "image"
    PDF = "pdf"
    DOCUMENT = "document"


@dataclass
class Review:
    """A single review left on a profile. Owned by the profile."""

    reviewer_id: UUID
    rating: int
    comment: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class PortfolioItem:
    """Reference to an uploaded asset attached to a profile."""

    url: str
    title: str
    type: PortfolioItemType
    id: UUID = field(default_factory=uuid4)
    uploaded_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class SkillProfile:
    """Domain entity for a user's skill-exchange listing.

    ``rating`` is derived: it is 0.0 when ``reviews`` is empty and the
    unrounded mean of review ratings otherwise. Use the review methods
    below rather than mutating ``reviews`` directly so the two never drift.
    """

    owner_id: UUID
    name: str
    primary_skill: str
    description: str
    id: UUID = field(default_factory=uuid4)
    looking_for: list[str] = field(default_factory=list)
    portfolio: list[PortfolioItem] = field(default_factory=list)
    reviews: list[Review] = field(default_factory=list)
    credits: int = 0
    rating: float = 0.0
    featured: bool = False
    avatar_url: str | None = None
    location: list[float] | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def touch(self) -> None:
        """Stamp the profile as modified now."""
        self.updated_at = datetime.utcnow()

    # --- Reviews ---

    def review_by(self, reviewer_id: UUID) -> Review | None:
        """Return the review written by a reviewer, if any."""
        return next((r for r in self.reviews if r.reviewer_id == reviewer_id), None)

    def find_review(self, review_id: UUID) -> Review | None:
        return next((r for r in self.reviews if r.id == review_id), None)

    def add_review(self, review: Review) -> None:
        """Append a review and recompute the mean rating."""
        self.reviews.append(review)
        self.recompute_rating()
        self.touch()

    def remove_review(self, review_id: UUID) -> Review | None:
        """Remove a review by ID and recompute. Returns the removed review."""
        review = self.find_review(review_id)
        if review is None:
            return None
        self.reviews = [r for r in self.reviews if r.id != review_id]
        self.recompute_rating()
        self.touch()
        return review

    def recompute_rating(self) -> None:
        if not self.reviews:
            self.rating = 0.0
            return
        self.rating = sum(r.rating for r in self.reviews) / len(self.reviews)

    # --- Portfolio ---

    def find_portfolio_item(self, item_id: UUID) -> PortfolioItem | None:
        return next((p for p in self.portfolio if p.id == item_id), None)

    def add_portfolio_item(self, item: PortfolioItem) -> None:
        self.portfolio.append(item)
        self.touch()

    def remove_portfolio_item(self, item_id: UUID) -> PortfolioItem | None:
        """Remove a portfolio item by ID. Returns the removed item."""
        item = self.find_portfolio_item(item_id)
        if item is None:
            return None
        self.portfolio = [p for p in self.portfolio if p.id != item_id]
        self.touch()
        return item
