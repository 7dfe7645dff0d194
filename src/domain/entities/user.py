"""User domain entity (synced from the identity provider)."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class User:
    """Minimal user record used for display joins and existence checks."""

    id: UUID = field(default_factory=uuid4)
    email: str = ""
    name: str = ""
    created_at: datetime = field(default_factory=datetime.utcnow)
