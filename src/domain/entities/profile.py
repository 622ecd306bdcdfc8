"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

DEFAULT_PROFILE_NAME = "New User"


@dataclass
class Profile:
    """Domain entity for a user profile (one per auth principal)."""

    id: UUID = field(default_factory=uuid4)
    name: str = DEFAULT_PROFILE_NAME
    email: str = ""
    bio: str = ""
    avatar_url: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @classmethod
    def for_principal(
        cls,
        user_id: UUID,
        email: str,
        name: str | None = None,
        bio: str | None = None,
    ) -> "Profile":
        """Build the first profile of a principal from its signup metadata.

        Name falls back to the local part of the email, then to a placeholder.
        """
        resolved_name = (name or "").strip()
        if not resolved_name and email:
            resolved_name = email.split("@", 1)[0].strip()
        return cls(
            id=user_id,
            name=resolved_name or DEFAULT_PROFILE_NAME,
            email=email or "",
            bio=bio or "",
        )
