"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a profile and return success status."""
        ...
