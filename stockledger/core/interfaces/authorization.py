"""Abstract interface for project ownership resolution."""

from abc import ABC, abstractmethod


class IAuthorizationContext(ABC):
    """Resolves whether an acting user owns a project."""

    @abstractmethod
    async def is_project_owner(self, user_id: str, project_id: str) -> bool:
        """Return True if user_id owns project_id."""
        pass
