"""
Routine Repository Interface (Port).

Routines are independent documents owned by a client user. The program
envelope references them by id and never embeds them.
"""
from typing import Any, Dict, List, Optional, Protocol


class RoutineRepository(Protocol):
    """
    Abstract interface for client routine persistence.

    Implementations raise PersistenceError when a write or read fails.
    """

    def create(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Persist one routine document.

        Args:
            user_id: The owning client user ID
            data: Routine record (includes its own ``id``)

        Returns:
            Created routine dictionary
        """
        ...

    def get_by_id(self, user_id: str, routine_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a routine by ID.

        Args:
            user_id: The owning client user ID
            routine_id: The routine ID

        Returns:
            Routine dictionary or None if not found
        """
        ...

    def list_by_ids(self, user_id: str, routine_ids: List[str]) -> List[Dict[str, Any]]:
        """
        Get several routines of one user.

        Args:
            user_id: The owning client user ID
            routine_ids: Routine IDs to fetch

        Returns:
            Routine dictionaries that exist (missing ids are skipped)
        """
        ...
