"""
Program Repository Interface (Port).

Program envelopes are owned by the client user. Each envelope carries a
``routine_index`` of (routine_id, week, order) entries.
"""
from typing import Any, Dict, List, Optional, Protocol


class ProgramRepository(Protocol):
    """
    Abstract interface for program envelope persistence.

    Implementations raise PersistenceError when a write or read fails.
    """

    def create(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Persist one program envelope.

        Args:
            user_id: The owning client user ID
            data: Envelope record (includes its own ``id``)

        Returns:
            Created program dictionary
        """
        ...

    def get_by_id(self, user_id: str, program_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a program envelope by ID.

        Args:
            user_id: The owning client user ID
            program_id: The program ID

        Returns:
            Program dictionary or None if not found
        """
        ...

    def get_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        """
        Get all program envelopes of a user, newest first.

        Args:
            user_id: The owning client user ID

        Returns:
            List of program dictionaries
        """
        ...
