"""
Exercise Catalog Repository Interface (Port).

Exercises live in two namespaces:
- the global catalog, shared by every user
- a custom catalog per client user

Both are searched by ``name_key`` (trimmed, case-folded name).
"""
from typing import Any, Dict, Optional, Protocol


class ExerciseCatalogRepository(Protocol):
    """
    Abstract interface for exercise lookup and lazy creation.

    Implementations raise PersistenceError when the backing store fails.
    They never return a made-up row.
    """

    def find_global_by_name_key(self, name_key: str) -> Optional[Dict[str, Any]]:
        """
        Find a global exercise by normalized name.

        Args:
            name_key: Trimmed, case-folded exercise name

        Returns:
            Exercise dictionary or None if not found
        """
        ...

    def find_custom_by_name_key(
        self, owner_id: str, name_key: str
    ) -> Optional[Dict[str, Any]]:
        """
        Find an exercise in a user's custom catalog by normalized name.

        Args:
            owner_id: The owning user ID
            name_key: Trimmed, case-folded exercise name

        Returns:
            Exercise dictionary or None if not found
        """
        ...

    def create_custom(
        self,
        owner_id: str,
        name: str,
        name_key: str,
        *,
        created_by: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create an exercise in a user's custom catalog.

        (owner_id, name_key) is unique. If another writer created the same
        exercise first, the existing row is returned instead of a duplicate.

        Args:
            owner_id: The owning user ID
            name: Display name, casing preserved
            name_key: Trimmed, case-folded exercise name
            created_by: User who triggered the creation (e.g. the trainer)

        Returns:
            The created (or already existing) exercise dictionary
        """
        ...
