"""
Exercise resolver: exercise name -> stable exercise id.

Resolution is a two-tier lookup chain with fixed precedence:

1. Global catalog (by trimmed, case-folded name)
2. The client's custom catalog
3. Otherwise a new custom exercise is created for the client

The global catalog always wins over a same-named custom exercise so trainers
do not fork a canonical exercise per client.

A resolver instance is request-scoped: it caches resolved ids per
(client user id, name key) so the same name always maps to the same id within
one conversion, including names it created itself.
"""

import asyncio
import logging
from concurrent.futures import Executor
from threading import Lock
from typing import Dict, Iterable, List, Optional, Tuple, Union

from application.exceptions import PersistenceError, ResolutionError
from application.ports import ExerciseCatalogRepository
from domain.models.exercise import ExerciseRecord, exercise_name_key

logger = logging.getLogger(__name__)

ResolutionOutcome = Union[str, ResolutionError]


class ExerciseResolver:
    """
    Resolves exercise names against the global and custom catalogs.

    Usage:
        >>> resolver = ExerciseResolver(catalog_repo, created_by="trainer-1")
        >>> exercise_id = resolver.resolve("Back Squat", "client-user-1")
    """

    def __init__(
        self,
        catalog_repo: ExerciseCatalogRepository,
        *,
        created_by: Optional[str] = None,
    ) -> None:
        """
        Args:
            catalog_repo: Repository over both exercise catalogs
            created_by: User recorded as creator of new custom exercises
        """
        self._catalog = catalog_repo
        self._created_by = created_by
        self._resolved: Dict[Tuple[str, str], str] = {}
        self._failed: Dict[Tuple[str, str], str] = {}
        self._created: List[str] = []
        self._lock = Lock()

    @property
    def created_ids(self) -> List[str]:
        """Ids of custom exercises created by this resolver."""
        return list(self._created)

    def resolve(self, name: str, client_user_id: str) -> str:
        """
        Resolve one exercise name to an id.

        Args:
            name: Exercise name as authored
            client_user_id: Owner of the custom catalog to search/extend

        Returns:
            The exercise id

        Raises:
            ResolutionError: If the name is empty or a catalog query fails
        """
        name_key = exercise_name_key(name or "")
        if not name_key:
            raise ResolutionError(name or "", "exercise name is empty")

        cache_key = (client_user_id, name_key)
        with self._lock:
            if cache_key in self._resolved:
                return self._resolved[cache_key]
            if cache_key in self._failed:
                raise ResolutionError(name, self._failed[cache_key])

        try:
            exercise_id = self._lookup_or_create(name.strip(), name_key, client_user_id)
        except PersistenceError as e:
            logger.warning("Exercise lookup failed for '%s': %s", name, e.message)
            with self._lock:
                self._failed[cache_key] = e.message
            raise ResolutionError(name, e.message) from e

        with self._lock:
            return self._resolved.setdefault(cache_key, exercise_id)

    def _lookup_or_create(self, name: str, name_key: str, client_user_id: str) -> str:
        row = self._catalog.find_global_by_name_key(name_key)
        if row:
            record = ExerciseRecord.from_row(row)
            logger.debug("Exercise '%s' found in global catalog: %s", name, record.id)
            return record.id

        row = self._catalog.find_custom_by_name_key(client_user_id, name_key)
        if row:
            record = ExerciseRecord.from_row(row, owner_scope=client_user_id)
            logger.debug("Exercise '%s' found in custom catalog of %s: %s", name, client_user_id, record.id)
            return record.id

        row = self._catalog.create_custom(
            client_user_id,
            name,
            name_key,
            created_by=self._created_by,
        )
        exercise_id = ExerciseRecord.from_row(row, owner_scope=client_user_id).id
        with self._lock:
            self._created.append(exercise_id)
        logger.info("Created custom exercise '%s' for user %s: %s", name, client_user_id, exercise_id)
        return exercise_id

    async def resolve_many(
        self,
        names: Iterable[str],
        client_user_id: str,
        *,
        executor: Optional[Executor] = None,
    ) -> Dict[str, ResolutionOutcome]:
        """
        Resolve many names concurrently.

        Names sharing a name key are resolved once. Resolution of one name
        never depends on another, so lookups run in parallel on ``executor``.

        Returns:
            Mapping of each input name to its id or its ResolutionError
        """
        groups: Dict[str, List[str]] = {}
        for name in names:
            groups.setdefault(exercise_name_key(name or ""), []).append(name)

        loop = asyncio.get_event_loop()

        async def _resolve_group(group: List[str]) -> List[Tuple[str, ResolutionOutcome]]:
            try:
                exercise_id = await loop.run_in_executor(
                    executor, self.resolve, group[0], client_user_id
                )
            except ResolutionError as e:
                return [(name, e) for name in group]
            return [(name, exercise_id) for name in group]

        results = await asyncio.gather(*(_resolve_group(group) for group in groups.values()))

        outcomes: Dict[str, ResolutionOutcome] = {}
        for pairs in results:
            outcomes.update(pairs)
        logger.info(
            "Resolved %d exercise names for user %s (%d failed)",
            len(outcomes),
            client_user_id,
            sum(1 for outcome in outcomes.values() if isinstance(outcome, ResolutionError)),
        )
        return outcomes
