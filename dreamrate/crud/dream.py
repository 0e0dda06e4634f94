"""
Dream CRUD Operations
Database operations for dreams.
"""

import random
from typing import Any, List, Optional

from dreamrate.crud.base import BaseCRUD
from dreamrate.models import DreamModel, DreamWithReviews
from dreamrate.services.sampling import sample_rows

# Uses the dreams -> reviews foreign key to embed reviews in one request.
DREAM_WITH_REVIEWS = "*,reviews(*)"


class DreamCRUD(BaseCRUD):
    """CRUD operations for the dreams table."""

    # Rows requested per page when collecting the random-dream pool.
    pool_page_size = 1000

    def __init__(self, db: Any, rng: Optional[random.Random] = None):
        """
        Initialize dream CRUD.

        Args:
            db: Store handle
            rng: Random source for the random-dream queries
        """
        super().__init__(db)
        self.rng = rng

    @property
    def table_name(self) -> str:
        """Get table name."""
        return "dreams"

    async def get_user_dreams(self, user_id: str) -> List[DreamModel]:
        """
        Get a user's own dreams, newest first.

        Args:
            user_id: Owner ID

        Returns:
            The user's dreams
        """
        rows = await self.list_by("created_by", user_id)
        return [DreamModel.model_validate(row) for row in rows]

    async def _sample_others(self, user_id: str, count: int, columns: str) -> List[dict]:
        # Whole eligible pool, then a uniform draw (see services.sampling).
        if count <= 0:
            return []
        pool = await self._eligible_pool(user_id, columns)
        return sample_rows(pool, count, self.rng)

    async def _eligible_pool(self, user_id: str, columns: str) -> List[dict]:
        """
        Fetch every dream not owned by `user_id`, page by page.

        The store caps each response at its max-rows setting, which may be
        smaller than `pool_page_size`, so paging stops on an empty page rather
        than a short one. Pages are ordered by id to keep offsets stable.
        """
        pool: List[dict] = []
        start = 0
        while True:
            request = (
                self.table()
                .select(columns)
                .neq("created_by", user_id)
                .order("id")
                .range(start, start + self.pool_page_size - 1)
            )
            page = await self._execute(request, "sample")
            if not page:
                return pool
            pool.extend(page)
            start += len(page)

    async def get_random_dreams(self, user_id: str, count: int) -> List[DreamModel]:
        """
        Get up to `count` random dreams not owned by `user_id`.

        Args:
            user_id: Caller's ID; their own dreams are never returned
            count: Maximum number of dreams

        Returns:
            Uniformly sampled dreams, empty if none are eligible
        """
        rows = await self._sample_others(user_id, count, "*")
        return [DreamModel.model_validate(row) for row in rows]

    async def get_random_dream(self, user_id: str) -> Optional[DreamModel]:
        """
        Get one random dream not owned by `user_id`, or None.
        """
        dreams = await self.get_random_dreams(user_id, 1)
        return dreams[0] if dreams else None

    async def get_dream_with_reviews(self, dream_id: int) -> DreamWithReviews:
        """
        Get a single dream with all its reviews.

        Args:
            dream_id: Dream ID

        Returns:
            The dream with nested reviews

        Raises:
            NotFoundError: If the dream does not exist
        """
        row = await self.get_by_id(dream_id, columns=DREAM_WITH_REVIEWS)
        return DreamWithReviews.model_validate(row)

    async def get_dreams_with_reviews(self, user_id: str, count: int) -> List[DreamWithReviews]:
        """
        Get up to `count` random dreams not owned by `user_id`, each with its
        reviews, for feed display.
        """
        rows = await self._sample_others(user_id, count, DREAM_WITH_REVIEWS)
        return [DreamWithReviews.model_validate(row) for row in rows]

    async def create_dream(
        self,
        title: str,
        content: str,
        owner_id: str,
        tags: Optional[List[str]] = None,
    ) -> DreamModel:
        """
        Store a new dream.

        Args:
            title: Dream title
            content: Dream text
            owner_id: Authenticated creator's ID
            tags: Optional tags; left unset when not given

        Returns:
            The stored dream
        """
        row = {"title": title, "content": content, "created_by": owner_id}
        if tags is not None:
            row["tags"] = list(tags)
        return DreamModel.model_validate(await self.insert(row))

    async def update_dream(self, dream_id: int, title: str, content: str) -> DreamModel:
        """
        Replace a dream's title and content. Ownership is enforced by the
        store's access policy.

        Raises:
            NotFoundError: If no dream was updated
        """
        row = await self.update(dream_id, {"title": title, "content": content})
        return DreamModel.model_validate(row)

    async def delete_dream(self, dream_id: int) -> None:
        """Delete a dream by ID."""
        await self.delete(dream_id)
