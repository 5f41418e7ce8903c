"""Resolve which subscribers a dispatch request targets."""

from __future__ import annotations

import logging

from app.application.ports import UserStore
from app.domain.entities import DispatchRequest, User

logger = logging.getLogger(__name__)


class RecipientSelector:
    """Pick target users for a :class:`DispatchRequest`.

    Category filters win over brand filters. Brand targeting is treated as an
    email campaign, so it only returns users with email enabled. Without any
    filter every active user is returned and channel opt-ins are checked later,
    per user.
    """

    def __init__(self, users: UserStore) -> None:
        self._users = users

    def select_targets(self, request: DispatchRequest) -> list[User]:
        if request.categories:
            candidates = self._users.list_active_with_preferences(request.categories)
            mode = "categories"
        elif request.brands:
            candidates = self._users.list_active_with_preferences_and_email(request.brands)
            mode = "brands"
        else:
            candidates = self._users.list_active()
            mode = "all-active"

        targets: list[User] = []
        seen: set[int | None] = set()
        for user in candidates:
            key = user.id if user.id is not None else id(user)
            if key in seen:
                continue
            seen.add(key)
            targets.append(user)

        logger.debug(
            "Selected %d recipients for release %s (%s)",
            len(targets),
            request.release_id,
            mode,
        )
        return targets


__all__ = ["RecipientSelector"]
