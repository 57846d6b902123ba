"""Shared list-view behaviour: load, replace, notify.

A view owns one in-memory list that is only ever replaced wholesale by a
successful load. Mutations go to the server first and are followed by a
full reload; failures are logged, reported through the notifier and never
raised to the caller.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import Any, Generic, TypeVar

from edumaster.dashboard.api import ApiError, EduMasterClient
from edumaster.dashboard.confirm import ConfirmationRequest, Confirmer, ask, decline_all
from edumaster.dashboard.notifications import Notifier

T = TypeVar("T")
F = TypeVar("F")

logger = logging.getLogger("edumaster.dashboard")


class ListView(ABC, Generic[T, F]):
    load_failure_message = "Failed to load data"

    def __init__(
        self,
        client: EduMasterClient,
        *,
        notifier: Notifier | None = None,
        confirmer: Confirmer = decline_all,
        filters: F,
    ):
        self.client = client
        self.notifier = notifier or Notifier()
        self.confirmer = confirmer
        self.filters: F = filters
        self.items: tuple[T, ...] = ()
        self.loading = False

    @abstractmethod
    async def _fetch(self) -> list[T]:
        """Return the full list from the server."""
        ...

    async def load(self) -> bool:
        """Fetch the full list and replace the current one. False on failure."""
        self.loading = True
        try:
            items = await self._fetch()
        except ApiError as exc:
            logger.error("%s: %s", self.load_failure_message, exc)
            self.notifier.error(self.load_failure_message)
            return False
        finally:
            self.loading = False
        self.items = tuple(items)
        return True

    def update_filters(self, **changes) -> F:
        """Swap in a new filter snapshot with `changes` applied."""
        self.filters = replace(self.filters, **changes)
        return self.filters

    async def _send(
        self,
        request: Callable[[], Awaitable[Any]],
        *,
        success: str,
        failure: str,
    ) -> tuple[bool, Any]:
        """Run one mutation request; notify; return (ok, server result)."""
        try:
            result = await request()
        except ApiError as exc:
            logger.error("%s: %s", failure, exc)
            self.notifier.error(failure)
            return False, None
        self.notifier.success(success)
        return True, result

    async def _confirmed(self, request: ConfirmationRequest) -> bool:
        if await ask(self.confirmer, request):
            return True
        logger.debug("%s on %s declined", request.action, request.target_id)
        return False
