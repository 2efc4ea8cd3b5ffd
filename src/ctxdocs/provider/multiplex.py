"""Share one provider per distinct settings value.

Creating a provider loads its corpus index, so a host that issues many
requests with the same settings should reuse the instance.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Dict, Generic, Hashable, TypeVar

from ctxdocs.provider.provider import Provider

S = TypeVar("S", bound=Hashable)
P = TypeVar("P", bound=Provider)


class ProviderMultiplexer(Generic[S, P]):
    """Caches providers created by `factory`, keyed by settings."""

    def __init__(self, factory: Callable[[S], Awaitable[P]]) -> None:
        self._factory = factory
        self._pending: Dict[S, "asyncio.Task[P]"] = {}

    async def get(self, settings: S) -> P:
        """Return the provider for `settings`, creating it on first use.

        Concurrent callers with equal settings await the same creation.
        A failed creation is forgotten so the next call retries it.
        """
        task = self._pending.get(settings)
        if task is None:
            task = asyncio.ensure_future(self._factory(settings))
            self._pending[settings] = task
        try:
            return await asyncio.shield(task)
        except Exception:
            if self._pending.get(settings) is task:
                del self._pending[settings]
            raise

    def clear(self) -> None:
        """Forget all cached providers."""
        self._pending.clear()
