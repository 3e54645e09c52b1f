"""
Lazily loaded, process-wide resources.

A LazyResource wraps an async loader and memoizes the future of its first
run, so every requester shares one in-flight load:

    uninitialized -> loading -> ready
                             -> failed

Failure is terminal: the same error is re-raised to every caller until
reset() is called explicitly.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResourceState(str, Enum):
    """Lifecycle of a lazily loaded resource."""
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ResourceLoadError(Exception):
    """A lazily loaded resource could not be initialised."""
    pass


class LazyResource(Generic[T]):
    """Load-once holder for an expensive resource."""

    def __init__(self, name: str, loader: Callable[[], Awaitable[T]]):
        self.name = name
        self._loader = loader
        self._future: Optional[asyncio.Future] = None

    @property
    def state(self) -> ResourceState:
        if self._future is None:
            return ResourceState.UNINITIALIZED
        if not self._future.done():
            return ResourceState.LOADING
        if self._future.cancelled() or self._future.exception() is not None:
            return ResourceState.FAILED
        return ResourceState.READY

    async def get(self) -> T:
        """Return the resource, starting the load on first use."""
        if self._future is None:
            logger.info(f"Loading {self.name}...")
            self._future = asyncio.ensure_future(self._load())
        # A cancelled waiter must not cancel the shared load
        return await asyncio.shield(self._future)

    async def _load(self) -> T:
        try:
            value = await self._loader()
        except Exception as e:
            logger.error(f"Failed to load {self.name}: {e}")
            raise ResourceLoadError(f"Failed to load {self.name}") from e
        logger.info(f"{self.name} ready")
        return value

    def reset(self) -> None:
        """Forget the previous outcome so the next get() loads again."""
        if self._future is not None and not self._future.done():
            self._future.cancel()
        self._future = None
