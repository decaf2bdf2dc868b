import asyncio
import functools
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

from exam_compressor.logging.logger import Log

T = TypeVar("T")


class CompressionExecutor:
    """Bounded worker pool that keeps CPU-bound compression off the event loop."""

    def __init__(self, max_workers: int) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._max_workers = max_workers
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="compress"
        )

    @property
    def max_workers(self) -> int:
        return self._max_workers

    async def run(self, func: Callable[..., T], *args: object, **kwargs: object) -> T:
        """Submit func to the pool and suspend until its result is ready."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._pool, functools.partial(func, *args, **kwargs)
        )

    def shutdown(self) -> None:
        Log.info("Shutting down compression workers")
        self._pool.shutdown(wait=True)
