from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable


class WriteQueue:
    """Runs write tasks one at a time, in the order they were submitted.

    A single worker thread owns every write. A task that raises only fails
    its own future; the worker moves on to the next task.
    """

    def __init__(self, name: str = "book-store-writer"):
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)

    def submit(self, fn: Callable[..., Any], *args, **kwargs) -> Future:
        return self._executor.submit(fn, *args, **kwargs)

    def run(self, fn: Callable[..., Any], *args, **kwargs) -> Any:
        """Submit a task and block until it finishes, re-raising its error."""
        return self.submit(fn, *args, **kwargs).result()

    def close(self):
        # Pending writes still run to completion
        self._executor.shutdown(wait=True)
