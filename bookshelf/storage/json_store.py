import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ..errors import CorruptDataError, StorageUnavailableError
from .write_queue import WriteQueue

logger = logging.getLogger(__name__)

SAMPLE_BOOKS = (
    {"id": 1, "title": "Atomic Habits", "author": "James Clear", "available": True},
    {"id": 2, "title": "Deep Work", "author": "Cal Newport", "available": False},
)


def _is_record(item) -> bool:
    book_id = item.get("id") if isinstance(item, dict) else None
    return isinstance(book_id, int) and not isinstance(book_id, bool)


def _max_id(books) -> int:
    return max((b.get("id") or 0 for b in books), default=0)


def sample_books() -> List[Dict[str, Any]]:
    """Fresh copy of the seed records; callers may mutate it freely."""
    return [dict(b) for b in SAMPLE_BOOKS]


class BookStore:
    """The whole book collection as one JSON array in one file.

    Reads hit the disk every time. Writes go through a single-worker
    queue and land via temp file + ``os.replace`` so a reader never sees a
    half-written file.
    """

    def __init__(self, path: Path, queue: Optional[WriteQueue] = None):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._queue = queue or WriteQueue()
        self._ids_lock = threading.Lock()
        self._last_id = 0

    def load(self) -> List[Dict[str, Any]]:
        books = self._read()
        if books is None:
            books = self._queue.run(self._read_or_seed)
        return books

    def save(self, books: List[Dict[str, Any]]):
        # Serialize now so later mutation by the caller can't change what gets written
        payload = self._dump(books)
        self._remember_ids(books)
        self._queue.run(self._write, payload)

    def mutate(self, fn: Callable[[List[Dict[str, Any]]], Any]) -> Any:
        """Load, apply ``fn`` in place and save, all on the writer thread.

        Nothing is written if ``fn`` raises.
        """
        return self._queue.run(self._apply, fn)

    def next_id(self, books: List[Dict[str, Any]]) -> int:
        """Next id above every id in ``books`` and every id this store has handled.

        The high-water mark lives in memory only, so a restart falls back to
        the largest id on disk.
        """
        with self._ids_lock:
            return max(self._last_id, _max_id(books)) + 1

    def close(self):
        self._queue.close()

    def _remember_ids(self, books):
        with self._ids_lock:
            self._last_id = max(self._last_id, _max_id(books))

    def _apply(self, fn):
        books = self._read_or_seed()
        self._remember_ids(books)
        result = fn(books)
        self._remember_ids(books)
        self._write(self._dump(books))
        return result

    def _read_or_seed(self) -> List[Dict[str, Any]]:
        # Runs on the writer thread, so two first loads can't both seed
        books = self._read()
        if books is not None:
            return books
        logger.info("Books file %s not found; seeding sample books", self.path)
        self._write(self._dump(sample_books()))
        return sample_books()

    def _read(self) -> Optional[List[Dict[str, Any]]]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CorruptDataError() from e
        except OSError as e:
            raise StorageUnavailableError(cause=e) from e

        if not isinstance(data, list) or not all(_is_record(b) for b in data):
            raise CorruptDataError()
        return data

    @staticmethod
    def _dump(books) -> str:
        return json.dumps(list(books), indent=2, ensure_ascii=False)

    def _write(self, payload: str):
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            logger.warning("Failed to write books file %s: %s", self.path, e)
            raise StorageUnavailableError(cause=e) from e
        finally:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
