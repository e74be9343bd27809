"""
Book store contract and its in-memory implementation.
All reads and writes go through a single lock.
"""

import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from utilities.logger import get_logger

from .models import Book

logger = get_logger(__name__)


class BookStore(ABC):
    """Storage contract for book records."""

    @abstractmethod
    def add(self, book: Book) -> None:
        """Append a fully formed book. The caller guarantees a unique id."""

    @abstractmethod
    def add_with_next_id(self, factory: Callable[[int], Book]) -> Book:
        """
        Assign the next identifier and insert atomically.

        Args:
            factory: Builds the book from the identifier it is given

        Returns:
            Copy of the stored book
        """

    @abstractmethod
    def get_by_id(self, book_id: int) -> Optional[Book]:
        """Return the book with the given id, or None."""

    @abstractmethod
    def get_all(self) -> List[Book]:
        """Return every book in insertion order."""

    @abstractmethod
    def update(self, book: Book) -> None:
        """Overwrite the mutable fields of an existing book."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored books."""


class InMemoryBookStore(BookStore):
    """
    Process-lifetime book store backed by a list.

    Callers only ever receive copies, so the canonical records are never
    touched outside the lock.
    """

    def __init__(self):
        self._books: List[Book] = []
        self._lock = threading.Lock()

    def _find(self, book_id: int) -> Optional[Book]:
        # caller holds the lock
        return next((b for b in self._books if b.id == book_id), None)

    def _next_id(self) -> int:
        # caller holds the lock
        if not self._books:
            return 1
        return max(b.id for b in self._books) + 1

    def add(self, book: Book) -> None:
        with self._lock:
            self._books.append(book.model_copy())
        logger.debug("Book stored", book_id=book.id)

    def add_with_next_id(self, factory: Callable[[int], Book]) -> Book:
        with self._lock:
            book = factory(self._next_id())
            self._books.append(book)
            stored = book.model_copy()
        logger.debug("Book stored with generated id", book_id=stored.id)
        return stored

    def get_by_id(self, book_id: int) -> Optional[Book]:
        with self._lock:
            book = self._find(book_id)
            return book.model_copy() if book else None

    def get_all(self) -> List[Book]:
        with self._lock:
            return [b.model_copy() for b in self._books]

    def update(self, book: Book) -> None:
        """
        Overwrite title, author, isbn and borrow state of the stored book.

        An unknown id is ignored without raising.
        """
        with self._lock:
            existing = self._find(book.id)
            if existing is not None:
                existing.title = book.title
                existing.author = book.author
                existing.isbn = book.isbn
                existing.is_borrowed = book.is_borrowed
                updated = True
            else:
                updated = False

        if not updated:
            logger.debug("Update ignored for unknown book", book_id=book.id)

    def count(self) -> int:
        with self._lock:
            return len(self._books)
