"""
Catalog service: book creation and the borrow/return lifecycle.
"""

from typing import List, Optional

from catalog.models import Book, BookInput, BookView
from catalog.store import BookStore
from utilities.logger import CatalogLogger


class CatalogService:
    """
    Operations on the book catalog.

    Failures are reported with a ``None`` result rather than an exception:
    a missing book and a book in the wrong borrow state look the same to
    the caller.
    """

    def __init__(self, store: BookStore):
        self.store = store
        self.events = CatalogLogger("catalog.service").bind_context(
            store=type(store).__name__
        )

    def add_book(self, book_input: BookInput) -> Book:
        """
        Create an available book with the next free identifier.

        Args:
            book_input: Validated creation payload

        Returns:
            The created book
        """
        book = self.store.add_with_next_id(
            lambda book_id: Book.from_input(book_id, book_input)
        )
        self.events.log_book_added(book.id, book.title, book.author)
        return book

    def borrow_book(self, book_id: int) -> Optional[BookView]:
        """
        Mark an available book as borrowed.

        Returns:
            View of the borrowed book, or None if it does not exist or is
            already borrowed
        """
        book = self.store.get_by_id(book_id)
        if book is None:
            self.events.log_transition_rejected(book_id, "borrow", "not_found")
            return None
        if book.is_borrowed:
            self.events.log_transition_rejected(book_id, "borrow", "already_borrowed")
            return None

        book.is_borrowed = True
        self.store.update(book)
        self.events.log_borrowed(book_id)
        return book.to_view()

    def return_book(self, book_id: int) -> Optional[BookView]:
        """
        Mark a borrowed book as available again.

        Returns:
            View of the returned book, or None if it does not exist or is
            not borrowed
        """
        book = self.store.get_by_id(book_id)
        if book is None:
            self.events.log_transition_rejected(book_id, "return", "not_found")
            return None
        if not book.is_borrowed:
            self.events.log_transition_rejected(book_id, "return", "not_borrowed")
            return None

        book.is_borrowed = False
        self.store.update(book)
        self.events.log_returned(book_id)
        return book.to_view()

    def get_by_id(self, book_id: int) -> Optional[Book]:
        return self.store.get_by_id(book_id)

    def get_all_books(self) -> List[BookView]:
        books = self.store.get_all()
        self.events.log_store_operation("get_all", True, count=len(books))
        return [book.to_view() for book in books]

    def count_books(self) -> int:
        return self.store.count()
