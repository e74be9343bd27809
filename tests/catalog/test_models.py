"""
Unit tests for the catalog models.
Tests presence validation, defaults and the view mapping.
"""

import pytest
from pydantic import ValidationError

from catalog.models import Book, BookInput, BookView


class TestBookInput:
    """Test cases for BookInput model."""

    def test_valid_input(self):
        book_input = BookInput(title="Emma", author="Jane Austen", isbn="9780141439587")

        assert book_input.title == "Emma"
        assert book_input.author == "Jane Austen"
        assert book_input.isbn == "9780141439587"

    def test_isbn_is_optional(self):
        book_input = BookInput(title="Emma", author="Jane Austen")
        assert book_input.isbn == ""

    def test_null_isbn_becomes_empty(self):
        book_input = BookInput(title="Emma", author="Jane Austen", isbn=None)
        assert book_input.isbn == ""

    def test_whitespace_is_stripped(self):
        book_input = BookInput(title="  Emma ", author=" Jane Austen", isbn=" 123 ")

        assert book_input.title == "Emma"
        assert book_input.author == "Jane Austen"
        assert book_input.isbn == "123"

    def test_missing_title(self):
        with pytest.raises(ValidationError):
            BookInput(author="Jane Austen")

    def test_blank_author(self):
        with pytest.raises(ValidationError) as exc_info:
            BookInput(title="Emma", author="   ")

        assert "author must not be empty" in str(exc_info.value)

    def test_isbn_is_not_formatted(self):
        """ISBN text is kept as given, without checksum or format checks."""
        book_input = BookInput(title="Emma", author="Jane Austen", isbn="not-an-isbn")
        assert book_input.isbn == "not-an-isbn"


class TestBook:
    """Test cases for Book entity."""

    def test_from_input_starts_available(self, sample_book_input):
        book = Book.from_input(7, sample_book_input)

        assert book.id == 7
        assert book.title == "Dune"
        assert book.author == "Frank Herbert"
        assert book.isbn == "9780441172719"
        assert book.is_borrowed is False
        assert book.is_available is True

    def test_identifier_must_be_positive(self):
        with pytest.raises(ValidationError):
            Book(id=0, title="Emma", author="Jane Austen")

    def test_to_view_copies_state(self, sample_book_input):
        book = Book.from_input(1, sample_book_input)
        book.is_borrowed = True

        view = book.to_view()

        assert isinstance(view, BookView)
        assert view.id == 1
        assert view.is_borrowed is True

        # later changes to the entity do not leak into the view
        book.is_borrowed = False
        assert view.is_borrowed is True

    def test_view_is_frozen(self, sample_book_input):
        view = Book.from_input(1, sample_book_input).to_view()

        with pytest.raises(ValidationError):
            view.is_borrowed = True
