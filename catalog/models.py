"""
Pydantic models for the book catalog.
Defines the Book entity, the creation payload and the response view.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class BookInput(BaseModel):
    """
    Payload used to create a book.
    Only title and author are required; the ISBN is stored as given.
    """
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Book author")
    isbn: Optional[str] = Field("", description="ISBN, unformatted; null is stored as empty")

    @field_validator('title', 'author')
    @classmethod
    def validate_present(cls, v, info):
        """Reject blank title or author."""
        v = v.strip()
        if not v:
            raise ValueError(f'{info.field_name} must not be empty')
        return v

    @field_validator('isbn')
    @classmethod
    def strip_isbn(cls, v):
        return (v or "").strip()

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "The Pragmatic Programmer",
                "author": "Andrew Hunt",
                "isbn": "9780201616224"
            }
        }
    }


class BookView(BaseModel):
    """Read-only snapshot of a book returned to API clients."""
    id: int = Field(..., gt=0, description="Book identifier")
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Book author")
    isbn: str = Field(..., description="ISBN, unformatted")
    is_borrowed: bool = Field(..., description="Whether the book is currently borrowed")

    model_config = {"frozen": True}


class Book(BaseModel):
    """
    Book entity held by the store.

    The identifier is assigned by the catalog service and never reused.
    Only ``is_borrowed`` changes after creation.
    """
    id: int = Field(..., gt=0, description="Unique book identifier")
    title: str = Field(..., min_length=1, description="Book title")
    author: str = Field(..., min_length=1, description="Book author")
    isbn: str = Field("", description="ISBN, unformatted")
    is_borrowed: bool = Field(default=False, description="Borrow state")

    model_config = {
        "validate_assignment": True,
        "json_schema_extra": {
            "example": {
                "id": 1,
                "title": "The Pragmatic Programmer",
                "author": "Andrew Hunt",
                "isbn": "9780201616224",
                "is_borrowed": False
            }
        }
    }

    @classmethod
    def from_input(cls, book_id: int, book_input: BookInput) -> "Book":
        """Build a new, available book from a creation payload."""
        return cls(
            id=book_id,
            title=book_input.title,
            author=book_input.author,
            isbn=book_input.isbn,
            is_borrowed=False
        )

    @property
    def is_available(self) -> bool:
        return not self.is_borrowed

    def to_view(self) -> BookView:
        """Map the entity to its external representation."""
        return BookView(
            id=self.id,
            title=self.title,
            author=self.author,
            isbn=self.isbn,
            is_borrowed=self.is_borrowed
        )
