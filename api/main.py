"""
FastAPI main application for the Library Management API.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import config as api_config
from api.models import BookActionResponse, ErrorResponse, HealthResponse
from catalog.models import Book, BookInput, BookView
from catalog.service import CatalogService
from catalog.store import InMemoryBookStore
from utilities.config import config
from utilities.logger import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.get_log_file_path(),
        debug=config.debug
    )
    logger.info(
        "Starting Library Management API",
        version=api_config.api_version,
        production=config.is_production()
    )

    # One store and service for the whole process lifetime
    store = InMemoryBookStore()
    app.state.catalog_service = CatalogService(store)

    yield

    logger.info(
        "Shutting down Library Management API",
        books_in_catalog=store.count()
    )


app = FastAPI(
    title=api_config.api_title,
    description=api_config.api_description,
    version=api_config.api_version,
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT",
    },
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=api_config.cors_origins,
    allow_credentials=api_config.cors_allow_credentials,
    allow_methods=api_config.cors_allow_methods,
    allow_headers=api_config.cors_allow_headers,
)


def get_catalog_service(request: Request) -> CatalogService:
    """Return the catalog service created at startup."""
    return request.app.state.catalog_service


# Exception handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.detail,
            status_code=exc.status_code
        ).model_dump(),
        headers=exc.headers
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    """Report malformed requests as 400 Bad Request."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    body_errors = any(error["loc"] and error["loc"][0] == "body" for error in exc.errors())
    logger.warning("Invalid request", path=request.url.path, problems=problems)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(
            error="Invalid book data." if body_errors else "Invalid request.",
            detail=problems,
            status_code=status.HTTP_400_BAD_REQUEST
        ).model_dump()
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle general exceptions."""
    logger.error("Unhandled exception", error=str(exc), path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            detail=str(exc) if api_config.debug else None,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        ).model_dump()
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
def health_check(service: CatalogService = Depends(get_catalog_service)):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=api_config.api_version,
        book_count=service.count_books()
    )


# Books endpoints
@app.post(
    "/api/books",
    response_model=Book,
    tags=["Books"],
    summary="Add a new book",
    description="Adds a book with title, author, and ISBN.",
    responses={
        200: {"description": "Book added successfully."},
        400: {"model": ErrorResponse, "description": "Invalid book data."},
    },
)
def add_book(book: BookInput, service: CatalogService = Depends(get_catalog_service)):
    return service.add_book(book)


@app.put(
    "/api/books/{book_id}/borrow",
    response_model=BookActionResponse,
    tags=["Books"],
    summary="Borrow a book",
    description="Marks a book as borrowed.",
    responses={
        200: {"description": "Book borrowed successfully."},
        404: {"model": ErrorResponse, "description": "Book not available for borrowing."},
    },
)
def borrow_book(book_id: int, service: CatalogService = Depends(get_catalog_service)):
    book = service.borrow_book(book_id)
    if book is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Book not available for borrowing."
        )
    return BookActionResponse(message="Book borrowed successfully.", book=book)


@app.put(
    "/api/books/{book_id}/return",
    response_model=BookActionResponse,
    tags=["Books"],
    summary="Return a book",
    description="Marks a borrowed book as returned.",
    responses={
        200: {"description": "Book returned successfully."},
        404: {"model": ErrorResponse, "description": "Book is either not found or wasn't borrowed."},
    },
)
def return_book(book_id: int, service: CatalogService = Depends(get_catalog_service)):
    book = service.return_book(book_id)
    if book is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Book is either not found or wasn't borrowed."
        )
    return BookActionResponse(message="Book returned successfully.", book=book)


@app.get(
    "/api/books/{book_id}",
    response_model=Book,
    tags=["Books"],
    summary="Get a book by id",
    responses={404: {"model": ErrorResponse, "description": "Book not found."}},
)
def get_book(book_id: int, service: CatalogService = Depends(get_catalog_service)):
    book = service.get_by_id(book_id)
    if book is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Book not found."
        )
    return book


@app.get(
    "/api/books",
    response_model=List[BookView],
    tags=["Books"],
    summary="List all books",
    description="Lists every book in the order it was added.",
)
def get_all_books(service: CatalogService = Depends(get_catalog_service)):
    return service.get_all_books()
