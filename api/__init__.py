"""
FastAPI RESTful API for the Library Management System.

This module provides a REST API for:
- Adding books to the catalog
- Borrowing and returning books
- Looking up a single book or listing the whole catalog
"""
