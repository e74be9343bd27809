"""
Catalog package for the book lending system.

This package contains:
- Book, BookInput and BookView models
- Book store contract and its in-memory implementation
- Catalog service enforcing the borrow/return lifecycle
"""

__version__ = "1.0.0"
__author__ = "Library Management"
