"""Book manager: transactional data access for a library of books."""

__version__ = "0.1.0"
