"""Shared fixtures for unit tests."""

from collections.abc import Callable

import pytest

from bookdedupe.models import BookRecord


@pytest.fixture
def make_book() -> Callable[..., BookRecord]:
    """Factory for test records with minimal boilerplate.

    Titles default to a value derived from the id so that records built
    without a title never match each other by accident.
    """

    def _factory(
        book_id: int = 1,
        title: str | None = None,
        authors: str = "Unknown Author",
        *,
        identifiers: str | None = None,
        formats: str | None = None,
    ) -> BookRecord:
        return BookRecord(
            id=book_id,
            title=title if title is not None else f"Untitled {book_id}",
            authors=authors,
            identifiers=identifiers,
            formats=formats,
        )

    return _factory


@pytest.fixture
def hobbit_dune(make_book: Callable[..., BookRecord]) -> list[BookRecord]:
    """The Hobbit twice under different title conventions, plus Dune."""
    return [
        make_book(1, "The Hobbit", "J.R.R. Tolkien"),
        make_book(2, "Hobbit, The", "J.R.R. Tolkien"),
        make_book(3, "Dune", "Frank Herbert"),
    ]
