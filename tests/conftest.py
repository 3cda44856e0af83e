"""Shared fixtures for BookGen tests."""

from __future__ import annotations

import pytest

from bookgen import Book, BookConfig, DocumentSession, StringSink, reset_book_config


@pytest.fixture(autouse=True)
def _default_config() -> None:
    """Every test starts from the default context config."""
    reset_book_config()


@pytest.fixture
def sink() -> StringSink:
    return StringSink()


@pytest.fixture
def session(sink: StringSink) -> DocumentSession:
    return DocumentSession(sink)


@pytest.fixture
def permissive() -> BookConfig:
    return BookConfig(strict_levels=False, strict_depth=False, strict_assets=False)


@pytest.fixture
def book(sink: StringSink) -> Book:
    return Book(sink)
