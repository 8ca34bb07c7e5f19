"""
Unit tests for CatalogStore.

Tests loading (best-effort, blank lines, rejects), searching, adding with
the ISBN uniqueness check, ordering, and whole-file persistence.
"""

from __future__ import annotations

import pytest

from booktracker.catalog.store import CatalogStore
from booktracker.domain.entities import Book
from booktracker.infra.exceptions import DuplicateISBNError

from tests.util.catalog_utils import DUNE, FOUNDATION, read_lines

pytestmark = pytest.mark.unit


def _book(title: str, isbn: str, author: str = "Someone", copies: int = 1) -> Book:
    return Book(title=title, author=author, isbn=isbn, copies=copies)


class TestLoad:
    def test_load_keeps_file_order(self, write_catalog, audit):
        path = write_catalog(FOUNDATION, DUNE)

        store, rejected = CatalogStore.load(path, audit)

        assert rejected == 0
        assert [b.title for b in store.books] == ["Foundation", "Dune"]

    def test_blank_lines_are_skipped_silently(self, write_catalog, audit):
        path = write_catalog("", DUNE, "   ", "\t", FOUNDATION, "")

        store, rejected = CatalogStore.load(path, audit)

        assert len(store) == 2
        assert rejected == 0
        assert not audit.target.exists()

    def test_non_breaking_space_line_is_not_blank(self, write_catalog, audit):
        path = write_catalog(DUNE, "\xa0", "\xa0Foundation:Isaac Asimov:9780553293357:5")

        store, rejected = CatalogStore.load(path, audit)

        assert rejected == 1
        assert [b.title for b in store.books] == ["Dune", "\xa0Foundation"]
        (entry,) = read_lines(audit.target)
        assert "MalformedRecord" in entry

    def test_bad_lines_are_counted_audited_and_skipped(self, write_catalog, audit):
        path = write_catalog(
            DUNE,
            "Broken:Only Three:9780000000000",
            "Bad ISBN:Someone:12345:1",
            FOUNDATION,
        )

        store, rejected = CatalogStore.load(path, audit)

        assert rejected == 2
        assert [b.title for b in store.books] == ["Dune", "Foundation"]
        entries = read_lines(audit.target)
        assert len(entries) == 2
        assert '"Broken:Only Three:9780000000000"' in entries[0]
        assert "MalformedRecord" in entries[0]
        assert "InvalidISBN" in entries[1]

    def test_load_does_not_check_isbn_uniqueness(self, write_catalog, audit):
        path = write_catalog("One:A:1111111111111:1", "Two:B:1111111111111:2")

        store, rejected = CatalogStore.load(path, audit)

        assert rejected == 0
        assert len(store) == 2

    def test_empty_file(self, write_catalog, audit):
        store, rejected = CatalogStore.load(write_catalog(), audit)

        assert len(store) == 0
        assert rejected == 0


class TestSearch:
    def test_find_by_isbn_exact(self, write_catalog, audit):
        store, _ = CatalogStore.load(write_catalog(DUNE, FOUNDATION), audit)

        assert [b.title for b in store.find_by_isbn("9780441013593")] == ["Dune"]
        assert store.find_by_isbn("9780441013594") == []

    def test_find_by_isbn_returns_every_duplicate(self, write_catalog, audit):
        path = write_catalog("One:A:1111111111111:1", "Two:B:1111111111111:2")
        store, _ = CatalogStore.load(path, audit)

        assert len(store.find_by_isbn("1111111111111")) == 2

    def test_find_by_title_is_case_insensitive_substring(self, tmp_path):
        store = CatalogStore(
            tmp_path / "books.txt",
            [
                _book("Children of Dune", "9780441104024"),
                _book("Dune", "9780441013593"),
                _book("Dune Messiah", "9780593098233"),
                _book("Foundation", "9780553293357"),
            ],
        )

        titles = [b.title for b in store.find_by_title("dUnE")]

        assert titles == ["Children of Dune", "Dune", "Dune Messiah"]

    def test_find_by_title_no_match(self, tmp_path):
        store = CatalogStore(tmp_path / "books.txt", [_book("Dune", "9780441013593")])

        assert store.find_by_title("asimov") == []

    def test_search_is_repeatable(self, write_catalog, audit):
        store, _ = CatalogStore.load(write_catalog(DUNE, FOUNDATION), audit)

        assert store.find_by_title("o") == store.find_by_title("o")
        assert store.find_by_isbn("9780553293357") == store.find_by_isbn("9780553293357")


class TestAdd:
    def test_add_sorts_and_rewrites_file(self, write_catalog, audit):
        path = write_catalog(DUNE)
        store, _ = CatalogStore.load(path, audit)

        store.add(Book("Foundation", "Isaac Asimov", "9780553293357", 5))

        assert [b.title for b in store.books] == ["Dune", "Foundation"]
        assert read_lines(path) == [DUNE, FOUNDATION]

    def test_add_inserts_before_existing_titles(self, write_catalog, audit):
        path = write_catalog(FOUNDATION)
        store, _ = CatalogStore.load(path, audit)

        store.add(Book("dune", "Frank Herbert", "9780441013593", 3))

        assert read_lines(path) == ["dune:Frank Herbert:9780441013593:3", FOUNDATION]

    def test_add_sorts_a_previously_unsorted_file(self, write_catalog, audit):
        path = write_catalog(FOUNDATION, DUNE)
        store, _ = CatalogStore.load(path, audit)

        store.add(_book("Anathem", "9780061474095"))

        assert [b.title for b in store.books] == ["Anathem", "Dune", "Foundation"]

    def test_equal_titles_keep_prior_order(self, tmp_path):
        path = tmp_path / "books.txt"
        store = CatalogStore(
            path,
            [_book("alpha", "1000000000001"), _book("Alpha", "1000000000002")],
        )

        store.add(_book("ALPHA", "1000000000003"))

        assert [b.isbn for b in store.books] == [
            "1000000000001",
            "1000000000002",
            "1000000000003",
        ]

    def test_duplicate_isbn_leaves_catalog_and_file_unchanged(self, write_catalog, audit):
        path = write_catalog(FOUNDATION, DUNE)
        before = path.read_bytes()
        store, _ = CatalogStore.load(path, audit)

        with pytest.raises(DuplicateISBNError, match="9780441013593 already exists"):
            store.add(Book("Dune (reissue)", "Frank Herbert", "9780441013593", 1))

        assert [b.title for b in store.books] == ["Foundation", "Dune"]
        assert path.read_bytes() == before


class TestPersist:
    def test_persist_then_load_round_trip(self, tmp_path, audit):
        path = tmp_path / "books.txt"
        books = [
            _book("Anathem", "9780061474095", "Neal Stephenson", 2),
            _book("Dune", "9780441013593", "Frank Herbert", 3),
        ]
        CatalogStore(path, books).persist()

        loaded, rejected = CatalogStore.load(path, audit)

        assert rejected == 0
        assert list(loaded.books) == books

    def test_persist_overwrites_instead_of_appending(self, write_catalog):
        path = write_catalog(DUNE, FOUNDATION, "garbage line")
        store = CatalogStore(path, [_book("Only", "1234567890123")])

        store.persist()

        assert read_lines(path) == ["Only:Someone:1234567890123:1"]

    def test_persist_leaves_no_temp_file(self, tmp_path):
        path = tmp_path / "books.txt"
        CatalogStore(path, [_book("Only", "1234567890123")]).persist()

        assert sorted(p.name for p in tmp_path.iterdir()) == ["books.txt"]

    def test_failed_replace_keeps_old_contents(self, write_catalog, monkeypatch):
        path = write_catalog(DUNE)
        store = CatalogStore(path, [_book("Other", "1234567890123")])

        def _boom(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("booktracker.catalog.store.os.replace", _boom)

        with pytest.raises(OSError, match="disk full"):
            store.persist()

        assert read_lines(path) == [DUNE]
        assert not path.with_name("books.txt.tmp").exists()

    def test_failed_add_rolls_back_books(self, write_catalog, audit, monkeypatch):
        path = write_catalog(DUNE)
        store, _ = CatalogStore.load(path, audit)

        def _boom(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("booktracker.catalog.store.os.replace", _boom)

        with pytest.raises(OSError, match="disk full"):
            store.add(Book("Foundation", "Isaac Asimov", "9780553293357", 5))

        assert [b.title for b in store.books] == ["Dune"]
        assert store.find_by_isbn("9780553293357") == []
        assert read_lines(path) == [DUNE]
