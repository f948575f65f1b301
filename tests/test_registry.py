import threading

import pytest

from book_registry.book import Book
from book_registry.config import settings
from book_registry.registry import (
    BookNotFoundError,
    BookRegistry,
    IdGenerationError,
    InvalidBookError,
    generate_book_id,
)


def test_seeded_registry_lists_in_order(registry):
    books = registry.list_books()
    assert [b.id for b in books] == ["1", "2", "3"]
    assert books[0].author == "Douglas Adams"
    assert books[1].title == "Pride and Prejudice"


def test_empty_registry(empty_registry):
    assert empty_registry.list_books() == []
    assert len(empty_registry) == 0


@pytest.mark.parametrize("title, author", [
    ("Dune", "Herbert"),
    ("  padded title  ", "Author"),
    ("Suç ve Ceza", "Fyodor Dostoyevski"),
    ("x", "y"),
])
def test_create_then_get_returns_exact_values(registry, title, author):
    created = registry.create_book(title, author)
    found = registry.get_book(created.id)
    assert found.title == title
    assert found.author == author
    assert found.id == created.id
    assert len(registry) == 4


def test_create_appends_at_end(registry):
    created = registry.create_book("Dune", "Herbert")
    assert registry.list_books()[-1] == created


@pytest.mark.parametrize("title, author, missing", [
    ("", "Herbert", ["title"]),
    ("Dune", "", ["author"]),
    (None, "Herbert", ["title"]),
    ("Dune", None, ["author"]),
    (None, None, ["title", "author"]),
])
def test_create_requires_title_and_author(registry, title, author, missing):
    with pytest.raises(InvalidBookError) as exc_info:
        registry.create_book(title, author)
    assert exc_info.value.missing == missing
    assert len(registry) == 3


def test_get_nonexistent_raises(registry):
    with pytest.raises(BookNotFoundError) as exc_info:
        registry.get_book("nonexistent")
    assert exc_info.value.book_id == "nonexistent"


def test_delete_nonexistent_raises(registry):
    with pytest.raises(BookNotFoundError):
        registry.delete_book("nonexistent")
    assert len(registry) == 3


def test_delete_then_get_raises(registry):
    registry.delete_book("3")
    assert len(registry) == 2
    assert "3" not in registry
    with pytest.raises(BookNotFoundError):
        registry.get_book("3")
    with pytest.raises(BookNotFoundError):
        registry.delete_book("3")


def test_update_book_partial(registry):
    updated = registry.update_book("2", title="P&P Rev.")
    assert updated.title == "P&P Rev."
    assert updated.author == "Jane Austen"

    updated = registry.update_book("2", author="J. Austen")
    assert updated.title == "P&P Rev."
    assert updated.author == "J. Austen"
    assert registry.get_book("2") == updated


def test_update_empty_fields_keep_stored_values(registry):
    updated = registry.update_book("1", title="", author="")
    assert updated.title == "The Hitchhiker's Guide to the Galaxy"
    assert updated.author == "Douglas Adams"


def test_update_with_nothing_returns_unchanged(registry):
    before = registry.get_book("1")
    assert registry.update_book("1") == before


def test_update_not_found(registry):
    with pytest.raises(BookNotFoundError):
        registry.update_book("nonexistent", title="New Title")


def test_update_keeps_position(registry):
    registry.update_book("1", title="Mostly Harmless")
    assert [b.id for b in registry.list_books()] == ["1", "2", "3"]


def test_returned_books_are_snapshots(registry):
    book = registry.get_book("1")
    book.title = "Tampered"
    registry.list_books()[0].author = "Tampered"
    stored = registry.get_book("1")
    assert stored.title == "The Hitchhiker's Guide to the Galaxy"
    assert stored.author == "Douglas Adams"


def test_initial_books_are_copied():
    seed = [Book("a", "Title", "Author")]
    reg = BookRegistry(books=seed)
    seed[0].title = "Changed"
    assert reg.get_book("a").title == "Title"


def test_duplicate_initial_ids_rejected():
    with pytest.raises(ValueError):
        BookRegistry(books=[Book("a", "One", "X"), Book("a", "Two", "Y")])


def test_generate_book_id_shape():
    token = generate_book_id()
    assert len(token) == 9
    assert token.isalnum()
    assert token == token.lower()
    assert len(generate_book_id(4)) == 4


def test_generated_ids_skip_collisions():
    ids = iter(["1", "2", "abc123xyz"])
    reg = BookRegistry(id_factory=lambda: next(ids))
    book = reg.create_book("Dune", "Herbert")
    assert book.id == "abc123xyz"


def test_generated_ids_are_unique(empty_registry):
    created = [empty_registry.create_book(f"Title {i}", "Author") for i in range(200)]
    assert len({b.id for b in created}) == 200


def test_concurrent_creates_are_not_lost(registry):
    per_thread = 50
    threads = [
        threading.Thread(
            target=lambda n=n: [registry.create_book(f"Book {n}-{i}", f"Author {n}") for i in range(per_thread)]
        )
        for n in range(8)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    books = registry.list_books()
    assert len(books) == 3 + 8 * per_thread
    assert len({b.id for b in books}) == len(books)


def test_concurrent_updates_and_deletes(registry):
    created = [registry.create_book(f"Title {i}", "Author") for i in range(100)]
    errors = []

    def updater():
        for book in created:
            try:
                registry.update_book(book.id, author="Updated")
            except BookNotFoundError:
                pass
            except Exception as e:  # pragma: no cover - only on failure
                errors.append(e)

    def deleter():
        for book in created[::2]:
            registry.delete_book(book.id)

    threads = [threading.Thread(target=updater), threading.Thread(target=deleter)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(registry) == 3 + 50


@pytest.mark.parametrize("length", [0, -3])
def test_generate_book_id_rejects_non_positive_length(length):
    with pytest.raises(ValueError):
        generate_book_id(length)


def test_generate_book_id_defaults_to_configured_length():
    assert len(generate_book_id(None)) == settings.book_id_length


@pytest.mark.parametrize("token", ["1", ""])
def test_unusable_id_factory_raises_instead_of_spinning(token):
    reg = BookRegistry(id_factory=lambda: token)
    with pytest.raises(IdGenerationError):
        reg.create_book("Dune", "Herbert")
    assert len(reg) == 3
    assert "" not in reg

    # The lock is released after the failure
    reg.delete_book("1")
    assert len(reg) == 2
