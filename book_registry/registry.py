import logging
import secrets
import string
import threading
from typing import Callable, Iterable, List, Optional

from book_registry.book import Book
from book_registry.config import settings
from book_registry.validators import TextValidator

logger = logging.getLogger(__name__)

ID_ALPHABET = string.digits + string.ascii_lowercase
MAX_ID_ATTEMPTS = 100

SEED_BOOKS = (
    {"id": "1", "title": "The Hitchhiker's Guide to the Galaxy", "author": "Douglas Adams"},
    {"id": "2", "title": "Pride and Prejudice", "author": "Jane Austen"},
    {"id": "3", "title": "1984", "author": "George Orwell"},
)


class RegistryError(Exception):
    """Kitap kayıt defterinin fırlattığı hataların temel sınıfı."""


class BookNotFoundError(RegistryError, LookupError):
    """İstenen kimlikle eşleşen kitap yoksa fırlatılır."""

    def __init__(self, book_id: str) -> None:
        super().__init__(f"Book with ID {book_id} not found.")
        self.book_id = book_id


class InvalidBookError(RegistryError, ValueError):
    """Zorunlu bir alan eksik veya boşsa fırlatılır."""

    def __init__(self, missing: List[str]) -> None:
        super().__init__(f"Missing required field(s): {', '.join(missing)}")
        self.missing = missing


class IdGenerationError(RegistryError):
    """Kimlik üreteci kullanılabilir, benzersiz bir kimlik veremediğinde fırlatılır."""


def generate_book_id(length: Optional[int] = None) -> str:
    """Kısa, rastgele bir alfasayısal belirteç döndür (base-36, küçük harf)."""
    length = settings.book_id_length if length is None else length
    if length < 1:
        raise ValueError(f"Kimlik uzunluğu en az 1 olmalı, alınan: {length}")
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def seed_books() -> List[Book]:
    return [Book.from_dict(data) for data in SEED_BOOKS]


class BookRegistry:
    """Sıralı, bellek içi kitap koleksiyonunun sahibi.

    Her işlem tek bir yeniden girilebilir kilit altında çalışır; böylece
    eşzamanlı FastAPI uç noktalarını çalıştıran iş parçacıkları kayıt
    defterini paylaşabilir. Dışarıya verilen kayıtlar kopyadır.
    """

    def __init__(self, books: Optional[Iterable[Book]] = None,
                 id_factory: Callable[[], str] = generate_book_id) -> None:
        self._books: List[Book] = []
        self._lock = threading.RLock()
        self._id_factory = id_factory
        initial = seed_books() if books is None else books
        for book in initial:
            if self._index_of(book.id) is not None:
                raise ValueError(f"Duplicate book id {book.id!r} in initial records.")
            self._books.append(book.copy())

    def __len__(self) -> int:
        with self._lock:
            return len(self._books)

    def __contains__(self, book_id: object) -> bool:
        with self._lock:
            return isinstance(book_id, str) and self._index_of(book_id) is not None

    # ------------------------- Çekirdek işlemler ------------------------- #
    def list_books(self) -> List[Book]:
        """Tüm kitaplar, eklenme sırasıyla."""
        with self._lock:
            return [book.copy() for book in self._books]

    def get_book(self, book_id: str) -> Book:
        with self._lock:
            return self._require(book_id).copy()

    def create_book(self, title: Optional[str], author: Optional[str]) -> Book:
        """Doğrula, yeni bir kimlik ata ve kitabı sona ekle.

        Başlık veya yazar boşsa ya da yoksa InvalidBookError fırlatır; bu
        durumda kayıt defteri değişmez.
        """
        missing = TextValidator.missing_fields((("title", title), ("author", author)))
        if missing:
            raise InvalidBookError(missing)

        with self._lock:
            book = Book(id=self._new_id(), title=title, author=author)
            self._books.append(book)
            logger.info(f"Book created: id={book.id}")
            return book.copy()

    def update_book(self, book_id: str, *, title: Optional[str] = None,
                    author: Optional[str] = None) -> Book:
        """Verilen alanların üzerine yaz.

        None alanın gönderilmediği anlamına gelir. Boş dize kabul edilir ama
        gönderilmemiş gibi saklanan değeri korur; erişilebilir bir kayıt asla
        boş başlık veya yazarla kalmaz.
        """
        with self._lock:
            book = self._require(book_id)
            if TextValidator.validate_title(title):
                book.title = title
            if TextValidator.validate_author(author):
                book.author = author
            logger.info(f"Book updated: id={book_id}")
            return book.copy()

    def delete_book(self, book_id: str) -> None:
        with self._lock:
            index = self._index_of(book_id)
            if index is None:
                raise BookNotFoundError(book_id)
            del self._books[index]
            logger.info(f"Book deleted: id={book_id}")

    # ------------------------- Yardımcılar ------------------------- #
    def _index_of(self, book_id: str) -> Optional[int]:
        for index, book in enumerate(self._books):
            if book.id == book_id:
                return index
        return None

    def _require(self, book_id: str) -> Book:
        index = self._index_of(book_id)
        if index is None:
            raise BookNotFoundError(book_id)
        return self._books[index]

    def _new_id(self) -> str:
        # Çağıran kilidi tutuyor; sınırsız dönmek tüm istekleri kilitler.
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if not candidate:
                logger.warning("Id factory returned an empty id, retrying")
                continue
            if self._index_of(candidate) is None:
                return candidate
            logger.debug(f"Generated id {candidate} collides with an existing book, retrying")
        raise IdGenerationError(f"Could not generate a unique book id after {MAX_ID_ATTEMPTS} attempts.")
