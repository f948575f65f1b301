from __future__ import annotations


class Book:
    """Kayıt defterindeki tek bir kitap kaydını temsil eder."""

    def __init__(self, id: str, title: str, author: str) -> None:
        self.id = id
        self.title = title
        self.author = author

    def __str__(self) -> str:  # pragma: no cover - dize biçimlendirme önemsiz
        return f"{self.title} by {self.author} (ID: {self.id})"

    def __repr__(self) -> str:  # pragma: no cover
        return f"Book(id={self.id!r}, title={self.title!r}, author={self.author!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict:
        return {"id": self.id, "title": self.title, "author": self.author}

    @staticmethod
    def from_dict(data: dict) -> "Book":
        return Book(id=data["id"], title=data["title"], author=data["author"])

    def copy(self) -> "Book":
        return Book.from_dict(self.to_dict())
