from typing import Iterable, List, Optional


class TextValidator:
    """Bir kitabın zorunlu metin alanları için varlık kontrolleri.

    Boş olmayan bir dize olan değer mevcut sayılır. Değerler asla
    kırpılmaz veya yeniden yazılmaz; gönderilen değer aynen saklanır.
    """

    @staticmethod
    def is_present(text: Optional[str]) -> bool:
        return isinstance(text, str) and len(text) > 0

    @staticmethod
    def validate_title(title: Optional[str]) -> bool:
        return TextValidator.is_present(title)

    @staticmethod
    def validate_author(author: Optional[str]) -> bool:
        return TextValidator.is_present(author)

    @staticmethod
    def missing_fields(fields: Iterable[tuple]) -> List[str]:
        """Değeri eksik olan (ad, değer) çiftlerinin adlarını döndür."""
        return [name for name, value in fields if not TextValidator.is_present(value)]
