import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # API Ayarları
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "3000"))

    # Uygulama Ayarları
    app_name: str = os.getenv("APP_NAME", "Book Registry API")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG", "False")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Kayıt Defteri Ayarları
    seed_books: bool = _env_flag("SEED_BOOKS", "True")
    book_id_length: int = int(os.getenv("BOOK_ID_LENGTH", "9"))

    def __post_init__(self) -> None:
        # Boş kimlik üretilemez; en az bir karakter gerekli
        if self.book_id_length < 1:
            raise ValueError(f"BOOK_ID_LENGTH en az 1 olmalı, alınan: {self.book_id_length}")

    @property
    def base_url(self) -> str:
        return f"http://{self.api_host}:{self.api_port}"


settings = Settings()
