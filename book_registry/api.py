import logging
from functools import partial
from typing import List, Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from book_registry.book import Book
from book_registry.config import Settings, settings as default_settings
from book_registry.registry import BookNotFoundError, BookRegistry, InvalidBookError, generate_book_id

logging.basicConfig(level=default_settings.log_level)
logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Book not found"
REQUIRED_FIELDS_MESSAGE = "Title and Author are required"


# --- Modeller ---
class BookModel(BaseModel):
    id: str
    title: str
    author: str


class BookCreateModel(BaseModel):
    title: Optional[str] = Field(default=None, description="Required, non-empty")
    author: Optional[str] = Field(default=None, description="Required, non-empty")


class UpdateBookModel(BaseModel):
    title: Optional[str] = Field(default=None, description="Omit or leave empty to keep the current title")
    author: Optional[str] = Field(default=None, description="Omit or leave empty to keep the current author")


class MessageModel(BaseModel):
    message: str


class HealthModel(BaseModel):
    status: str
    total_books: int
    version: str


def _to_model(book: Book) -> BookModel:
    return BookModel(**book.to_dict())


# --- Bağımlılıklar ---
def get_registry(request: Request) -> BookRegistry:
    """Çalışan uygulamanın sahip olduğu kayıt defterini döndüren bağımlılık."""
    return request.app.state.registry


# --- Hata işleyicileri ---
async def _book_not_found_handler(request: Request, exc: BookNotFoundError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=404, content={"message": NOT_FOUND_MESSAGE})


async def _invalid_book_handler(request: Request, exc: InvalidBookError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"message": REQUIRED_FIELDS_MESSAGE})


async def _malformed_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Ayrıştırılamayan veya yanlış tipli istek gövdelerini düz bir 400 olarak bildir."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        problems.append(f"{location}: {error.get('msg', 'invalid value')}")
    message = "Invalid request body"
    if problems:
        message = f"{message}: {'; '.join(problems)}"
    logger.warning(f"{request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"message": message})


# --- Uygulama fabrikası ---
def create_app(registry: Optional[BookRegistry] = None, settings: Optional[Settings] = None) -> FastAPI:
    """HTTP uygulamasını bir kayıt defteri etrafında kur.

    Her uygulamanın tam olarak bir kayıt defteri vardır; uç noktalar onu
    ``get_registry`` bağımlılığıyla alır, böylece testler yalıtılmış
    uygulamalar kurabilir.
    """
    settings = settings or default_settings
    if registry is None:
        id_factory = partial(generate_book_id, settings.book_id_length)
        initial = None if settings.seed_books else []
        registry = BookRegistry(books=initial, id_factory=id_factory)

    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.state.registry = registry
    app.state.settings = settings

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BookNotFoundError, _book_not_found_handler)
    app.add_exception_handler(InvalidBookError, _invalid_book_handler)
    app.add_exception_handler(RequestValidationError, _malformed_body_handler)

    # --- Sağlık Kontrolü ---
    @app.get("/health", response_model=HealthModel)
    def health(registry: BookRegistry = Depends(get_registry)):
        """Güncel kitap sayısını bildiren hafif sağlık uç noktası."""
        return HealthModel(status="healthy", total_books=len(registry), version=settings.app_version)

    # --- Kitaplar ---
    @app.get("/books", response_model=List[BookModel])
    def list_books(registry: BookRegistry = Depends(get_registry)):
        """Tüm kitapları eklenme sırasıyla listele."""
        logger.info("GET /books request received.")
        return [_to_model(book) for book in registry.list_books()]

    @app.get("/books/{book_id}", response_model=BookModel,
             responses={404: {"model": MessageModel}})
    def get_book(book_id: str, registry: BookRegistry = Depends(get_registry)):
        """Kimliğine göre tek bir kitap al."""
        logger.info(f"GET /books/{book_id} request received.")
        return _to_model(registry.get_book(book_id))

    @app.post("/books", response_model=BookModel, status_code=201,
              responses={400: {"model": MessageModel}})
    def create_book(payload: BookCreateModel, registry: BookRegistry = Depends(get_registry)):
        """Yeni bir kitap ekle; başlık ve yazar zorunludur."""
        logger.info(f"POST /books request received with body: {payload.model_dump(exclude_unset=True)}")
        book = registry.create_book(payload.title, payload.author)
        return _to_model(book)

    @app.put("/books/{book_id}", response_model=BookModel,
             responses={404: {"model": MessageModel}})
    def update_book(book_id: str, update: Optional[UpdateBookModel] = None,
                    registry: BookRegistry = Depends(get_registry)):
        """Bir kitabın başlığını ve/veya yazarını güncelle. Gönderilmeyen veya boş alanlar korunur."""
        update = update or UpdateBookModel()
        logger.info(f"PUT /books/{book_id} request received with body: {update.model_dump(exclude_unset=True)}")
        book = registry.update_book(book_id, title=update.title, author=update.author)
        return _to_model(book)

    @app.delete("/books/{book_id}", status_code=204, response_class=Response,
                responses={404: {"model": MessageModel}})
    def delete_book(book_id: str, registry: BookRegistry = Depends(get_registry)):
        """Kimliğine göre bir kitabı sil."""
        logger.info(f"DELETE /books/{book_id} request received.")
        registry.delete_book(book_id)
        return Response(status_code=204)

    return app


app = create_app()
