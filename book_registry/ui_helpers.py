import os
import json
from typing import Any, Dict, List
from rich.console import Console
from rich.table import Table

# CLI çıktı modunu kontrol eden ortam değişkeni
# İzin verilen değerler: 'plain' (varsayılan), 'json', 'rich'
OUTPUT_MODE_ENV = "BOOK_REGISTRY_CLI_OUTPUT"

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()


def print_book_list(books: List[Any]) -> None:
    """Kitapları mevcut çıktı moduna göre yazdır.
    - plain: 'ID - Title by Author' satırları veya 'No books in registry.'
    - json: id, title, author içeren JSON dizisi
    - rich: Rich tablosu
    """
    mode = get_output_mode()

    if not books:
        print("No books in registry.")
        return

    if mode == "json":
        payload = [{"id": b.id, "title": b.title, "author": b.author} for b in books]
        print(json.dumps(payload, ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        for b in books:
            table.add_row(b.id, b.title, b.author)
        _console.print(table)
    else:
        for b in books:
            print(f"{b.id} - {b.title} by {b.author}")


def print_routes(base_url: str, routes: List[Dict[str, str]]) -> None:
    """base_url altında sunulan HTTP uç noktalarını yazdır."""
    mode = get_output_mode()

    if mode == "json":
        payload = [dict(route, url=f"{base_url}{route['path']}") for route in routes]
        print(json.dumps(payload, ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="🔗 Endpoints", header_style="bold cyan")
        table.add_column("Method", style="magenta", no_wrap=True)
        table.add_column("URL", style="white")
        table.add_column("Description", style="dim")
        for route in routes:
            table.add_row(route["method"], f"{base_url}{route['path']}", route["description"])
        _console.print(table)
    else:
        for route in routes:
            print(f"{route['description']}: {route['method']} {base_url}{route['path']}")
