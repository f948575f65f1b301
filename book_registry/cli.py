import subprocess
import sys
from dataclasses import replace
from typing import Optional

import typer
from rich.console import Console

from book_registry.config import Settings, settings
from book_registry.registry import seed_books
from book_registry.ui_helpers import print_book_list, print_routes, set_output_mode

APP_NAME = "Book Registry CLI"

ENDPOINTS = [
    {"method": "GET", "path": "/books", "description": "GET All Books"},
    {"method": "GET", "path": "/books/{id}", "description": "GET Book by ID"},
    {"method": "POST", "path": "/books", "description": "POST New Book (with JSON body)"},
    {"method": "PUT", "path": "/books/{id}", "description": "PUT Update Book (with JSON body)"},
    {"method": "DELETE", "path": "/books/{id}", "description": "DELETE Book by ID"},
]

console = Console()


def _target(host: Optional[str], port: Optional[int]) -> Settings:
    """Komut satırı geçersiz kılmaları uygulanmış ayarları döndür."""
    return replace(settings, api_host=host or settings.api_host, api_port=int(port or settings.api_port))


# --- Typer CLI Uygulaması ---
app = typer.Typer(help=APP_NAME)


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    )
):
    """CLI için genel seçenekler (ör. çıktı modu)."""
    if output:
        set_output_mode(output)


@app.command("routes")
def cli_routes(
    host: Optional[str] = typer.Option(None, "--host", help="Host shown in URLs"),
    port: Optional[int] = typer.Option(None, "--port", help="Port shown in URLs"),
):
    """API tarafından sunulan HTTP uç noktalarını listele."""
    print_routes(_target(host, port).base_url, ENDPOINTS)


@app.command("seed")
def cli_seed():
    """Kayıt defterinin başlangıçtaki kitaplarını göster."""
    print_book_list(seed_books())


@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind"),
    port: Optional[int] = typer.Option(None, "--port", help="Port to listen on"),
    reload: Optional[bool] = typer.Option(None, "--reload/--no-reload", help="Restart on code changes (defaults to DEBUG)"),
):
    """API'yi Uvicorn ile başlat."""
    target = _target(host, port)
    reload = settings.debug if reload is None else reload

    print(f"Server is running on {target.base_url}")
    print_routes(target.base_url, ENDPOINTS)

    args = [
        sys.executable,
        "-m", "uvicorn",
        "book_registry.api:app",
        "--host", target.api_host,
        "--port", str(target.api_port),
    ]
    if reload:
        args.append("--reload")

    try:
        subprocess.run(args, check=False)
    except FileNotFoundError:
        console.print("[bold red]Error:[/] could not launch `uvicorn`. Make sure it is installed in this environment.")
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        console.print("[green]Server stopped.[/]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
