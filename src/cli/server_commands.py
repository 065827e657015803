"""Server and schema CLI commands."""

import typer
import uvicorn
from rich.panel import Panel

from src.user_admin.runtime.context import get_config

from .utils import console


def start_server(
    host: str | None = typer.Option(
        None, help="Host to bind the server to [default: config app.host]"
    ),
    port: int | None = typer.Option(
        None, help="Port to bind the server to [default: config app.port]"
    ),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """
    Start the user admin web server.
    """
    app_config = get_config().app
    host = host or app_config.host
    port = port or app_config.port

    console.print(
        Panel.fit(
            f"[bold green]Starting {app_config.title}[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}/users")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    uvicorn.run(
        "src.user_admin.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )


def init_db() -> None:
    """
    Create the database tables.
    """
    from src.user_admin.runtime.init_db import init_db as create_tables

    try:
        create_tables()
    except Exception as e:
        console.print(f"[red]Failed to initialize database: {e}[/red]")
        raise typer.Exit(1) from None

    console.print("[green]Database tables created[/green]")
