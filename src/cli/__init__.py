"""Main CLI application module."""

import typer

from .server_commands import init_db, start_server
from .user_commands import users_app

app = typer.Typer(
    help="User Admin CLI - server and user management",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="start-server")(start_server)
app.command(name="init-db")(init_db)
app.add_typer(users_app, name="users")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
