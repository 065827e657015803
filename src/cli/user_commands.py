"""User management CLI commands."""

import typer
from rich.panel import Panel
from rich.table import Table

from src.user_admin.core.services import UserService
from src.user_admin.entities.core.user import User

from .utils import console, database_session

users_app = typer.Typer(help="User management commands")


@users_app.command("list")
def list_users() -> None:
    """
    List all stored users.
    """
    console.print(Panel.fit("[bold cyan]Users[/bold cyan]", border_style="cyan"))

    with database_session() as session:
        users = UserService(session).get_all_users()

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="blue")
    table.add_column("Email", style="green")
    table.add_column("Phone")
    table.add_column("Address")

    for user in users:
        table.add_row(
            str(user.id),
            user.name,
            user.email or "",
            user.phone or "",
            user.address or "",
        )

    console.print(table)
    console.print(f"\n[dim]Showing {len(users)} users[/dim]")


@users_app.command("add")
def add_user(
    name: str = typer.Argument(..., help="Name of the new user"),
    email: str | None = typer.Option(None, "--email", help="Email address"),
    phone: str | None = typer.Option(None, "--phone", help="Phone number"),
    address: str | None = typer.Option(None, "--address", help="Postal address"),
) -> None:
    """
    Add a new user.
    """
    with database_session() as session:
        user = UserService(session).save_user(
            User(name=name, email=email, phone=phone, address=address)
        )

    console.print(f"[green]Created user {user.id}: {user.name}[/green]")


@users_app.command("delete")
def delete_user(
    user_id: int = typer.Argument(..., help="Id of the user to delete"),
) -> None:
    """
    Delete a user. Deleting an unknown id is not an error.
    """
    with database_session() as session:
        UserService(session).delete_user(user_id)

    console.print(f"[green]User {user_id} deleted[/green]")
