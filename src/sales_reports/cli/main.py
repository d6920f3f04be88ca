import asyncio
import logging

import typer
import uvicorn
from tortoise.exceptions import IntegrityError

from ..core import logging_config  # noqa: F401
from ..core.config import PORT
from ..features.auth import service as auth_service
from ..features.auth.models import User as AuthUser
from .commands.reports_command import command_app as reports_app
from .db import DBConnection

logger = logging.getLogger(__name__)

app = typer.Typer(name="sales-reports", help="CLI for the sales reports service.")
app.add_typer(reports_app)

# User management commands
user_app = typer.Typer(name="users", help="Manage operator accounts.")
app.add_typer(user_app)

@user_app.command("create-admin")
def create_admin_user_command(
    username: str = typer.Option(..., prompt=True, help="Username for the new admin."),
    email: str = typer.Option(..., prompt=True, help="Email for the new admin."),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password for the new admin.")
):
    """Creates a new admin user."""
    asyncio.run(_create_admin_user(username, email, password))

async def _create_admin_user(username: str, email: str, password: str):
    """Async implementation for creating an admin user."""
    async with DBConnection(generate_schemas=True):
        typer.echo(f"Attempting to create admin user: {username} ({email})...")
        if await AuthUser.filter(username=username).exists():
            typer.secho(f"Error: User with username '{username}' already exists.", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        if await AuthUser.filter(email=email).exists():
            typer.secho(f"Error: User with email '{email}' already exists.", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        try:
            admin_user = await auth_service.register_admin(username, email, password)
        except IntegrityError as e:
            typer.secho(f"Error creating admin user: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        logger.info(f"Admin user {admin_user.username} created")
        typer.secho(f"Admin user '{admin_user.username}' created successfully with ID: {admin_user.public_id}", fg=typer.colors.GREEN)

@user_app.command("promote-to-admin")
def promote_user_to_admin_command(
    username: str = typer.Argument(..., help="The username of the user to promote to admin.")
):
    """Promotes an existing user to the admin role."""
    asyncio.run(_promote_user_to_admin(username))

async def _promote_user_to_admin(username: str):
    """Async implementation for promoting a user to admin."""
    async with DBConnection():
        typer.echo(f"Attempting to promote user '{username}' to admin...")
        user = await AuthUser.get_or_none(username=username)

        if not user:
            typer.secho(f"Error: User with username '{username}' not found.", fg=typer.colors.RED)
            raise typer.Exit(code=1)

        if user.is_admin:
            typer.secho(f"User '{username}' is already an admin.", fg=typer.colors.YELLOW)
            raise typer.Exit(code=0)

        if not user.is_active:
            typer.secho(f"Error: User '{username}' is currently inactive. Activate the user before promoting to admin.", fg=typer.colors.RED)
            raise typer.Exit(code=1)

        await auth_service.promote_to_admin(user)
        typer.secho(f"User '{username}' has been successfully promoted to admin.", fg=typer.colors.GREEN)

@app.command("serve")
def serve_command(
    host: str = typer.Option("0.0.0.0", help="Interface to bind."),
    port: int = typer.Option(PORT, help="Port to listen on."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
):
    """Runs the HTTP API with uvicorn."""
    typer.echo(f"Reports service running on port {port}")
    uvicorn.run("sales_reports.main:app", host=host, port=port, reload=reload)

if __name__ == "__main__":
    app()
