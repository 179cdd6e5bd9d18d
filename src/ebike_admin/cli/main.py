import asyncio
import logging
from typing import Optional

import typer
from fastapi import HTTPException
from pydantic import ValidationError
from tortoise import Tortoise

from ..core.config import TORTOISE_ORM_CONFIG
from ..features.auth.models import User as AuthUser, UserRole, UserStatus
from ..features.auth.schemas import AdminSetup
from ..features.auth.security import get_password_hash
from ..features.auth import service as auth_service
from ..features.inventory_requests.models import RequestStatus
from ..features.inventory_requests import service as request_service
from ..features.sellers import service as seller_service

logger = logging.getLogger(__name__)

app = typer.Typer(name="ebike-admin", help="CLI for managing E-Bike Admin data.")


class DBConnection:
    """Async context manager that opens and closes the Tortoise connections."""

    async def __aenter__(self):
        await Tortoise.init(config=TORTOISE_ORM_CONFIG)
        await Tortoise.generate_schemas(safe=True)  # Generate schema if it doesn't exist
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await Tortoise.close_connections()


def _fail(message: str) -> None:
    typer.secho(f"Error: {message}", fg=typer.colors.RED)
    raise typer.Exit(code=1)


# User management commands
user_app = typer.Typer(name="users", help="Manage admin and seller accounts.")
app.add_typer(user_app)


@user_app.command("create-admin")
def create_admin_user_command(
    email: str = typer.Option(..., prompt=True, help="Email for the admin account."),
    display_name: str = typer.Option(..., prompt=True, help="Name shown for the admin."),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password for the admin."),
):
    """Creates the admin account. Only one admin may exist."""
    asyncio.run(_create_admin_user(email, display_name, password))


async def _create_admin_user(email: str, display_name: str, password: str):
    try:
        setup = AdminSetup(email=email, display_name=display_name, password=password)
    except ValidationError as e:
        _fail(f"Invalid admin details: {e}")

    async with DBConnection():
        typer.echo(f"Attempting to create admin user: {email}...")
        try:
            admin = await auth_service.create_admin(setup, get_password_hash(password))
        except HTTPException as e:
            _fail(e.detail)
        typer.secho(f"Admin '{admin.email}' created successfully with ID: {admin.public_id}", fg=typer.colors.GREEN)


async def _get_seller_by_email(email: str) -> AuthUser:
    user = await auth_service.get_user_by_email(email)
    if not user or user.role != UserRole.SELLER:
        _fail(f"Seller with email '{email}' not found.")
    return user


async def _set_seller_status(email: str, new_status: UserStatus):
    async with DBConnection():
        seller = await _get_seller_by_email(email)
        if seller.status == new_status:
            typer.secho(f"Seller '{email}' is already {new_status.value}.", fg=typer.colors.YELLOW)
            return
        await seller_service.set_seller_status(seller.public_id, new_status)
        typer.secho(f"Seller '{email}' is now {new_status.value}.", fg=typer.colors.GREEN)


@user_app.command("approve-seller")
def approve_seller_command(
    email: str = typer.Argument(..., help="Email of the seller to approve."),
):
    """Activates a pending (or suspended) seller account."""
    asyncio.run(_set_seller_status(email, UserStatus.ACTIVE))


@user_app.command("suspend-seller")
def suspend_seller_command(
    email: str = typer.Argument(..., help="Email of the seller to suspend."),
):
    """Suspends a seller account; the seller can no longer log in."""
    asyncio.run(_set_seller_status(email, UserStatus.SUSPENDED))


# Inventory request maintenance
request_app = typer.Typer(name="requests", help="Inspect and reconcile inventory requests.")
app.add_typer(request_app)


@request_app.command("list-approved")
def list_approved_requests_command():
    """Lists requests approved but never credited to a shop."""
    asyncio.run(_list_approved_requests())


async def _list_approved_requests():
    async with DBConnection():
        requests = await request_service.list_requests(request_status=RequestStatus.APPROVED)
        if not requests:
            typer.echo("No approved requests waiting for fulfillment.")
            return
        for request in requests:
            typer.echo(
                f"{request.public_id}  {request.shop_name or request.seller_id}  "
                f"{request.bike_name}  x{request.approved_quantity}"
            )


@request_app.command("process-approved")
def process_approved_requests_command(
    request_id: Optional[str] = typer.Argument(None, help="Request to process. Omit with --all."),
    process_all: bool = typer.Option(False, "--all", help="Process every approved request."),
):
    """Credits approved requests to their shops and marks them fulfilled."""
    if not request_id and not process_all:
        _fail("Pass a request id or --all.")
    asyncio.run(_process_approved_requests(request_id, process_all))


async def _process_approved_requests(request_id: Optional[str], process_all: bool):
    async with DBConnection():
        if process_all:
            ids = [r.public_id for r in await request_service.list_requests(request_status=RequestStatus.APPROVED)]
        else:
            ids = [request_id]

        failures = 0
        for public_id in ids:
            try:
                request = await request_service.process_approved_request(public_id)
            except HTTPException as e:
                failures += 1
                typer.secho(f"{public_id}: {e.detail}", fg=typer.colors.RED)
                continue
            typer.secho(
                f"{public_id}: {request.approved_quantity} x {request.bike_name} credited to {request.seller_id}",
                fg=typer.colors.GREEN,
            )
        typer.echo(f"Processed {len(ids) - failures} of {len(ids)} request(s).")
        if failures:
            raise typer.Exit(code=1)


@app.command("test-db-connection")
def test_db_connection_command_sync():
    """Tests the database connection and counts user accounts."""
    asyncio.run(test_db_connection_command())


async def test_db_connection_command():
    async with DBConnection():
        typer.echo("Successfully connected to the database.")
        user_count = await AuthUser.all().count()
        typer.echo(f"Found {user_count} user(s) in the database.")
        if user_count > 0:
            first_user = await AuthUser.first()
            typer.echo(f"First user: {first_user}")


if __name__ == "__main__":
    app()
