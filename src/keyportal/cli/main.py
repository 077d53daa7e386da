"""Keyportal CLI: run the server and prepare the database.

Usage:
    keyportal serve                     # Run the API with uvicorn
    keyportal serve --port 8080 --reload
    keyportal init-db                   # Create admins/users/api_keys tables
    keyportal check-config              # Show resolved settings (secrets masked)
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import sys
from typing import Optional

import click
from pydantic import ValidationError

from keyportal import __version__

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _load_settings():
    """Load Settings, exiting with a readable message when invalid."""
    try:
        from keyportal.config import Settings

        return Settings()
    except ValidationError as e:
        click.secho("Invalid configuration:", fg="red", err=True)
        for err in e.errors():
            click.secho(f"  {err['msg']}", fg="red", err=True)
        sys.exit(1)


def _mask(value: str) -> str:
    if not value:
        return "(not set)"
    return "*" * 8


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="keyportal")
def main():
    """Keyportal: admin dashboard and API key issuance backend."""


@main.command()
@click.option("--host", default=None, help="Bind address (default: HOST or 0.0.0.0)")
@click.option("--port", "-p", type=int, default=None, help="Port (default: PORT or 3000)")
@click.option("--reload", is_flag=True, help="Restart on code changes (development)")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the HTTP API."""
    import uvicorn

    settings = _load_settings()
    uvicorn.run(
        "keyportal.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@main.command("init-db")
def init_db():
    """Create the database tables if they do not exist."""
    from keyportal.db.engine import Database

    settings = _load_settings()
    database = Database.from_settings(settings)

    async def _create():
        try:
            await database.create_all()
        finally:
            await database.dispose()

    _run(_create())
    click.secho("Database tables ready: admins, users, api_keys", fg="green")


@main.command("check-config")
def check_config():
    """Print the resolved configuration with secrets masked."""
    settings = _load_settings()
    if settings.database_url:
        database = "(from DATABASE_URL)"
    else:
        database = f"{settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    rows = [
        ("environment", settings.environment),
        ("listen", f"{settings.host}:{settings.port}"),
        ("api prefix", settings.prefix or "/"),
        ("database", database),
        ("db password", _mask(settings.db_password)),
        ("admin token", _mask(settings.admin_token)),
        ("key expiry (days)", str(settings.api_key_expire_days)),
        ("cors origins", ", ".join(settings.cors_origins)),
    ]
    width = max(len(name) for name, _ in rows)
    for name, value in rows:
        click.echo(f"{name.ljust(width)}  {value}")
    if not settings.admin_token:
        click.secho("warning: API_DUMMY_TOKEN is not set; admin login will fail", fg="yellow")


if __name__ == "__main__":
    main()
