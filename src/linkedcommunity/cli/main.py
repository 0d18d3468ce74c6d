"""LinkedCommunity CLI — run the server and do small ops chores.

Usage:
    linkedcommunity serve                        # Run the API with uvicorn
    linkedcommunity serve --port 8080 --reload   # Dev server on another port
    linkedcommunity init-db                      # Create tables from the models
    linkedcommunity issue-token 42 ada@example.com
"""

from __future__ import annotations

import asyncio
import sys
from typing import Optional

import click
import pydantic

from linkedcommunity.config import Settings

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_settings() -> Settings:
    """Load Settings, turning a config error into a readable exit."""
    try:
        return Settings()
    except pydantic.ValidationError as e:
        click.secho(f"Configuration error:\n{e}", fg="red", err=True)
        sys.exit(1)


async def _init_db(settings: Settings) -> None:
    from linkedcommunity.db.engine import build_engine, init_models

    engine = build_engine(settings)
    try:
        await init_models(engine)
    finally:
        await engine.dispose()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@click.group()
def cli():
    """LinkedCommunity backend."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: HOST or 0.0.0.0)")
@click.option("--port", default=None, type=int, help="Port (default: PORT or 5000)")
@click.option("--reload", is_flag=True, help="Restart on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server."""
    import uvicorn

    settings = _load_settings()
    uvicorn.run(
        "linkedcommunity.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@cli.command("init-db")
def init_db():
    """Create all tables that don't exist yet."""
    settings = _load_settings()
    asyncio.run(_init_db(settings))
    click.secho("Database tables ready", fg="green")


@cli.command("issue-token")
@click.argument("user_id", type=int)
@click.argument("email")
def issue_token(user_id: int, email: str):
    """Print a bearer token for USER_ID / EMAIL (for manual API testing)."""
    from linkedcommunity.auth.jwt import create_access_token

    settings = _load_settings()
    click.echo(create_access_token(settings, user_id, email))


if __name__ == "__main__":
    cli()
