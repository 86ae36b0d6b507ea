from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Optional

import typer

from docstore.app.core.logging import setup_logging
from docstore.app.settings import get_app_settings
from docstore.db.engine import DBEngine
from docstore.db.settings import get_db_settings

app = typer.Typer(no_args_is_help=True, add_completion=False, help="docstore service commands")

ALEMBIC_INI = "alembic.ini"
MIGRATIONS_DIR = "migrations"


def _alembic_config(project_root: Path, database_url: Optional[str]):
    from alembic.config import Config

    cfg = Config(str(project_root / ALEMBIC_INI))
    cfg.set_main_option("script_location", str(project_root / MIGRATIONS_DIR))
    db_url = database_url or get_db_settings().resolved_database_url
    # alembic stores options in a ConfigParser, which treats a bare "%" as interpolation
    cfg.set_main_option("sqlalchemy.url", db_url.replace("%", "%%"))
    return cfg


@app.command("serve")
def serve(
        host: Optional[str] = typer.Option(None, help="Bind address (default APP_HOST)"),
        port: Optional[int] = typer.Option(None, help="Port (default APP_PORT)"),
        reload: bool = typer.Option(False, help="Reload on code changes (dev only)"),
        log_level: Optional[str] = typer.Option(None, help="Override LOG_LEVEL"),
):
    """Run the HTTP API under uvicorn."""
    import uvicorn

    setup_logging(level=log_level)
    settings = get_app_settings()
    uvicorn.run(
        "docstore.api.fastapi:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,  # keep our dictConfig
    )


@app.command("create-tables")
def create_tables(
        database_url: Optional[str] = typer.Option(None, help="Override DATABASE_URL"),
):
    """Create the documents schema directly from the models."""
    setup_logging()
    engine = DBEngine(get_db_settings(database_url=database_url))

    async def _run() -> None:
        try:
            await engine.create_all()
        finally:
            await engine.dispose()

    asyncio.run(_run())
    typer.echo("Tables created.")


@app.command("upgrade")
def upgrade(
        target: str = typer.Argument("head", help="Revision to upgrade to"),
        project_root: Path = typer.Option(Path(os.getcwd()), help="Directory holding alembic.ini"),
        database_url: Optional[str] = typer.Option(None, help="Override DATABASE_URL"),
):
    """Apply alembic migrations."""
    from alembic import command

    command.upgrade(_alembic_config(project_root.resolve(), database_url), target)


@app.command("downgrade")
def downgrade(
        target: str = typer.Argument("-1", help="Revision to downgrade to"),
        project_root: Path = typer.Option(Path(os.getcwd()), help="Directory holding alembic.ini"),
        database_url: Optional[str] = typer.Option(None, help="Override DATABASE_URL"),
):
    """Revert alembic migrations."""
    from alembic import command

    command.downgrade(_alembic_config(project_root.resolve(), database_url), target)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
