from __future__ import annotations

import asyncio
import logging

import typer

from formsmith.config import Settings
from formsmith.service import load_summary
from formsmith.storage import init_storage
from formsmith.utils import to_iso

cli = typer.Typer(add_completion=False)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_server(host: str | None, port: int | None) -> None:
    import uvicorn

    from formsmith.app import create_app

    settings = Settings()
    configure_logging(settings)
    resolved_host = host or settings.host
    resolved_port = port if port is not None else settings.port
    uvicorn.run(create_app(settings), host=resolved_host, port=resolved_port)


@cli.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    host: str | None = typer.Option(None, help="Address to bind"),
    port: int | None = typer.Option(None, help="Port to bind"),
) -> None:
    ctx.obj = {"host": host, "port": port}
    if ctx.invoked_subcommand is None:
        run_server(host, port)


@cli.command()
def run(
    ctx: typer.Context,
    host: str | None = typer.Option(None, help="Address to bind"),
    port: int | None = typer.Option(None, help="Port to bind"),
) -> None:
    """Serve the form store over HTTP."""
    base = ctx.obj or {}
    resolved_host = host or base.get("host")
    resolved_port = port if port is not None else base.get("port")
    run_server(resolved_host, resolved_port)


@cli.command()
def summary(recent: int = typer.Option(5, help="Number of recent responses to show")) -> None:
    """Print response totals from the configured store."""
    settings = Settings()
    configure_logging(settings)
    outcome, stats = asyncio.run(load_summary(init_storage(settings), recent=recent))
    if not outcome.ok:
        typer.echo(outcome.message, err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Total responses: {stats.total}")
    typer.echo(f"Unique forms: {stats.unique_forms}")
    last = to_iso(stats.last_submitted_at) if stats.last_submitted_at else "N/A"
    typer.echo(f"Last submitted at: {last}")
    for response in stats.recent:
        typer.echo(f"- {response.form_id} @ {to_iso(response.submitted_at)}")
        for answer in response.answers:
            typer.echo(f"    {answer.label}: {answer.value}")


if __name__ == "__main__":
    cli()
