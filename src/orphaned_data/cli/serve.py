"""
CLI: ``orphaned-data serve``: start the admin server.
"""

from __future__ import annotations

import typer

from orphaned_data.cli.utils import console, load_settings

app = typer.Typer(no_args_is_help=True)


@app.command("start")
def start(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address (default from settings)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port (default from settings)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    log_level: str = typer.Option("info", "--log-level"),
) -> None:
    """Start the orphaned-data admin server."""
    import uvicorn

    settings = load_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port
    console.print(
        f"[bold green]Starting orphaned-data admin[/bold green] on "
        f"http://{bind_host}:{bind_port}{settings.admin_prefix}/tools/orphaned-data"
    )
    uvicorn.run(
        "orphaned_data.api.app:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=log_level,
    )
