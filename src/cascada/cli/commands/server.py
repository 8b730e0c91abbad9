"""Server command to start the API."""

import os
from pathlib import Path

import typer
import uvicorn

from cascada.config.loader import ConfigLoader
from cascada.core.errors import CascadaError
from cascada.server.api import CONFIG_PATH_ENV

app = typer.Typer(help="Start API server")


@app.callback(invoke_without_command=True)
def start_server(
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to cascada.yaml", exists=True
    ),
    host: str = typer.Option("0.0.0.0", "--host", "-h"),
    port: int = typer.Option(8000, "--port", "-p"),
    reload: bool = typer.Option(False, "--reload"),
) -> None:
    """Start the Cascada API server."""
    if config is not None:
        try:
            ConfigLoader.load(config)
        except (CascadaError, FileNotFoundError) as e:
            typer.echo(f"Invalid config: {e}", err=True)
            raise typer.Exit(1) from e

        # The server process loads its config from the environment
        os.environ[CONFIG_PATH_ENV] = str(config.absolute())

    typer.echo(f"Starting Cascada server on http://{host}:{port}")
    if config is not None:
        typer.echo(f"   Config: {config}")

    uvicorn.run(
        "cascada.server.api:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )
