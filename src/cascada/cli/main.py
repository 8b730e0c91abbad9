"""Main CLI entry point for Cascada"""

import typer

from cascada.__version__ import __version__
from cascada.cli.commands import chat as chat_module
from cascada.cli.commands import server as server_module

app = typer.Typer(
    name="cascada",
    help="Cascada - waterfall dialogs for a scripted ordering assistant",
    add_completion=False,
)

app.add_typer(chat_module.app, name="chat", help="Start an interactive chat session")
app.add_typer(server_module.app, name="server", help="Start the Cascada API server")


def version_callback(value: bool) -> None:
    """Print version and exit"""
    if value:
        typer.echo(f"Cascada version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Cascada - waterfall dialogs for a scripted ordering assistant"""


def cli() -> None:
    """Entry point for CLI"""
    app()


if __name__ == "__main__":
    cli()
