"""Chat command for interactive sessions."""

import asyncio
from pathlib import Path

import typer

from cascada.cli.chat_runner import ChatConfig, run_chat_session
from cascada.core.errors import CascadaError

app = typer.Typer(help="Start interactive chat with the assistant")


@app.callback(invoke_without_command=True)
def run_chat(
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to cascada.yaml or config directory"
    ),
    user_id: str | None = typer.Option(None, "--user", "-u", help="Session (user) ID"),
    no_classifier: bool = typer.Option(
        False, "--no-classifier", help="Run without the intent classifier"
    ),
    debug: bool = typer.Option(False, "--debug", help="Debug mode"),
) -> None:
    """Start interactive chat session."""
    chat_config = ChatConfig(
        config_path=config,
        user_id=user_id,
        use_classifier=not no_classifier,
        debug=debug,
    )

    try:
        asyncio.run(run_chat_session(chat_config))
    except KeyboardInterrupt:
        typer.echo("Interrupted.")
    except (CascadaError, FileNotFoundError) as e:
        typer.echo(f"Fatal error: {e}", err=True)
        raise typer.Exit(1) from e
