"""Interactive chat runner for the Cascada CLI."""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.prompt import Prompt

from cascada.config import CascadaConfig, ConfigLoader
from cascada.core.constants import InputHint
from cascada.core.errors import CascadaError
from cascada.core.message_sink import MessageSink
from cascada.observability.logging import setup_logging
from cascada.runtime.loop import ConversationRuntime

logger = logging.getLogger(__name__)

BANNER_ART = r"""
   ___                        _
  / __\__ _ ___  ___ __ _  __| | __ _
 / /  / _` / __|/ __/ _` |/ _` |/ _` |
/ /__| (_| \__ \ (_| (_| | (_| | (_| |
\____/\__,_|___/\___\__,_|\__,_|\__,_|
"""

EXIT_COMMANDS = ("exit", "q", "/quit", "/exit")


class ConsoleMessageSink(MessageSink):
    """Sink that prints to a rich console."""

    def __init__(self, console: Console):
        self.console = console

    async def send(
        self,
        message: str,
        speak: str | None = None,
        input_hint: InputHint = InputHint.ignoring_input,
    ) -> None:
        style = "bold magenta" if input_hint == InputHint.expecting_input else "bold blue"
        self.console.print(f"[{style}]Bot > [/]{message}\n")


@dataclass
class ChatConfig:
    """Configuration for chat runner."""

    config_path: Path | None = None
    user_id: str | None = None
    use_classifier: bool = True
    debug: bool = False


class ChatRunner:
    """Interactive chat session runner.

    Owns the runtime for the duration of the session; messages reach the
    terminal through ``ConsoleMessageSink`` as the dialogs send them.
    """

    def __init__(self, config: ChatConfig, console: Console | None = None):
        self.config = config
        self.console = console or Console()
        self.runtime: ConversationRuntime | None = None
        self.user_id = config.user_id or f"cli_{uuid.uuid4().hex[:6]}"
        self._running = False

    def load_config(self) -> CascadaConfig:
        """Read the YAML config (or defaults) and apply command-line overrides."""
        path = self.config.config_path
        if path is None and Path("cascada.yaml").exists():
            path = Path("cascada.yaml")
        cascada_config = ConfigLoader.load(path) if path is not None else CascadaConfig()

        if not self.config.use_classifier:
            cascada_config.settings.classifier.enabled = False
        if self.config.debug:
            cascada_config.settings.log_level = "DEBUG"
        return cascada_config

    async def setup(self) -> None:
        """Initialize runtime and prepare for chat.

        Raises:
            CascadaError: If the config is invalid or the runtime cannot start
        """
        load_dotenv()

        try:
            cascada_config = self.load_config()
        except (CascadaError, FileNotFoundError) as e:
            self.console.print(f"[red]Invalid config: {e}[/]")
            raise

        setup_logging(cascada_config.settings.log_level, cascada_config.settings.log_file)

        self.runtime = ConversationRuntime(
            cascada_config, message_sink=ConsoleMessageSink(self.console)
        )
        await self.runtime.__aenter__()

    async def start(self) -> None:
        """Start the interactive session."""
        if self.runtime is None:
            await self.setup()
        assert self.runtime is not None

        self.console.print(BANNER_ART, style="bold blue")
        self.console.print(f"Session ID: [green]{self.user_id}[/]")
        self.console.print("Type 'exit' to end the session.\n")

        self._running = True
        while self._running:
            try:
                user_input = Prompt.ask("[bold green]You[/]", console=self.console)

                if self._is_exit_command(user_input):
                    self.console.print("\n[yellow]Goodbye![/]")
                    break

                if not user_input.strip():
                    continue

                with self.console.status("[bold blue]Thinking...[/]"):
                    response = await self.runtime.process_message(user_input, user_id=self.user_id)
                if self.config.debug:
                    self.console.print(
                        f"[dim]status={response.status.value} "
                        f"dialog={response.active_dialog} depth={response.depth}[/]"
                    )

            except (KeyboardInterrupt, EOFError):
                self.console.print("\n[yellow]Goodbye![/]")
                break
            except CascadaError as e:
                logger.debug("Turn failed", exc_info=True)
                if self.config.debug:
                    self.console.print_exception()
                else:
                    self.console.print(f"[red]Error: {e}[/]")

    def _is_exit_command(self, user_input: str) -> bool:
        return user_input.strip().lower() in EXIT_COMMANDS

    async def cleanup(self) -> None:
        """Clean up resources."""
        self._running = False
        if self.runtime is not None:
            await self.runtime.__aexit__(None, None, None)
            self.runtime = None

    async def __aenter__(self) -> "ChatRunner":
        await self.setup()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.cleanup()


async def run_chat_session(config: ChatConfig) -> None:
    """Run an interactive chat session.

    Args:
        config: Chat configuration
    """
    async with ChatRunner(config) as runner:
        await runner.start()
