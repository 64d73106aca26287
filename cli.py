"""
CLI for the click hub.

Provides commands for running the server and inspecting the wire protocol
and effective configuration.
"""

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from clickhub import __version__
from clickhub.schemas.messages import (
    CLIENT_MESSAGES,
    ClickMessage,
    ClickResponseMessage,
    GlobalUpdateMessage,
    InitMessage,
    MessageType,
    PingMessage,
    PongMessage,
    encode_message,
)
from clickhub.server import run_server
from clickhub.settings import app_settings

# Initialize Typer app with help text
typer_app = typer.Typer(
    name="clickhub",
    help="Click Hub CLI - Run and inspect the shared click counter server",
    add_completion=False,
)
console = Console()

EXAMPLE_MESSAGES = {
    MessageType.INIT: InitMessage(total_clicks=0),
    MessageType.CLICK_RESPONSE: ClickResponseMessage.now(1, 1),
    MessageType.GLOBAL_UPDATE: GlobalUpdateMessage(total_clicks=1),
    MessageType.CLICK: ClickMessage(),
    MessageType.PING: PingMessage(),
    MessageType.PONG: PongMessage(),
}


@typer_app.command(name="serve")
def serve(
    host: str = typer.Option(
        None, "--host", help="Bind address (default: HOST setting)"
    ),
    port: int = typer.Option(
        None, "--port", "-p", help="Bind port (default: PORT setting)"
    ),
):
    """
    Run the click counter server until Ctrl+C.

    Example:
        python cli.py serve --port 8765
    """
    console.print(
        Panel.fit(
            f"[bold cyan]Click Hub {__version__}[/bold cyan]",
            border_style="cyan",
        )
    )
    run_server(host=host, port=port)


@typer_app.command(name="protocol")
def protocol():
    """
    Display the WebSocket message kinds, their direction and an example frame.

    Example:
        python cli.py protocol
    """
    table = Table(title="Click Hub Wire Protocol", show_lines=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Direction", no_wrap=True)
    table.add_column("Example")

    for message_type, example in EXAMPLE_MESSAGES.items():
        direction = (
            "[green]client → server[/green]"
            if message_type in CLIENT_MESSAGES
            else "[yellow]server → client[/yellow]"
        )
        table.add_row(
            f"[cyan]{message_type}[/cyan]",
            direction,
            encode_message(example),
        )

    console.print()
    console.print(table)
    console.print()


@typer_app.command(name="settings")
def settings():
    """
    Display the effective configuration (environment overrides applied).

    Example:
        PORT=9000 python cli.py settings
    """
    table = Table("Setting", "Value", title="Effective Settings")
    for name, value in app_settings.model_dump().items():
        table.add_row(f"[cyan]{name}[/cyan]", str(value))

    console.print()
    console.print(table)
    console.print()


if __name__ == "__main__":
    typer_app()
