import logging
from typing import List, Optional

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown

from scheme_handshake.config import Settings
from scheme_handshake.environment import InMemoryEnvironment, make_environment
from scheme_handshake.errors import HandshakeError
from scheme_handshake.identifiers import FIXED_TOKEN, new_session_identifier

load_dotenv()
app = typer.Typer(help="Cross-process URL scheme handshake.")
console = Console()


def _settings() -> Settings:
    try:
        return Settings.from_env()
    except ValidationError as exc:
        for err in exc.errors():
            name = f"HANDSHAKE_{str(err['loc'][0]).upper()}"
            console.print(f"[bold red]Error:[/] {name}: {err['msg']}")
        raise typer.Exit(1)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level")):
    settings = _settings()
    level = "DEBUG" if verbose else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _parse_pairs(pairs: List[str]) -> dict[str, str]:
    query: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            console.print(f"[bold red]Error:[/] --query expects key=value, got '{pair}'")
            raise typer.Exit(1)
        query[key] = value
    return query


@app.command()
def probe(scheme: str = typer.Argument(help="Scheme to check, e.g. app2")):
    """Check whether a process is registered for SCHEME."""
    from scheme_handshake.registry import SchemeRegistry

    settings = _settings()
    registry = SchemeRegistry(make_environment(settings.environment, timeout=settings.xdg_timeout))
    try:
        available = registry.is_available(scheme)
    except HandshakeError as exc:
        console.print(f"[bold red]Error:[/] {exc}")
        raise typer.Exit(1)
    mark = "[bold green]available[/]" if available else "[bold yellow]not available[/]"
    console.print(f"{scheme}: {mark}")


@app.command()
def launch(
    scheme: str = typer.Argument(help="Scheme of the process to launch"),
    identifier: Optional[str] = typer.Option(None, "--id", help="Identifier to send (default: new UUID)"),
    fixed: bool = typer.Option(False, "--fixed", help=f"Send the fixed token '{FIXED_TOKEN}'"),
    query: List[str] = typer.Option([], "--query", "-q", help="Extra key=value query parameter"),
):
    """Launch SCHEME, handing it a session identifier."""
    from scheme_handshake.initiator import HandshakeInitiator

    if identifier and fixed:
        console.print("[bold red]Error:[/] --id and --fixed are mutually exclusive")
        raise typer.Exit(1)
    if identifier is None:
        identifier = FIXED_TOKEN if fixed else new_session_identifier()

    settings = _settings()
    initiator = HandshakeInitiator(make_environment(settings.environment, timeout=settings.xdg_timeout))
    try:
        result = initiator.invoke(scheme, identifier, _parse_pairs(query)).raise_for_status()
    except HandshakeError as exc:
        console.print(f"[bold red]Error:[/] {exc}")
        raise typer.Exit(1)
    console.print(f"[bold green]✓[/] Dispatched [cyan]{result.url}[/]")


@app.command()
def receive(url: str = typer.Argument(help="Invocation URL, e.g. app2:///<id>")):
    """Handle URL the way the launched process would and show what it stored."""
    from scheme_handshake.receiver import HandshakeReceiver, parse_query_parameters
    from scheme_handshake.state import ProcessSessionState

    state = ProcessSessionState()
    try:
        HandshakeReceiver(state).on_invoked(url)
        params = parse_query_parameters(url)
    except HandshakeError as exc:
        console.print(f"[bold red]Error:[/] {exc}")
        raise typer.Exit(1)
    console.print(f"identifier: [cyan]{state.identifier or '(empty)'}[/]")
    for key, value in params.items():
        console.print(f"[dim]{key}[/] = {value}")


@app.command()
def back(scheme: Optional[str] = typer.Argument(None, help="Caller scheme (default: HANDSHAKE_CALLER_SCHEME)")):
    """Return control to the calling process, without any payload."""
    from scheme_handshake.initiator import ReturnInitiator

    settings = _settings()
    returner = ReturnInitiator(make_environment(settings.environment, timeout=settings.xdg_timeout))
    try:
        result = returner.return_to_caller(scheme or settings.caller_scheme).raise_for_status()
    except HandshakeError as exc:
        console.print(f"[bold red]Error:[/] {exc}")
        raise typer.Exit(1)
    console.print(f"[bold green]✓[/] Dispatched [cyan]{result.url}[/]")


@app.command()
def demo(
    unregistered: bool = typer.Option(False, "--unregistered", help="Do not install the callee"),
    fixed: bool = typer.Option(False, "--fixed", help=f"Send the fixed token '{FIXED_TOKEN}'"),
):
    """Run the caller/callee round trip in memory and print a report."""
    from scheme_handshake.endpoint import Endpoint
    from scheme_handshake.formatter import format_session_report

    settings = _settings()
    env = InMemoryEnvironment()
    caller = Endpoint(settings.caller_scheme, env).install(records_identifier=False)
    callee = Endpoint(settings.callee_scheme, env)
    if not unregistered:
        callee.install()

    if not caller.can_launch(callee.scheme):
        console.print(f"[bold yellow]{callee.scheme} is not registered; launch disabled[/]")
    else:
        caller.launch(callee.scheme, fixed=fixed)
        env.deliver_pending()
        callee.back(caller.scheme)
        env.deliver_pending()

    console.print(Markdown(format_session_report([caller, callee], env.history)))
