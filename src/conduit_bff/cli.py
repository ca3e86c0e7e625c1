"""
Command line interface for the BFF.

    conduit-bff serve [--host HOST] [--port PORT] [--reload]
    conduit-bff schema
"""

from __future__ import annotations

import typer

from conduit_bff._version import get_version
from conduit_bff.config import get_settings
from conduit_bff.logging import setup_logging

app = typer.Typer(
    help="Graph Conduit BFF: GraphQL gateway for the micro-frontend",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"conduit-bff {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Conduit BFF CLI main callback for global options."""
    pass


@app.command(name="serve")
def serve_command(
    host: str = typer.Option(None, "--host", help="Host to bind to (default: HOST)"),
    port: int = typer.Option(None, "--port", "-p", help="Port to bind to (default: PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
) -> None:
    """Run the BFF with uvicorn."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format.value, settings.service_name)

    bind_host = host or settings.host
    bind_port = port or settings.port

    typer.echo(f"Server ready at http://{bind_host}:{bind_port}")
    typer.echo(f"GraphQL endpoint: http://{bind_host}:{bind_port}{settings.graphql_endpoint}")
    if settings.graphiql_enabled:
        typer.echo(f"GraphiQL: http://{bind_host}:{bind_port}{settings.graphql_endpoint}")
    typer.echo(f"Health check: http://{bind_host}:{bind_port}{settings.health_check_path}")
    typer.echo(f"Readiness check: http://{bind_host}:{bind_port}{settings.readiness_check_path}")

    uvicorn.run(
        "conduit_bff.app:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command(name="schema")
def schema_command() -> None:
    """Print the GraphQL schema SDL."""
    from conduit_bff.graphql.schema import print_schema

    typer.echo(print_schema())


def main() -> None:
    app(standalone_mode=True)
