from __future__ import annotations

import logging
import sys

import typer

from fvwm_mcp.config import Settings
from fvwm_mcp.fastmcp_app import create_mcp

logger = logging.getLogger(__name__)

cli = typer.Typer(add_completion=False)


def configure_logging(level: str) -> None:
    # stdout carries the stdio transport, so logs go to stderr
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind (HTTP transport)."),
    port: int = typer.Option(None, help="Port to bind (HTTP transport)."),
    transport: str = typer.Option("stdio", help="Transport: 'stdio' or 'http'."),
    log_level: str = typer.Option(None, help="Log level (defaults to FVWM_MCP_LOG_LEVEL or INFO)."),
) -> None:
    """Start the FVWM3 MCP server (defaults to stdio transport)."""

    if transport not in ("stdio", "http"):
        raise typer.BadParameter("transport must be 'stdio' or 'http'", param_hint="--transport")

    settings = Settings.from_env()
    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port
    if log_level is not None:
        settings.log_level = log_level.upper()

    configure_logging(settings.log_level)
    mcp = create_mcp(settings)
    logger.info("MCP server for FVWM3 starting (transport=%s, fvwm_dir=%s)", transport, settings.fvwm_dir)
    if transport == "stdio":
        mcp.run()
    else:
        app = mcp.http_app(path="/mcp", transport="http", json_response=True, stateless_http=True)
        import uvicorn
        uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


@cli.callback(invoke_without_command=True)
def _default(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        run(host=None, port=None, transport="stdio", log_level=None)


if __name__ == "__main__":
    cli()
