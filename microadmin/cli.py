"""
Command line entry point.

``microadmin serve`` runs the HTTP API; ``microadmin refresh APP`` performs
a single broadcast and exits with 0 (all delivered), 1 (some pod failed)
or 2 (pods could not be listed, or bad configuration).
"""

import asyncio
import logging
import sys
from typing import Optional

import click
import uvicorn
from dotenv import load_dotenv

from microadmin.config.provider import EnvConfigProvider
from microadmin.logging_config import configure_logging, get_logging_config
from microadmin.modules.broadcast import BroadcastResult, OrchestratorFactory
from microadmin.modules.membership import DiscoveryError

logger = logging.getLogger(__name__)


@click.group()
def main():
    """Broadcast configuration refreshes to the worker pods of an application."""
    load_dotenv()


@main.command()
@click.option("--host", "host", default=None, help="Bind address (defaults to API_HOST)")
@click.option("--port", "port", type=int, default=None, help="Bind port (defaults to API_PORT)")
def serve(host: Optional[str], port: Optional[int]):
    """Run the refresh API server."""
    api_config = EnvConfigProvider().get_api_config()
    configure_logging(api_config.log_level)

    uvicorn.run(
        "microadmin.main:create_app",
        factory=True,
        host=host or api_config.host,
        port=port or api_config.port,
        log_level=api_config.log_level.lower(),
        reload=api_config.debug,
        log_config=get_logging_config(api_config.log_level),
    )


async def _broadcast_once(app_name: str) -> BroadcastResult:
    broadcaster = OrchestratorFactory.build(EnvConfigProvider())
    try:
        return await broadcaster.broadcast(app_name)
    finally:
        await broadcaster.transport.aclose()


@main.command()
@click.argument("app_name", required=False)
def refresh(app_name: Optional[str]):
    """Refresh the configuration of every pod of APP_NAME."""
    provider = EnvConfigProvider()
    try:
        configure_logging(provider.get_api_config().log_level)
        app_name = app_name or provider.get_refresh_config().default_application
        result = asyncio.run(_broadcast_once(app_name))
    except (DiscoveryError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    click.echo(result.summary())
    sys.exit(0 if result.ok else 1)


if __name__ == "__main__":
    main()
