"""CLI entry points for reencrypt-proxy."""

import asyncio
import json
import sys
from datetime import datetime

import httpx
from rich.console import Console

from app import create_app
from client import ProxyClient
from core.config import CONFIG_FILE, Config, load_config
from core.exceptions import ConfigurationError, ProxyError
from ui.console_logger import ConsoleLogger
from ui.dashboard import Dashboard
from ui.log_utils import CLI_LOG_FILE, clear_logs, configure_cli_log, write_cli_log

console = Console()


def main():
    """Proxy server entry point."""
    args = sys.argv[1:]

    if "--help" in args or "-h" in args:
        _print_help()
        return

    if "--config" in args:
        console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
        console.print(f"[bold]Log:[/bold] {CLI_LOG_FILE}")
        return

    config = _load_or_exit()
    use_dashboard = config.proxy.dashboard and "--no-dashboard" not in args

    clear_logs()
    logger = Dashboard(config) if use_dashboard else ConsoleLogger()

    import uvicorn

    app = create_app(config, logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    if use_dashboard:
        logger.start()
    start_time = datetime.now()
    logger.log_event("info", f"Listening on {config.proxy.host}:{config.proxy.port}")
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("INFO", "Proxy stopped", duration=str(duration))
        if use_dashboard:
            logger.stop()


def client_main():
    """Requester entry point: fetch one target URL through the proxy."""
    args = [a for a in sys.argv[1:] if not a.startswith("-")]
    if "--help" in sys.argv[1:] or "-h" in sys.argv[1:]:
        _print_client_help()
        return

    config = _load_or_exit()
    target_url = args[0] if args else config.client.target_url
    logger = ConsoleLogger()

    try:
        data = asyncio.run(_fetch(config, target_url, logger))
    except (ProxyError, httpx.HTTPError) as e:
        console.print(f"[red][ERROR][/red] {e}")
        sys.exit(1)

    logger.log_event("info", "Successfully received and parsed response")
    console.print_json(json.dumps(data))


async def _fetch(config: Config, target_url: str, logger: ConsoleLogger):
    async with httpx.AsyncClient() as http_client:
        client = ProxyClient(config.client.proxy_address, http_client)
        return await client.fetch(target_url, logger)


def _load_or_exit() -> Config:
    try:
        config = load_config()
        configure_cli_log(config.proxy.log_level)
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e}")
        console.print(f"[dim]Check {CONFIG_FILE} and PROXY_* environment variables[/dim]")
        sys.exit(1)
    return config


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Re-encryption Proxy[/bold cyan]

Forwards GET / to the URL in the X-Target-URL header and relays the JSON reply.

[bold]Usage:[/bold]
    reencrypt-proxy                   Start with live dashboard
    reencrypt-proxy --no-dashboard    Start with plain console logging
    reencrypt-proxy --config          Show config and log locations
    reencrypt-proxy --help            Show this help

[bold]Environment:[/bold]
    PROXY_HOST, PROXY_PORT, PROXY_LOG_LEVEL, PROXY_DASHBOARD
"""
    console.print(help_text)


def _print_client_help():
    """Print requester help message."""
    help_text = """
[bold cyan]Re-encryption Proxy client[/bold cyan]

[bold]Usage:[/bold]
    reencrypt-proxy-client [TARGET_URL]

[bold]Environment:[/bold]
    PROXY_ADDRESS   proxy to send through (default http://localhost:3000)
    TARGET_URL      used when no TARGET_URL argument is given
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
