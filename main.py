#!/usr/bin/env python3
"""
Incapsula subaccount management CLI.

    python main.py add my-sub --parent-id 123
    python main.py get 456 --parent-id 123
    python main.py list --parent-id 123
    python main.py delete 456
"""

import asyncio
import json
import logging
import sys
from typing import Any, Awaitable, Callable

import click

from config import IncapsulaConfig, get_config_sync
from utils.incapsula import IncapsulaAPI, IncapsulaAPIError, SubAccountPayload
from utils.incapsula.incapsula_types import subaccounts_to_list

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logging(level: str) -> None:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, level.upper()),
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def default_log_level() -> str:
    """LOG_LEVEL from the environment; DEBUG=true forces DEBUG."""
    config = IncapsulaConfig.load()
    if config.DEBUG:
        return "DEBUG"
    return config.LOG_LEVEL.upper()


def run_with_api(func: Callable[[IncapsulaAPI], Awaitable[Any]]) -> Any:
    """Run one coroutine against a configured IncapsulaAPI, then close it."""
    try:
        config = get_config_sync()
    except ValueError as e:
        raise click.ClickException(str(e))

    async def _run() -> Any:
        async with IncapsulaAPI.from_config(config) as api:
            return await func(api)

    try:
        return asyncio.run(_run())
    except (IncapsulaAPIError, ValueError) as e:
        logger.error(f"❌ {e}")
        raise click.ClickException(str(e))


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2))


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=default_log_level,
    show_default="LOG_LEVEL env var",
    help="Logging level",
)
def cli(log_level: str) -> None:
    """Manage Incapsula subaccounts."""
    setup_logging(log_level)


@cli.command()
@click.argument("name")
@click.option("--ref-id", default="", help="Reference id")
@click.option("--log-level", "sub_log_level", default="", help="Subaccount log level")
@click.option("--parent-id", type=int, default=0, help="Parent account id")
@click.option("--logs-account-id", type=int, default=0, help="Account id receiving the logs")
def add(name: str, ref_id: str, sub_log_level: str, parent_id: int, logs_account_id: int) -> None:
    """Create a subaccount."""
    payload = SubAccountPayload(
        sub_account_name=name,
        ref_id=ref_id,
        log_level=sub_log_level,
        parent_id=parent_id,
        logs_account_id=logs_account_id,
    )
    sub_account = run_with_api(lambda api: api.subaccount.add_sub_account(payload))
    echo_json(sub_account.to_dict())


@cli.command()
@click.argument("sub_account_id", type=int)
@click.option("--parent-id", type=int, default=0, help="Parent account id")
def get(sub_account_id: int, parent_id: int) -> None:
    """Look up a subaccount by id."""
    sub_account = run_with_api(lambda api: api.subaccount.get_sub_account(parent_id, sub_account_id))
    if sub_account is None:
        raise click.ClickException(f"Subaccount {sub_account_id} not found")
    echo_json(sub_account.to_dict())


@cli.command(name="list")
@click.option("--parent-id", type=int, default=0, help="Parent account id")
def list_(parent_id: int) -> None:
    """List every subaccount of an account."""
    sub_accounts = run_with_api(lambda api: api.subaccount.list_sub_accounts(parent_id))
    echo_json(subaccounts_to_list(sub_accounts))


@cli.command()
@click.argument("sub_account_id", type=int)
def delete(sub_account_id: int) -> None:
    """Delete a subaccount."""
    run_with_api(lambda api: api.subaccount.delete_sub_account(sub_account_id))
    click.echo(f"Deleted subaccount {sub_account_id}")


if __name__ == "__main__":
    cli()
