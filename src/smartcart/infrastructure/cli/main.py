import click

from smartcart.infrastructure.bootstrap import orchestrator
from smartcart.infrastructure.cli.item_commands import item_add, item_remove, item_update
from smartcart.infrastructure.cli.product_commands import product_list
from smartcart.infrastructure.cli.session_commands import (
    session_checkout,
    session_show,
    session_start,
)
from smartcart.infrastructure.config import Settings
from smartcart.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log at DEBUG level.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """SmartCart: self-checkout shopping sessions"""
    settings = Settings.from_env()
    configure_logging("DEBUG" if verbose else settings.log_level, json=settings.log_json)
    if ctx.obj is None:
        ctx.obj = orchestrator(settings)


@cli.group()
def session() -> None:
    """Start, inspect and check out shopping sessions."""


@cli.group()
def item() -> None:
    """Manage items in a session."""


@cli.group()
def product() -> None:
    """Browse the product catalog."""


# Register subcommands
session.add_command(session_start)
session.add_command(session_show)
session.add_command(session_checkout)
item.add_command(item_add)
item.add_command(item_update)
item.add_command(item_remove)
product.add_command(product_list)
