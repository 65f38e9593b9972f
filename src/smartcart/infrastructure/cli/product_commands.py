"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from smartcart.application.session_orchestrator import SessionOrchestrator
from smartcart.infrastructure.cli.common import unwrap


@click.command("list")
@click.pass_context
def product_list(ctx: click.Context) -> None:
    """List all products in the catalog."""
    orchestrator: SessionOrchestrator = ctx.obj
    products = unwrap(orchestrator.list_products())

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'Code':<14} {'Name':<24} {'Category':<14} {'Price':>10}")
    click.echo("-" * 65)
    for p in products:
        click.echo(f"{p.barcode:<14} {p.name:<24} {p.category or '-':<14} {str(p.price):>10}")
