"""CLI commands for the items of a session."""

from __future__ import annotations

import click

from smartcart.infrastructure.cli.common import resumed, unwrap


@click.command("add")
@click.option("--session", "session_id", required=True, help="Session ID.")
@click.option("--code", "product_code", required=True, help="Scanned product barcode.")
@click.pass_context
def item_add(ctx: click.Context, session_id: str, product_code: str) -> None:
    """Scan a product into the session (repeat scans add one)."""
    orchestrator = resumed(ctx, session_id)
    item = unwrap(orchestrator.add_item(product_code, session_id))

    click.echo(
        f"{item.barcode}: quantity {item.quantity}, total {item.total_price}  (item {item.item_id})"
    )


@click.command("update")
@click.option("--session", "session_id", required=True, help="Session ID.")
@click.option("--item", "item_id", required=True, help="Item ID.")
@click.option("--quantity", required=True, type=int, help="New quantity; 0 removes the item.")
@click.pass_context
def item_update(ctx: click.Context, session_id: str, item_id: str, quantity: int) -> None:
    """Set the quantity of an item."""
    orchestrator = resumed(ctx, session_id)
    unwrap(orchestrator.update_quantity(item_id, quantity))

    if quantity <= 0:
        click.echo(f"Item {item_id} removed.")
    else:
        click.echo(f"Item {item_id} quantity set to {quantity}")


@click.command("remove")
@click.option("--session", "session_id", required=True, help="Session ID.")
@click.option("--item", "item_id", required=True, help="Item ID.")
@click.pass_context
def item_remove(ctx: click.Context, session_id: str, item_id: str) -> None:
    """Remove an item from the session."""
    orchestrator = resumed(ctx, session_id)
    unwrap(orchestrator.remove_item(item_id))

    click.echo(f"Item {item_id} removed.")
