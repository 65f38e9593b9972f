"""CLI commands for the shopping session lifecycle."""

from __future__ import annotations

import click

from smartcart.application.dto import cart_dto, order_dto
from smartcart.application.session_orchestrator import SessionOrchestrator
from smartcart.infrastructure.cli.common import display_cart, resumed, unwrap


@click.command("start")
@click.option("--cart", "cart_code", required=True, help="Cart code from the QR label.")
@click.option("--user", "user_id", required=True, help="Shopper's user ID.")
@click.pass_context
def session_start(ctx: click.Context, cart_code: str, user_id: str) -> None:
    """Claim a cart and open a shopping session."""
    orchestrator: SessionOrchestrator = ctx.obj
    session = unwrap(orchestrator.start_session(cart_code, user_id))

    click.echo(f"Session {session.session_id} started on cart {session.cart_id}")


@click.command("show")
@click.option("--session", "session_id", required=True, help="Session ID.")
@click.pass_context
def session_show(ctx: click.Context, session_id: str) -> None:
    """Show an active session and its items."""
    orchestrator = resumed(ctx, session_id)
    state = orchestrator.state
    display_cart(cart_dto(state.require_active(), state.items.value))


@click.command("checkout")
@click.option("--session", "session_id", required=True, help="Session ID.")
@click.option("--payment", "payment_method", required=True, help="Payment method (e.g. cash, card).")
@click.option("--discount", default="0", show_default=True, help="Discount amount (e.g. 5.00).")
@click.pass_context
def session_checkout(ctx: click.Context, session_id: str, payment_method: str, discount: str) -> None:
    """Pay for the session's items and release the cart."""
    orchestrator = resumed(ctx, session_id)
    order = unwrap(orchestrator.checkout(payment_method, discount, session_id=session_id))
    dto = order_dto(order)

    click.echo(f"Order {dto.order_id} completed  (payment={dto.payment_method})")
    click.echo(f"  {'Total':<12} {dto.total:>12}")
    click.echo(f"  {'Discount':<12} {dto.discount:>12}")
    click.echo(f"  {'-'*25}")
    click.echo(f"  {'Paid':<12} {dto.final:>12}")
