"""Helpers shared by the CLI command modules."""

from __future__ import annotations

from typing import TypeVar

import click

from smartcart.application.dto import CartDTO
from smartcart.application.result import Result
from smartcart.application.session_orchestrator import SessionOrchestrator

T = TypeVar("T")


def unwrap(result: Result[T]) -> T:
    """Return the value or turn the failure into a ClickException."""
    if not result.ok:
        kind = result.kind.value if result.kind else "ERROR"
        hint = " (temporary, try again)" if result.error.retryable else ""  # type: ignore[union-attr]
        raise click.ClickException(f"[{kind}] {result.error}{hint}")
    return result.value  # type: ignore[return-value]


def resumed(ctx: click.Context, session_id: str) -> SessionOrchestrator:
    """Orchestrator with *session_id* loaded as the current session."""
    orchestrator: SessionOrchestrator = ctx.obj
    unwrap(orchestrator.resume_session(session_id))
    return orchestrator


def display_cart(dto: CartDTO) -> None:
    click.echo(f"Session {dto.session_id}  (status={dto.status})")
    click.echo(f"Cart:    {dto.cart_id}")
    click.echo(f"User:    {dto.user_id}")
    click.echo(f"Started: {dto.started_at}")
    click.echo()

    if not dto.items:
        click.echo("  Cart is empty.")
        return

    click.echo(f"  {'Item':<36} {'Code':<14} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*79}")
    for line in dto.items:
        click.echo(
            f"  {line.item_id:<36} {line.barcode:<14} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*79}")
    click.echo(f"  {'Cart Total':<57} {dto.total:>22}")
