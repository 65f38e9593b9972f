"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import structlog

from smartcart.application.session_orchestrator import SessionOrchestrator
from smartcart.application.session_state import SessionState
from smartcart.infrastructure.config import Settings
from smartcart.infrastructure.persistence.rest_cart_repository import RestCartRepository
from smartcart.infrastructure.persistence.rest_order_repository import RestOrderRepository
from smartcart.infrastructure.persistence.rest_product_repository import (
    RestProductRepository,
)
from smartcart.infrastructure.persistence.rest_session_item_repository import (
    RestSessionItemRepository,
)
from smartcart.infrastructure.persistence.rest_session_repository import (
    RestSessionRepository,
)
from smartcart.infrastructure.persistence.rest_user_repository import RestUserRepository
from smartcart.infrastructure.rest.row_store_client import RowStoreClient

log = structlog.get_logger(__name__)


def row_store_client(settings: Settings) -> RowStoreClient:
    if not settings.is_configured:
        log.warning(
            "service_not_configured",
            url_set=bool(settings.supabase_url),
            key_length=len(settings.supabase_key),
        )
    return RowStoreClient(settings)


def orchestrator(
    settings: Settings,
    client: RowStoreClient | None = None,
    state: SessionState | None = None,
) -> SessionOrchestrator:
    client = client if client is not None else row_store_client(settings)
    return SessionOrchestrator(
        cart_repo=RestCartRepository(client),
        session_repo=RestSessionRepository(client),
        item_repo=RestSessionItemRepository(client),
        product_repo=RestProductRepository(client),
        order_repo=RestOrderRepository(client),
        user_repo=RestUserRepository(client),
        state=state,
    )
