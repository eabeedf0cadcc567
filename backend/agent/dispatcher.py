import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from agent.errors import CollaboratorError
from agent.intent import (
    AddProxyIntent,
    CheckProxyIntent,
    Intent,
    RemoveProxyIntent,
    XcmTransferIntent,
)
from agent.state import ChainContext
from agent.units import to_base_units
from models.agent_config import ProxyPolicy

logger = logging.getLogger(__name__)

PROXY_ADDED = "✅ Proxy added successfully"
PROXY_EXISTS = "✅ Proxy exists!"
PROXY_NOT_FOUND = "❌ Proxy not found."
PROXY_REMOVED = "✅ Proxy removed successfully"
XCM_TRANSFER_COMPLETED = "✅ XCM Transfer completed successfully"
INVALID_ACTION = "⚠️ Invalid action!"


class ActionDispatcher:
    """Routes one validated intent to exactly one chain operation."""

    def __init__(self, proxy_service: Any, xcm_service: Any, proxy_policy: Optional[ProxyPolicy] = None):
        self.proxy_service = proxy_service
        self.xcm_service = xcm_service
        self.proxy_policy = proxy_policy or ProxyPolicy()

        self._handlers: Dict[type, Callable[[Any, ChainContext], Awaitable[str]]] = {
            AddProxyIntent: self._add_proxy,
            CheckProxyIntent: self._check_proxy,
            RemoveProxyIntent: self._remove_proxy,
            XcmTransferIntent: self._xcm_transfer,
        }

    async def dispatch(self, intent: Intent, context: ChainContext) -> str:
        handler = self._handlers.get(type(intent))

        if handler is None:
            logger.info("No handler for intent: %r", intent)
            return INVALID_ACTION

        logger.info("Dispatching %s", type(intent).__name__)

        try:
            return await handler(intent, context)
        except CollaboratorError:
            raise
        except Exception as e:
            raise CollaboratorError(f"{type(intent).__name__} failed: {e}") from e

    async def _add_proxy(self, intent: AddProxyIntent, context: ChainContext) -> str:
        await self.proxy_service.add_proxy(
            context.session,
            context.signer,
            intent.proxy_address,
            self.proxy_policy.proxy_type,
            self.proxy_policy.delay,
        )
        return PROXY_ADDED

    async def _check_proxy(self, intent: CheckProxyIntent, context: ChainContext) -> str:
        is_proxy = await self.proxy_service.check_proxy(
            context.session,
            context.address,
            intent.proxy_address,
        )
        return PROXY_EXISTS if is_proxy else PROXY_NOT_FOUND

    async def _remove_proxy(self, intent: RemoveProxyIntent, context: ChainContext) -> str:
        await self.proxy_service.remove_proxy(
            context.session,
            context.signer,
            intent.proxy_address,
            self.proxy_policy.proxy_type,
            self.proxy_policy.delay,
        )
        return PROXY_REMOVED

    async def _xcm_transfer(self, intent: XcmTransferIntent, context: ChainContext) -> str:
        amount = to_base_units(intent.amount)

        await self.xcm_service.transfer(
            context.session,
            context.signer,
            intent.source_chain,
            intent.dest_chain,
            recipient=context.address,
            amount=amount,
        )
        return XCM_TRANSFER_COMPLETED
