import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional

from agent.errors import NotReadyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainContext:
    """Resources every chain operation needs: a live session and the signing keypair."""

    session: Any
    signer: Any

    @property
    def address(self) -> str:
        return self.signer.ss58_address


class InitializationGate:
    """
    One-shot readiness barrier for the chain session and signing identity.

    The gate is resolved exactly once. Waiters attach to a future instead of
    polling; a failed initialization is stored and re-raised to waiters.
    """

    def __init__(self):
        self._future: Optional[asyncio.Future] = None
        self._context: Optional[ChainContext] = None
        self._signer: Any = None
        self._closed = False

    def _ensure_future(self) -> asyncio.Future:
        if self._future is None:
            self._future = asyncio.get_running_loop().create_future()
        return self._future

    @property
    def is_ready(self) -> bool:
        return self._context is not None and not self._closed

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def context(self) -> Optional[ChainContext]:
        return self._context

    def set_signer(self, signer: Any) -> None:
        self._signer = signer

    def resolve(self, context: ChainContext) -> None:
        if self._context is not None:
            raise RuntimeError("Initialization gate is already resolved")

        self._context = context
        self._signer = context.signer
        future = self._ensure_future()
        if not future.done():
            future.set_result(context)

    def fail(self, error: BaseException) -> None:
        future = self._ensure_future()
        if not future.done():
            future.set_exception(error)
            # Nobody may be waiting; avoid "exception was never retrieved"
            future.exception()

    def require(self) -> ChainContext:
        """Return the ready context or raise NotReadyError naming what is missing."""
        if self._closed:
            raise NotReadyError('connection', "Agent is disconnected")

        if self._signer is None:
            raise NotReadyError('signing key', "Private key not set. Signing key is not initialized")

        if self._context is None:
            raise NotReadyError('connection', "Not connected to Substrate node")

        return self._context

    async def wait(self, timeout: Optional[float] = None) -> ChainContext:
        if self._closed:
            raise NotReadyError('connection', "Agent is disconnected")

        future = self._ensure_future()
        if timeout is None:
            return await asyncio.shield(future)
        return await asyncio.wait_for(asyncio.shield(future), timeout)

    def close(self) -> None:
        self._closed = True
        self._context = None

        if self._future is not None and not self._future.done():
            self.fail(NotReadyError('connection', "Agent is disconnected"))
