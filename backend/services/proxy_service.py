import logging
from typing import Any

from substrateinterface import Keypair
from substrateinterface.utils.ss58 import ss58_decode

from services.substrate_service import SubstrateService

logger = logging.getLogger(__name__)


def same_account(first: str, second: str) -> bool:
    """Compare two addresses by public key so differing SS58 prefixes still match."""
    try:
        return ss58_decode(first) == ss58_decode(second)
    except ValueError:
        return first == second


class ProxyService:
    """Proxy pallet operations: add, check and remove a delegate."""

    def __init__(self, substrate_service: SubstrateService):
        self.substrate_service = substrate_service

    async def add_proxy(
        self,
        session: Any,
        signer: Keypair,
        proxy_address: str,
        proxy_type: str = 'Any',
        delay: int = 0
    ) -> str:
        logger.info("Adding proxy %s (%s, delay %d)", proxy_address, proxy_type, delay)

        return await self.substrate_service.submit_call(
            session,
            signer,
            'Proxy',
            'add_proxy',
            {'delegate': proxy_address, 'proxy_type': proxy_type, 'delay': delay},
        )

    async def check_proxy(self, session: Any, owner_address: str, proxy_address: str) -> bool:
        value = await self.substrate_service.query(session, 'Proxy', 'Proxies', [owner_address])

        # Storage value is (Vec<ProxyDefinition>, deposit)
        definitions = value[0] if value else []

        return any(
            same_account(definition['delegate'], proxy_address)
            for definition in definitions or []
        )

    async def remove_proxy(
        self,
        session: Any,
        signer: Keypair,
        proxy_address: str,
        proxy_type: str = 'Any',
        delay: int = 0
    ) -> str:
        logger.info("Removing proxy %s (%s)", proxy_address, proxy_type)

        return await self.substrate_service.submit_call(
            session,
            signer,
            'Proxy',
            'remove_proxy',
            {'delegate': proxy_address, 'proxy_type': proxy_type, 'delay': delay},
        )
