import asyncio
import logging
from typing import Any, Dict

from substrateinterface import Keypair, KeypairType, SubstrateInterface
from substrateinterface.exceptions import SubstrateRequestException

from agent.errors import ChainOperationError

logger = logging.getLogger(__name__)


class SubstrateService:
    """Connection, key derivation and extrinsic submission on a Substrate chain."""

    def __init__(self, crypto_type: int = KeypairType.SR25519):
        self.crypto_type = crypto_type

    def derive_keypair(self, secret: str) -> Keypair:
        """
        Derive the signing keypair from a hex seed, a mnemonic or a secret URI.

        Args:
            secret: ``0x``-prefixed 32 byte seed, mnemonic, or URI such as ``//Alice``

        Returns:
            Keypair used to sign extrinsics
        """
        secret = secret.strip()

        if secret.startswith('0x') and len(secret) == 66:
            keypair = Keypair.create_from_seed(secret, crypto_type=self.crypto_type)
        else:
            keypair = Keypair.create_from_uri(secret, crypto_type=self.crypto_type)

        logger.info("✅ Signing key derived: %s", keypair.ss58_address)
        return keypair

    async def connect(self, ws_endpoint: str) -> SubstrateInterface:
        logger.info("Connecting to Substrate node: %s", ws_endpoint)

        session = await asyncio.to_thread(SubstrateInterface, url=ws_endpoint)

        logger.info("✅ Connected to %s", session.chain)
        return session

    async def disconnect(self, session: SubstrateInterface) -> None:
        await asyncio.to_thread(session.close)
        logger.info("Substrate session closed")

    async def query(self, session: SubstrateInterface, module: str, storage_function: str, params: list) -> Any:
        try:
            result = await asyncio.to_thread(session.query, module, storage_function, params)
        except SubstrateRequestException as e:
            raise ChainOperationError(f"{module}.{storage_function} query failed: {e}") from e

        return result.value

    async def submit_call(
        self,
        session: SubstrateInterface,
        signer: Keypair,
        call_module: str,
        call_function: str,
        call_params: Dict[str, Any]
    ) -> str:
        """
        Compose, sign and submit a call, waiting for block inclusion.

        Returns:
            Extrinsic hash

        Raises:
            ChainOperationError: The node rejected the extrinsic or it failed on chain
        """
        def _submit():
            call = session.compose_call(
                call_module=call_module,
                call_function=call_function,
                call_params=call_params,
            )
            extrinsic = session.create_signed_extrinsic(call=call, keypair=signer)
            return session.submit_extrinsic(extrinsic, wait_for_inclusion=True)

        logger.info("Submitting %s.%s from %s", call_module, call_function, signer.ss58_address)

        try:
            receipt = await asyncio.to_thread(_submit)
        except SubstrateRequestException as e:
            raise ChainOperationError(f"{call_module}.{call_function} was rejected: {e}") from e

        if not receipt.is_success:
            raise ChainOperationError(
                f"{call_module}.{call_function} failed: {receipt.error_message}"
            )

        logger.info("✅ %s.%s included: %s", call_module, call_function, receipt.extrinsic_hash)
        return receipt.extrinsic_hash
