import logging
from typing import Any, Dict, Union

from substrateinterface import Keypair
from substrateinterface.utils.ss58 import ss58_decode

from agent.errors import ChainOperationError
from models.chain import ChainInfo, resolve_chain
from services.substrate_service import SubstrateService

logger = logging.getLogger(__name__)


def build_destination(source: ChainInfo, dest: ChainInfo) -> Dict[str, Any]:
    parents = 0 if source.is_relay else 1

    if dest.is_relay:
        interior: Union[str, Dict[str, Any]] = 'Here'
    else:
        interior = {'X1': {'Parachain': dest.para_id}}

    return {'V3': {'parents': parents, 'interior': interior}}


def build_beneficiary(recipient: str) -> Dict[str, Any]:
    return {
        'V3': {
            'parents': 0,
            'interior': {'X1': {'AccountId32': {'network': None, 'id': f"0x{ss58_decode(recipient)}"}}},
        }
    }


def build_native_assets(source: ChainInfo, amount: int) -> Dict[str, Any]:
    parents = 0 if source.is_relay else 1
    return {
        'V3': [
            {
                'id': {'Concrete': {'parents': parents, 'interior': 'Here'}},
                'fun': {'Fungible': amount},
            }
        ]
    }


def select_transfer_call(source: ChainInfo, dest: ChainInfo) -> tuple:
    """Pick the pallet and call used to move the relay token between two chains."""
    pallet = 'XcmPallet' if source.is_relay else 'PolkadotXcm'

    # Relay <-> system parachain moves are teleports, everything else goes through the reserve
    if (source.is_relay and dest.is_system_parachain) or (source.is_system_parachain and dest.is_relay):
        return pallet, 'limited_teleport_assets'

    return pallet, 'limited_reserve_transfer_assets'


class XcmTransferService:
    """Cross-chain transfers of the native token from the connected chain."""

    def __init__(self, substrate_service: SubstrateService):
        self.substrate_service = substrate_service

    async def transfer(
        self,
        session: Any,
        signer: Keypair,
        source_chain: str,
        dest_chain: str,
        recipient: str,
        amount: int
    ) -> str:
        """
        Send ``amount`` base units of the native token to ``recipient`` on ``dest_chain``.

        Args:
            session: Session connected to the source chain
            signer: Keypair paying for the transfer
            source_chain: Source chain name or parachain id
            dest_chain: Destination chain name, parachain id or "relay"
            recipient: SS58 address of the beneficiary
            amount: Amount in base units

        Returns:
            Extrinsic hash
        """
        try:
            source = resolve_chain(source_chain)
            dest = resolve_chain(dest_chain)
        except ValueError as e:
            raise ChainOperationError(str(e)) from e

        if source == dest:
            raise ChainOperationError(f"Source and destination are the same chain: {source.name}")

        if amount <= 0:
            raise ChainOperationError("Transfer amount must be positive")

        pallet, call_function = select_transfer_call(source, dest)

        logger.info(
            "XCM transfer %d from %s to %s via %s.%s",
            amount, source.name, dest.name, pallet, call_function
        )

        return await self.substrate_service.submit_call(
            session,
            signer,
            pallet,
            call_function,
            {
                'dest': build_destination(source, dest),
                'beneficiary': build_beneficiary(recipient),
                'assets': build_native_assets(source, amount),
                'fee_asset_item': 0,
                'weight_limit': 'Unlimited',
            },
        )
