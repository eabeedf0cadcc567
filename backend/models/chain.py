from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

RELAY_SENTINEL = 'relay'


class ChainType(str, Enum):
    RELAY_CHAIN = 'RelayChain'
    PARA_CHAIN = 'ParaChain'


@dataclass(frozen=True)
class ChainInfo:
    name: str
    chain_type: ChainType
    para_id: Optional[int] = None

    @property
    def is_relay(self) -> bool:
        return self.chain_type == ChainType.RELAY_CHAIN

    @property
    def is_system_parachain(self) -> bool:
        # System parachains (Asset Hub, Collectives, ...) accept teleports of the relay token
        return self.para_id is not None and 1000 <= self.para_id < 2000


RELAY_CHAIN = ChainInfo(name='Westend', chain_type=ChainType.RELAY_CHAIN)

KNOWN_CHAINS: Dict[str, ChainInfo] = {
    'westend': RELAY_CHAIN,
    RELAY_SENTINEL: RELAY_CHAIN,
    'asset hub': ChainInfo(name='Asset Hub', chain_type=ChainType.PARA_CHAIN, para_id=1000),
    'assethub': ChainInfo(name='Asset Hub', chain_type=ChainType.PARA_CHAIN, para_id=1000),
}


def resolve_chain(identifier: Union[str, int]) -> ChainInfo:
    """
    Resolve a chain name, numeric parachain id or the relay sentinel.

    Raises:
        ValueError: The identifier names no known chain
    """
    if isinstance(identifier, bool):
        raise ValueError(f"Unknown chain: {identifier!r}")

    if isinstance(identifier, int):
        para_id = identifier
    else:
        normalized = str(identifier).strip().lower()

        if normalized in KNOWN_CHAINS:
            return KNOWN_CHAINS[normalized]

        if not normalized.isdigit():
            raise ValueError(f"Unknown chain: {identifier!r}")

        para_id = int(normalized)

    if para_id < 0:
        raise ValueError(f"Invalid parachain id: {para_id}")

    if para_id == 0:
        return RELAY_CHAIN

    for chain in KNOWN_CHAINS.values():
        if chain.para_id == para_id:
            return chain

    return ChainInfo(name=f'Parachain {para_id}', chain_type=ChainType.PARA_CHAIN, para_id=para_id)
