"""RPC endpoint pool and the connection state it owns."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.contract import Contract

from pingu.contracts.abis import DATA_STORE_ABI
from pingu.rpc.errors import ValidationError

logger = logging.getLogger(__name__)

Web3Factory = Callable[[str], Web3]


def http_web3_factory(timeout: float = 30.0) -> Web3Factory:
    """Build plain HTTP Web3 handles with a request timeout."""

    def build(url: str) -> Web3:
        return Web3(Web3.HTTPProvider(url, request_kwargs={"timeout": timeout}))

    return build


@dataclass
class ConnectionState:
    """Mutable connection state shared by the executor and the resolver.

    Only ``EndpointPool.switch_to_next`` mutates it. ``generation`` increases on
    every switch, so a handle captured under an older generation is stale.
    """

    endpoints: tuple[str, ...]
    active_index: int = 0
    generation: int = 0
    web3: Web3 | None = None
    registry: Contract | None = None
    address_cache: dict[str, str] = field(default_factory=dict)

    @property
    def active_endpoint(self) -> str:
        return self.endpoints[self.active_index]


class EndpointPool:
    """Ordered RPC endpoints with one active connection at a time."""

    def __init__(
        self,
        endpoints: list[str],
        registry_address: str,
        web3_factory: Web3Factory,
        account: LocalAccount | None = None,
    ):
        if not endpoints:
            raise ValidationError("At least one RPC endpoint is required")
        self.state = ConnectionState(endpoints=tuple(endpoints))
        self.registry_address = Web3.to_checksum_address(registry_address)
        self.web3_factory = web3_factory
        self.account = account
        self._connect()

    @property
    def size(self) -> int:
        return len(self.state.endpoints)

    @property
    def web3(self) -> Web3:
        return self.state.web3

    def switch_to_next(self) -> None:
        """Advance to the next endpoint (wrapping) and rebuild every handle.

        Reachability is not checked here; the next call attempt finds out.
        """
        previous = self.state.active_endpoint
        self.state.active_index = (self.state.active_index + 1) % self.size
        self.state.generation += 1
        self._connect()
        logger.warning(
            "Switched RPC endpoint %s -> %s", previous, self.state.active_endpoint
        )

    def _connect(self) -> None:
        web3 = self.web3_factory(self.state.active_endpoint)
        if self.account is not None:
            web3.eth.default_account = self.account.address
        self.state.web3 = web3
        self.state.registry = web3.eth.contract(
            address=self.registry_address, abi=DATA_STORE_ABI
        )
        self.state.address_cache.clear()
