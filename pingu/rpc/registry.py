"""Address resolution through the on-chain DataStore registry."""

import logging

from web3 import Web3

from pingu.contracts.names import ContractName, resolve_name
from pingu.models.common import ADDRESS_ZERO
from pingu.rpc.endpoint_pool import ConnectionState
from pingu.rpc.errors import ValidationError
from pingu.rpc.fallback import FallbackExecutor

logger = logging.getLogger(__name__)


class AddressResolver:
    """Maps registry keys to contract addresses, cached until the next endpoint switch."""

    def __init__(self, state: ConnectionState, executor: FallbackExecutor):
        self.state = state
        self.executor = executor

    def resolve(self, name: ContractName | str) -> str:
        key = resolve_name(name)
        cached = self.state.address_cache.get(key)
        if cached:
            return cached

        address = self.executor.run(
            lambda: self.state.registry.functions.getAddress(key.value).call(),
            label=f"resolve {key.value}",
        )
        if not address or address == ADDRESS_ZERO:
            raise ValidationError(f"Registry has no address for {key.value}")

        address = Web3.to_checksum_address(address)
        self.state.address_cache[key] = address
        logger.debug("Resolved %s -> %s", key.value, address)
        return address
