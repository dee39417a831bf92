"""Client: endpoint pool, signer, registry resolution and contract handles."""

import logging
from collections.abc import Callable
from typing import TypeVar

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.contract import Contract

from pingu.config.defaults import DEFAULT_CHAIN
from pingu.config.schema import AssetConfig, ClientConfig
from pingu.contracts.abis import ERC20_ABI
from pingu.contracts.names import ContractName, abi_for, resolve_name
from pingu.rpc.endpoint_pool import EndpointPool, Web3Factory, http_web3_factory
from pingu.rpc.errors import ValidationError
from pingu.rpc.fallback import FallbackExecutor
from pingu.rpc.registry import AddressResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PinguClient:
    """Entry point shared by Reader, Trader and Pool.

    Holds one connection at a time. Allow a single in-flight mutating
    operation per client instance: an endpoint switch triggered by one call
    affects every other call sharing the client.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        web3_factory: Web3Factory | None = None,
    ):
        self.config = config or ClientConfig(chain=DEFAULT_CHAIN)
        self.account: LocalAccount | None = None
        if self.config.private_key:
            self.account = Account.from_key(self.config.private_key)

        factory = web3_factory or http_web3_factory(self.config.request_timeout)
        self.pool = EndpointPool(
            self.config.endpoints,
            self.config.chain.data_store,
            factory,
            account=self.account,
        )
        self.executor = FallbackExecutor(self.pool)
        self.resolver = AddressResolver(self.pool.state, self.executor)
        logger.info(
            "Connected to %s via %s (%d endpoints)",
            self.config.chain.name, self.current_rpc_url, self.pool.size,
        )

    @property
    def web3(self) -> Web3:
        """The current Web3 handle. Re-fetch after any call that may fail over."""
        return self.pool.web3

    @property
    def current_rpc_url(self) -> str:
        return self.pool.state.active_endpoint

    @property
    def address(self) -> str:
        return self.require_signer().address

    def require_signer(self) -> LocalAccount:
        if self.account is None:
            raise ValidationError("No signer configured. Provide a private_key.")
        return self.account

    def with_fallback(self, operation: Callable[[], T], label: str = "rpc call") -> T:
        return self.executor.run(operation, label=label)

    # --- Contracts ---

    def get_contract_address(self, name: ContractName | str) -> str:
        return self.resolver.resolve(name)

    def get_contract(self, name: ContractName | str) -> Contract:
        key = resolve_name(name)
        abi = abi_for(key)
        address = self.resolver.resolve(key)
        return self.web3.eth.contract(address=address, abi=abi, decode_tuples=True)

    def get_erc20_contract(self, token_address: str) -> Contract:
        return self.web3.eth.contract(
            address=Web3.to_checksum_address(token_address), abi=ERC20_ABI
        )

    # --- Assets ---

    def asset(self, name: str | None = None) -> AssetConfig:
        name = name or self.config.default_asset
        asset = self.config.chain.assets.get(name)
        if asset is None:
            available = ", ".join(self.config.chain.assets)
            raise ValidationError(f"Unknown asset: {name}. Available: {available}")
        return asset

    def asset_address(self, name: str | None = None) -> str:
        return Web3.to_checksum_address(self.asset(name).address)

    def asset_name_by_address(self, address: str) -> str | None:
        for name, asset in self.config.chain.assets.items():
            if asset.address.lower() == address.lower():
                return name
        return None
