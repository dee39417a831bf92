"""Default chain configuration for the Monad deployment."""

from pingu.config.schema import AssetConfig, ChainConfig
from pingu.models.common import ADDRESS_ZERO

MONAD_RPC_URLS: list[str] = [
    "https://rpc3.monad.xyz",
    "https://monad-testnet.drpc.org",
]

MONAD_SUBGRAPH_ID = "G3dQNfEnDw4q3bn6QRSJUmcLzi7JKTDGYGWwPeYWYa6X"

MONAD_CONFIG = ChainConfig(
    chain_id=10143,
    name="Monad",
    rpc_urls=MONAD_RPC_URLS,
    data_store="0x631c6E0d5ae2E1F6a39871a9BE97F1D9d43D1C83",
    subgraph_id=MONAD_SUBGRAPH_ID,
    explorer="https://monadvision.com/",
    assets={
        "USDC": AssetConfig(
            address="0x754704bc059f8c67012fed69bc8a327a5aafb603",
            decimals=6,
            min_size=1_000_000,
        ),
        "MON": AssetConfig(
            address=ADDRESS_ZERO,
            decimals=18,
            min_size=10**18,
            is_gas_token=True,
        ),
    },
)

DEFAULT_CHAIN = MONAD_CONFIG
