"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field


class AssetConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    address: str
    decimals: int = Field(ge=0, le=77)
    min_size: int = Field(default=0, ge=0)  # scaled units
    is_gas_token: bool = False


class ChainConfig(BaseModel):
    model_config = {"extra": "forbid"}

    chain_id: int
    name: str
    rpc_urls: list[str] = Field(min_length=1)
    data_store: str
    subgraph_id: str = ""
    explorer: str = ""
    assets: dict[str, AssetConfig] = {}


class ClientConfig(BaseModel):
    model_config = {"extra": "forbid"}

    chain: ChainConfig
    rpc_url: str | None = None
    private_key: str | None = Field(default=None, repr=False, exclude=True)
    request_timeout: float = Field(default=30.0, gt=0.0)
    receipt_timeout: float = Field(default=120.0, gt=0.0)
    price_feed_url: str = "https://hermes.pyth.network"
    default_asset: str = "USDC"

    @property
    def endpoints(self) -> list[str]:
        """Ordered endpoint list: preferred URL first, then the chain fallbacks."""
        if self.rpc_url:
            return [self.rpc_url, *self.chain.rpc_urls]
        return list(self.chain.rpc_urls)
