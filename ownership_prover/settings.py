# ownership_prover/settings.py
from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Infura network slugs for chain ids the source-chain lookup can reach without
# an explicit CHAIN_RPC_URLS entry.
INFURA_NETWORKS: Dict[int, str] = {
    1: "mainnet",
    10: "optimism-mainnet",
    137: "polygon-mainnet",
    8453: "base-mainnet",
    42161: "arbitrum-mainnet",
    59144: "linea-mainnet",
    80002: "polygon-amoy",
    11155111: "sepolia",
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OWNERSHIP_SIGNER_PRIVATE_KEY: SecretStr
    DESTINATION_RPC_URL: str = Field(
        validation_alias=AliasChoices("DESTINATION_RPC_URL", "ALTNET_RPC_URL"),
    )
    CHAIN_RPC_URLS: Dict[int, str] = {}
    INFURA_API_KEY: Optional[str] = None
    RPC_TIMEOUT_SECONDS: float = 10.0

    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ALLOW_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    def source_chain_urls(self) -> Dict[int, str]:
        """
        Chain id -> RPC URL for every source chain the service can query.
        Explicit CHAIN_RPC_URLS entries win over Infura defaults.
        """
        urls: Dict[int, str] = {}
        if self.INFURA_API_KEY:
            for chain_id, network in INFURA_NETWORKS.items():
                urls[chain_id] = f"https://{network}.infura.io/v3/{self.INFURA_API_KEY}"
        urls.update(self.CHAIN_RPC_URLS)
        return urls


@lru_cache()
def get_settings() -> Settings:
    return Settings()
