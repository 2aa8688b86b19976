# ownership_prover/oracle.py
import logging

from web3 import Web3

from .blockchain import ChainRegistry
from .errors import OracleError

log = logging.getLogger(__name__)


class OwnershipOracle:
    """Reads the current owner of an NFT from its home chain."""

    def __init__(self, registry: ChainRegistry):
        self._registry = registry

    def owner_of(self, source_chain_id: int, nft_contract: str, token_id: int) -> str:
        # unmapped chain ids raise ConfigurationError here, before any call is made
        erc721 = self._registry.nft_contract(source_chain_id, nft_contract)
        try:
            owner = erc721.functions.ownerOf(int(token_id)).call()
        except Exception as e:
            # burned token, revert and unreachable node all look the same to the caller
            raise OracleError(
                f"ownerOf({token_id}) failed on {nft_contract} (chain {source_chain_id}): {e}"
            ) from e
        log.debug("owner of %s#%s on chain %s is %s", nft_contract, token_id, source_chain_id, owner)
        return Web3.to_checksum_address(owner)
