# ownership_prover/blockchain.py
import json
import os
from typing import Any, Dict, Mapping

from eth_account import Account
from eth_account.messages import encode_defunct
from hexbytes import HexBytes
from web3 import Web3

from .errors import ConfigurationError
from .settings import Settings

# load ABIs shipped with the package
HERE = os.path.dirname(__file__)
ABI_DIR = os.path.join(HERE, "abis")


def load_abi(name: str) -> list:
    with open(os.path.join(ABI_DIR, f"{name}.json")) as f:
        artifact = json.load(f)
    return artifact["abi"]


ERC721_ABI = load_abi("ERC721")
FORWARDER_ABI = load_abi("EssentialForwarder")


def make_web3(rpc_url: str, timeout: float) -> Web3:
    return Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))


class ChainRegistry:
    """
    Static mapping from chain id to a reusable web3 client, plus the client for
    the destination chain the forwarding contracts live on. Built once at
    startup and only read afterwards.
    """

    def __init__(self, sources: Mapping[int, Any], destination: Any):
        self._sources: Dict[int, Any] = dict(sources)
        self._destination = destination

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChainRegistry":
        timeout = settings.RPC_TIMEOUT_SECONDS
        sources = {
            chain_id: make_web3(url, timeout)
            for chain_id, url in settings.source_chain_urls().items()
        }
        return cls(sources, make_web3(settings.DESTINATION_RPC_URL, timeout))

    @property
    def chain_ids(self):
        return sorted(self._sources)

    def source(self, chain_id: int):
        try:
            return self._sources[int(chain_id)]
        except KeyError:
            raise ConfigurationError(f"no RPC endpoint configured for chain {chain_id}") from None

    @property
    def destination(self):
        return self._destination

    def nft_contract(self, chain_id: int, address: str):
        w3 = self.source(chain_id)
        return w3.eth.contract(address=Web3.to_checksum_address(address), abi=ERC721_ABI)

    def forwarder(self, address: str):
        return self._destination.eth.contract(address=Web3.to_checksum_address(address), abi=FORWARDER_ABI)


def recover_signer_from_raw(raw_message: bytes, signature) -> str:
    """
    Recover the address that signed `raw_message` using Ethereum personal_sign semantics
    (i.e. signMessage(arrayify(message)) from ethers), which is what the forwarder checks.
    """
    if isinstance(raw_message, str):
        # allow hexstring
        raw_message = HexBytes(raw_message)

    msg = encode_defunct(primitive=bytes(raw_message))
    signer = Account.recover_message(msg, signature=signature)
    return Web3.to_checksum_address(signer)
