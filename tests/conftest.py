from typing import Any, Callable, Dict, List, Tuple

import pytest
from eth_abi import encode
from web3 import Web3

from ownership_prover.blockchain import ChainRegistry
from ownership_prover.calldata import SCHEMA_V1
from ownership_prover.forwarder import AttestationBuilder, NonceValidator
from ownership_prover.handler import RequestHandler
from ownership_prover.oracle import OwnershipOracle
from ownership_prover.signer import Signer

SIGNER_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
REQUESTER = Web3.to_checksum_address("0x" + "aa" * 20)
AUTHORIZER = Web3.to_checksum_address("0x" + "ab" * 20)
NFT_CONTRACT = Web3.to_checksum_address("0x" + "bb" * 20)
FORWARDER = Web3.to_checksum_address("0x" + "cc" * 20)
SOURCE_CHAIN_ID = 1
DESTINATION_CHAIN_ID = 137
MESSAGE = bytes.fromhex("dead" + "beef" * 15)


class FakeCall:
    def __init__(self, web3: "FakeWeb3", address: str, name: str, args: Tuple[Any, ...]) -> None:
        self._web3 = web3
        self._address = address
        self._name = name
        self._args = args

    def call(self) -> Any:
        self._web3.calls.append((self._address, self._name, self._args))
        impl = self._web3.impls[self._name]
        return impl(*self._args)


class FakeFunctions:
    def __init__(self, web3: "FakeWeb3", address: str) -> None:
        self._web3 = web3
        self._address = address

    def __getattr__(self, name: str) -> Callable[..., FakeCall]:
        return lambda *args: FakeCall(self._web3, self._address, name, args)


class FakeContract:
    def __init__(self, web3: "FakeWeb3", address: str) -> None:
        self.address = address
        self.functions = FakeFunctions(web3, address)


class FakeEth:
    def __init__(self, web3: "FakeWeb3") -> None:
        self._web3 = web3

    def contract(self, address: str, abi: List[Dict[str, Any]]) -> FakeContract:
        return FakeContract(self._web3, address)


class FakeWeb3:
    """Answers contract view calls from plain callables and records every call."""

    def __init__(self, **impls: Callable[..., Any]) -> None:
        self.impls = impls
        self.calls: List[Tuple[str, str, Tuple[Any, ...]]] = []
        self.eth = FakeEth(self)

    def called(self, name: str) -> List[Tuple[Any, ...]]:
        return [args for _, n, args in self.calls if n == name]


class CountingSigner(Signer):
    def __init__(self, private_key: str) -> None:
        super().__init__(private_key)
        self.signed: List[bytes] = []

    def sign(self, message: bytes):
        self.signed.append(message)
        return super().sign(message)


def make_calldata(**overrides: Any) -> str:
    fields = {
        "requester": REQUESTER,
        "authorizer": AUTHORIZER,
        "nonce": 7,
        "source_chain_id": SOURCE_CHAIN_ID,
        "nft_contract": NFT_CONTRACT,
        "token_id": 411,
        "destination_chain_id": DESTINATION_CHAIN_ID,
        "timestamp": 1_700_000_000,
    }
    fields.update(overrides)
    return "0x" + encode(list(SCHEMA_V1), list(fields.values())).hex()


@pytest.fixture
def source_chain() -> FakeWeb3:
    return FakeWeb3(ownerOf=lambda token_id: REQUESTER.lower())


@pytest.fixture
def destination_chain() -> FakeWeb3:
    return FakeWeb3(getNonce=lambda requester: 7, createMessage=lambda *args: MESSAGE)


@pytest.fixture
def registry(source_chain: FakeWeb3, destination_chain: FakeWeb3) -> ChainRegistry:
    return ChainRegistry({SOURCE_CHAIN_ID: source_chain}, destination_chain)


@pytest.fixture
def signer() -> CountingSigner:
    return CountingSigner(SIGNER_KEY)


@pytest.fixture
def handler(registry: ChainRegistry, signer: CountingSigner) -> RequestHandler:
    return RequestHandler(
        oracle=OwnershipOracle(registry),
        nonce_validator=NonceValidator(registry),
        builder=AttestationBuilder(registry),
        signer=signer,
    )
