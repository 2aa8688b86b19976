# ownership_prover/calldata.py
from dataclasses import astuple, dataclass
from typing import Union

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from web3 import Web3

from .errors import DecodeError

# Version 1 of the request tuple. Only this layout is accepted; requests built
# for older forwarders (no authorizer/timestamp/chain ids) are rejected.
SCHEMA_V1 = ("address", "address", "uint256", "uint256", "address", "uint256", "uint256", "uint256")
FIELDS_V1 = (
    "requester",
    "authorizer",
    "nonce",
    "source_chain_id",
    "nft_contract",
    "token_id",
    "destination_chain_id",
    "timestamp",
)
WORD_SIZE = 32
CALLDATA_LENGTH_V1 = WORD_SIZE * len(SCHEMA_V1)


@dataclass(frozen=True)
class AttestationRequest:
    requester: str
    authorizer: str
    nonce: int
    source_chain_id: int
    nft_contract: str
    token_id: int
    destination_chain_id: int
    timestamp: int
    destination_contract: str


def _to_bytes(call_data: Union[bytes, bytearray, str]) -> bytes:
    if isinstance(call_data, (bytes, bytearray)):
        return bytes(call_data)
    if isinstance(call_data, str):
        s = call_data[2:] if call_data[:2] in ("0x", "0X") else call_data
        # bytes.fromhex rejects odd-length and non-hex input; whitespace is not allowed either
        if any(c.isspace() for c in s):
            raise DecodeError("calldata contains whitespace")
        try:
            return bytes.fromhex(s)
        except ValueError as e:
            raise DecodeError(f"calldata is not valid hex: {e}") from e
    raise DecodeError(f"unsupported calldata type {type(call_data).__name__}")


def _to_address(value: str, name: str) -> str:
    if not isinstance(value, str) or not Web3.is_address(value):
        raise DecodeError(f"{name} is not a valid address")
    digits = value[2:]
    # mixed case means EIP-55; a typo there must not be normalized away
    if digits != digits.lower() and digits != digits.upper() and not Web3.is_checksum_address(value):
        raise DecodeError(f"{name} has an invalid EIP-55 checksum")
    return Web3.to_checksum_address(value)


def decode_request(call_data: Union[bytes, bytearray, str], to: str) -> AttestationRequest:
    """
    Decode a V1 attestation request.

    ``call_data`` is the ABI-encoded tuple (raw bytes or 0x-hex), ``to`` the
    forwarding contract the call targets. Raises DecodeError on any malformed
    field; nothing is returned for a partially valid payload.
    """
    destination = _to_address(to, "destination contract")
    raw = _to_bytes(call_data)
    if len(raw) != CALLDATA_LENGTH_V1:
        raise DecodeError(f"calldata must be {CALLDATA_LENGTH_V1} bytes, got {len(raw)}")

    try:
        # strict decoding rejects non-zero padding, e.g. addresses wider than 160 bits
        values = decode(list(SCHEMA_V1), raw, strict=True)
    except DecodingError as e:
        raise DecodeError(f"calldata does not match schema v1: {e}") from e

    fields = dict(zip(FIELDS_V1, values))
    for name in ("requester", "authorizer", "nft_contract"):
        fields[name] = Web3.to_checksum_address(fields[name])
    return AttestationRequest(destination_contract=destination, **fields)


def encode_request(request: AttestationRequest) -> bytes:
    """Inverse of decode_request for the calldata part (``to`` travels separately)."""
    values = astuple(request)[: len(FIELDS_V1)]
    return encode(list(SCHEMA_V1), list(values))
