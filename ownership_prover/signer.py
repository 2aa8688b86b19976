# ownership_prover/signer.py
"""Attestation signing with the dedicated ownership-signer key."""
from __future__ import annotations

from dataclasses import dataclass

from eth_account import Account
from eth_account.messages import encode_defunct

from .errors import ConfigurationError


@dataclass(frozen=True)
class Attestation:
    signature: bytes
    message: bytes
    signer: str

    @property
    def signature_hex(self) -> str:
        return "0x" + bytes(self.signature).hex()


class Signer:
    """
    Holds a key with no assets that the forwarding contract is configured to
    trust. Leaking it lets someone forge attestations, nothing more, and the
    forwarder can be pointed at a new signer.
    """

    def __init__(self, private_key: str) -> None:
        try:
            self._account = Account.from_key(private_key)
        except Exception:
            # never echo the key material
            raise ConfigurationError("Invalid private key supplied for the ownership signer") from None

    @property
    def address(self) -> str:
        return self._account.address

    def sign(self, message: bytes) -> Attestation:
        """EIP-191 personal_sign over the raw message bytes."""

        signed = self._account.sign_message(encode_defunct(primitive=bytes(message)))
        return Attestation(signature=bytes(signed.signature), message=bytes(message), signer=self.address)

    def __repr__(self) -> str:
        return f"Signer(address={self.address})"