# ownership_prover/forwarder.py
"""Read calls against the destination chain's forwarding contract."""

from .blockchain import ChainRegistry
from .calldata import AttestationRequest
from .errors import OracleError, ReplayError


class NonceValidator:
    def __init__(self, registry: ChainRegistry):
        self._registry = registry

    def fetch_nonce(self, destination_contract: str, requester: str) -> int:
        forwarder = self._registry.forwarder(destination_contract)
        try:
            return int(forwarder.functions.getNonce(requester).call())
        except Exception as e:
            raise OracleError(f"getNonce({requester}) failed on {destination_contract}: {e}") from e

    def validate(self, destination_contract: str, requester: str, nonce: int) -> int:
        """Require the claimed nonce to be exactly the one the forwarder expects next."""
        expected = self.fetch_nonce(destination_contract, requester)
        if expected != nonce:
            raise ReplayError(
                f"invalid nonce for {requester}: expected {expected}, got {nonce}",
                expected=expected,
                claimed=nonce,
            )
        return expected


class AttestationBuilder:
    """
    Asks the forwarder for the message it will later verify. The encoding is
    owned by the contract; reproducing it here would let the two drift apart.
    """

    def __init__(self, registry: ChainRegistry):
        self._registry = registry

    def build(self, owner: str, request: AttestationRequest) -> bytes:
        forwarder = self._registry.forwarder(request.destination_contract)
        try:
            message = forwarder.functions.createMessage(
                request.requester,
                owner,
                request.nonce,
                request.source_chain_id,
                request.nft_contract,
                request.token_id,
                request.timestamp,
            ).call()
        except Exception as e:
            raise OracleError(f"createMessage failed on {request.destination_contract}: {e}") from e
        return bytes(message)
