# ownership_prover/handler.py
"""Orchestrates one attestation request from calldata to signature."""

from __future__ import annotations

import enum
import logging
from typing import Union

from .blockchain import ChainRegistry
from .calldata import AttestationRequest, decode_request
from .errors import ProverError
from .forwarder import AttestationBuilder, NonceValidator
from .oracle import OwnershipOracle
from .settings import Settings
from .signer import Attestation, Signer

log = logging.getLogger(__name__)


class Stage(str, enum.Enum):
    """Steps of one request. Success returns the attestation; failure raises
    with ``stage`` set to the step that failed."""

    DECODING = "decoding"
    VERIFYING_OWNERSHIP = "verifying_ownership"
    VALIDATING_NONCE = "validating_nonce"
    BUILDING_MESSAGE = "building_message"
    SIGNING = "signing"


class RequestHandler:
    """Runs the stages in order; the first failure ends the request.

    Every stage is a read or a local signature, so a failed request leaves
    nothing behind to undo. The handler holds no per-request state and can be
    shared across threads.
    """

    def __init__(
        self,
        *,
        oracle: OwnershipOracle,
        nonce_validator: NonceValidator,
        builder: AttestationBuilder,
        signer: Signer,
    ) -> None:
        self._oracle = oracle
        self._nonce_validator = nonce_validator
        self._builder = builder
        self._signer = signer

    @classmethod
    def from_settings(cls, settings: Settings) -> "RequestHandler":
        registry = ChainRegistry.from_settings(settings)
        signer = Signer(settings.OWNERSHIP_SIGNER_PRIVATE_KEY.get_secret_value())
        log.info(
            "Ownership signer %s, source chains %s", signer.address, registry.chain_ids
        )
        return cls(
            oracle=OwnershipOracle(registry),
            nonce_validator=NonceValidator(registry),
            builder=AttestationBuilder(registry),
            signer=signer,
        )

    @property
    def signer_address(self) -> str:
        return self._signer.address

    def handle(self, call_data: Union[bytes, str], to: str) -> Attestation:
        stage = Stage.DECODING
        try:
            request = decode_request(call_data, to)
            log.info("Decoded attestation request %s", request)

            stage = Stage.VERIFYING_OWNERSHIP
            owner = self._oracle.owner_of(request.source_chain_id, request.nft_contract, request.token_id)

            stage = Stage.VALIDATING_NONCE
            self._nonce_validator.validate(request.destination_contract, request.requester, request.nonce)

            stage = Stage.BUILDING_MESSAGE
            message = self._builder.build(owner, request)

            stage = Stage.SIGNING
            attestation = self._signer.sign(message)
        except ProverError as exc:
            exc.stage = stage
            log.warning(
                "Attestation failed while %s: %s: %s", stage.value, type(exc).__name__, exc
            )
            raise

        log.info("Signed attestation for %s", _describe(request))
        return attestation


def _describe(request: AttestationRequest) -> str:
    return (
        f"requester={request.requester} nonce={request.nonce} "
        f"nft={request.nft_contract}#{request.token_id} chain={request.source_chain_id}"
    )
