# ownership_prover/__init__.py
"""Cross-chain NFT ownership attestations for forwarding contracts."""

from .calldata import AttestationRequest, decode_request, encode_request
from .errors import ConfigurationError, DecodeError, OracleError, ProverError, ReplayError
from .handler import RequestHandler, Stage
from .signer import Attestation, Signer

__all__ = [
    "Attestation",
    "AttestationRequest",
    "ConfigurationError",
    "DecodeError",
    "OracleError",
    "ProverError",
    "ReplayError",
    "RequestHandler",
    "Signer",
    "Stage",
    "decode_request",
    "encode_request",
]
