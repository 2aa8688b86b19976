# ownership_prover/main.py
import json
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from .errors import ProverError
from .handler import RequestHandler
from .schemas import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    JSONRPC_VERSION,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    DurinCallParams,
    HealthResponse,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
)
from .settings import Settings, get_settings

log = logging.getLogger(__name__)

DURIN_CALL = "durin_call"
# the same text for every failure so callers cannot probe owner or nonce state
INTERNAL_ERROR_MESSAGE = "Internal error"


def _result(request_id, result: str) -> JSONResponse:
    body = JsonRpcResponse(id=request_id, result=result).model_dump(exclude={"error"})
    return JSONResponse(body)


def _error(request_id, code: int, message: str) -> JSONResponse:
    body = JsonRpcResponse(id=request_id, error=JsonRpcError(code=code, message=message))
    return JSONResponse(body.model_dump(exclude={"result"}))


def _load_payload(raw: bytes) -> Any:
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as e:
        # deeply nested bodies exhaust the decoder's recursion limit
        log.info("Rejected unparseable JSON-RPC body: %s", type(e).__name__)
        raise ValueError("unparseable JSON-RPC body") from e


def _durin_params(params: Any) -> DurinCallParams:
    # clients send either {"callData", "to"} or [{"callData", "to", "abi"}]
    if isinstance(params, list) and len(params) == 1:
        params = params[0]
    if not isinstance(params, dict):
        raise ValueError("durin_call expects a single object with callData and to")
    return DurinCallParams.model_validate(params)


def create_app(
    settings: Optional[Settings] = None,
    handler: Optional[RequestHandler] = None,
) -> FastAPI:
    """
    Build the JSON-RPC app. Settings are read once here and the handler built
    from them is shared by every request.
    """
    if handler is None:
        settings = settings or get_settings()
        handler = RequestHandler.from_settings(settings)
    origins = settings.CORS_ALLOW_ORIGINS if settings is not None else ["*"]

    app = FastAPI(title="Ownership Prover")
    app.add_middleware(CORSMiddleware, allow_origins=origins, allow_methods=["*"], allow_headers=["*"])

    @app.get("/healthz", response_model=HealthResponse)
    def health():
        return {"status": "ok", "signer": handler.signer_address}

    @app.post("/")
    async def rpc(request: Request):
        """
        JSON-RPC 2.0 entry point. Only `durin_call` is exposed; it returns the
        hex signature over the forwarder's message or an opaque internal error.
        """
        raw = await request.body()
        try:
            payload = _load_payload(raw)
        except ValueError:
            return _error(None, PARSE_ERROR, "Parse error")

        try:
            call = JsonRpcRequest.model_validate(payload)
        except ValidationError:
            return _error(None, INVALID_REQUEST, "Invalid Request")
        if call.jsonrpc != JSONRPC_VERSION:
            return _error(call.id, INVALID_REQUEST, "Invalid Request")
        if call.method != DURIN_CALL:
            return _error(call.id, METHOD_NOT_FOUND, "Method not found")

        try:
            params = _durin_params(call.params)
        except ValueError:
            # includes pydantic ValidationError
            return _error(call.id, INVALID_PARAMS, "Invalid params")

        try:
            attestation = await run_in_threadpool(handler.handle, params.call_data, params.to)
        except ProverError:
            # the handler has already logged the stage and detail
            return _error(call.id, INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)

        return _result(call.id, attestation.signature_hex)

    return app
