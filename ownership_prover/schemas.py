# ownership_prover/schemas.py
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

JSONRPC_VERSION = "2.0"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class JsonRpcRequest(BaseModel):
    jsonrpc: str
    method: str
    params: Optional[Union[List[Any], Dict[str, Any]]] = None
    id: Optional[Union[int, str]] = None


class DurinCallParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    call_data: str = Field(alias="callData")
    to: str
    abi: Optional[Any] = None  # accepted for client compatibility, unused


class JsonRpcError(BaseModel):
    code: int
    message: str


class JsonRpcResponse(BaseModel):
    jsonrpc: str = JSONRPC_VERSION
    id: Optional[Union[int, str]] = None
    result: Optional[str] = None
    error: Optional[JsonRpcError] = None


class HealthResponse(BaseModel):
    status: str
    signer: str
