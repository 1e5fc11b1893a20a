"""
------------------------------------------------------------------------------
Project:        ChainPrefs
File:           chainprefs/models/endpoint.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    RPC endpoint records. RpcEndpoint is the stored, frozen
                record; EndpointUpdate is the optional-fields record used
                for partial updates.
------------------------------------------------------------------------------
"""

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from chainprefs.validators import validate_chain_id

DEFAULT_TICKER = "ETH"


class RpcEndpoint(BaseModel):
    """
    A user-added network endpoint. Unique by rpc_url within a registry.

    Serialized with camelCase keys:
        {"rpcUrl": ..., "chainId": ..., "ticker": ..., "nickname": ..., "rpcPrefs": {...}}
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    rpc_url: str
    chain_id: str
    ticker: str = DEFAULT_TICKER
    nickname: str = ""
    rpc_prefs: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("chain_id", mode="before")
    @classmethod
    def check_chain_id(cls, v: Any) -> str:
        return validate_chain_id(v)

    @field_validator("ticker", "nickname", mode="before")
    @classmethod
    def none_to_default(cls, v: Any, info: ValidationInfo) -> str:
        """Explicit None falls back to the field default."""
        if v is None:
            return DEFAULT_TICKER if info.field_name == "ticker" else ""
        return v

    @field_validator("rpc_prefs", mode="before")
    @classmethod
    def normalize_prefs(cls, v: Any) -> Dict[str, Any]:
        if v is None:
            return {}
        if isinstance(v, Mapping):
            return dict(v)
        return v

    def to_record(self) -> Dict[str, Any]:
        """Flat persistence record with camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")


class EndpointUpdate(BaseModel):
    """
    Partial update for an existing endpoint. Fields left as None keep the
    stored value.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    chain_id: Optional[str] = None
    ticker: Optional[str] = None
    nickname: Optional[str] = None
    rpc_prefs: Optional[Dict[str, Any]] = None

    @field_validator("chain_id", mode="before")
    @classmethod
    def check_chain_id(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return validate_chain_id(v)

    def changes(self) -> Dict[str, Any]:
        """Only the supplied fields, keyed by attribute name."""
        return self.model_dump(exclude_none=True)

    def apply(self, endpoint: RpcEndpoint) -> RpcEndpoint:
        """Merges the supplied fields over an endpoint, re-validating the result."""
        data = endpoint.model_dump()
        data.update(self.changes())
        return RpcEndpoint.model_validate(data)
