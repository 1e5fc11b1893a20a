"""
------------------------------------------------------------------------------
Project:        ChainPrefs
File:           chainprefs/models/state.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Immutable snapshot of the whole preferences aggregate. This
                is what subscribers receive and what the persistence layer
                stores as a flat camelCase record.
------------------------------------------------------------------------------
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .endpoint import RpcEndpoint
from .identity import Identity

DEFAULT_IPFS_GATEWAY = "dweb.link"

# Display preferences bag, keys as stored
DEFAULT_PREFERENCES: Dict[str, Any] = {
    "autoLockTimeLimit": None,
    "showFiatInTestnets": False,
    "showTestNetworks": False,
    "useNativeCurrencyAsPrimaryCurrency": True,
    "hideZeroBalanceTokens": False,
}


def default_preferences() -> Dict[str, Any]:
    return dict(DEFAULT_PREFERENCES)


class PreferencesState(BaseModel):
    """
    Frozen view of the controller state.

    Identities keep insertion order (the order of the last full replacement
    plus later additions). Endpoints keep registry order.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    identities: Dict[str, Identity] = Field(default_factory=dict)
    lost_identities: Dict[str, Identity] = Field(default_factory=dict)
    frequent_rpc_list_detail: List[RpcEndpoint] = Field(default_factory=list)
    selected_address: str = ""

    forgotten_password: bool = False
    use_phish_detect: bool = True
    use_token_detection: bool = False
    use_blockie: bool = False
    use_nonce_field: bool = False

    feature_flags: Dict[str, bool] = Field(default_factory=dict)
    preferences: Dict[str, Any] = Field(default_factory=default_preferences)
    current_locale: str = ""
    ipfs_gateway: str = DEFAULT_IPFS_GATEWAY

    @field_validator("preferences", mode="before")
    @classmethod
    def merge_preference_defaults(cls, v: Any) -> Dict[str, Any]:
        """Stored bags may predate newer keys; fill them with defaults."""
        if v is not None and not isinstance(v, Mapping):
            return v
        merged = default_preferences()
        if v:
            merged.update(v)
        return merged

    def to_record(self) -> Dict[str, Any]:
        """
        Flat key/value record for an external persistence layer.

        Returns:
            JSON-compatible dict: identities as an address-keyed mapping,
            endpoints as an ordered list of flat records, flags as booleans.
        """
        return self.model_dump(by_alias=True, mode="json")

    @classmethod
    def from_record(cls, record: Optional[Dict[str, Any]]) -> "PreferencesState":
        """
        Restores a snapshot from a record produced by to_record().
        Missing keys take their defaults; every value is re-validated.
        """
        return cls.model_validate(record or {})
