"""
------------------------------------------------------------------------------
Project:        ChainPrefs
File:           tests/unit/test_models.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Unit tests for the pydantic records and the flat
                persistence record of PreferencesState.
------------------------------------------------------------------------------
"""

import pydantic
import pytest

from chainprefs.models import EndpointUpdate, Identity, PreferencesState, RpcEndpoint


def test_endpoint_record_uses_camel_case():
    endpoint = RpcEndpoint(rpc_url="rpc_url", chain_id="0x1")
    assert endpoint.to_record() == {
        "rpcUrl": "rpc_url",
        "chainId": "0x1",
        "ticker": "ETH",
        "nickname": "",
        "rpcPrefs": {},
    }

def test_endpoint_accepts_camel_case_input():
    endpoint = RpcEndpoint.model_validate({"rpcUrl": "u", "chainId": "0x5", "rpcPrefs": {"a": 1}})
    assert endpoint.rpc_prefs == {"a": 1}

def test_endpoint_refuses_bad_chain_id():
    with pytest.raises(pydantic.ValidationError):
        RpcEndpoint(rpc_url="u", chain_id="5")

def test_endpoint_is_frozen():
    endpoint = RpcEndpoint(rpc_url="u", chain_id="0x5")
    with pytest.raises(pydantic.ValidationError):
        endpoint.chain_id = "0x6"

def test_identity_with_name_validates():
    identity = Identity(address="0xa", name="Main")

    assert identity.with_name("Cold").name == "Cold"
    with pytest.raises(pydantic.ValidationError):
        identity.with_name(None)

def test_endpoint_update_applies_only_supplied_fields():
    endpoint = RpcEndpoint(rpc_url="u", chain_id="0x5", ticker="GOR", nickname="Goerli")
    update = EndpointUpdate(ticker="ETH")

    assert update.changes() == {"ticker": "ETH"}
    merged = update.apply(endpoint)
    assert (merged.chain_id, merged.ticker, merged.nickname) == ("0x5", "ETH", "Goerli")
    assert endpoint.ticker == "GOR"

def test_default_state_record():
    record = PreferencesState().to_record()

    assert record["identities"] == {}
    assert record["frequentRpcListDetail"] == []
    assert record["selectedAddress"] == ""
    assert record["forgottenPassword"] is False
    assert record["usePhishDetect"] is True
    assert record["useTokenDetection"] is False
    assert record["preferences"]["useNativeCurrencyAsPrimaryCurrency"] is True

def test_state_record_round_trip_keeps_order():
    state = PreferencesState(
        identities={
            "0xb": Identity(address="0xb", name="Account 1"),
            "0xa": Identity(address="0xa", name="Cold"),
        },
        frequent_rpc_list_detail=[
            RpcEndpoint(rpc_url="z", chain_id="0x89", ticker="MATIC", rpc_prefs={"blockExplorerUrl": "https://scan"}),
            RpcEndpoint(rpc_url="a", chain_id="0x1"),
        ],
        selected_address="0xa",
        use_phish_detect=False,
        feature_flags={"beta": True},
    )

    restored = PreferencesState.from_record(state.to_record())

    assert restored == state
    assert list(restored.identities) == ["0xb", "0xa"]
    assert [e.rpc_url for e in restored.frequent_rpc_list_detail] == ["z", "a"]

def test_from_record_rejects_bad_endpoint():
    with pytest.raises(pydantic.ValidationError):
        PreferencesState.from_record({"frequentRpcListDetail": [{"rpcUrl": "u", "chainId": "1"}]})

def test_from_record_fills_new_preference_keys():
    state = PreferencesState.from_record({"preferences": {"showTestNetworks": True}})
    assert state.preferences["showTestNetworks"] is True
    assert state.preferences["hideZeroBalanceTokens"] is False

def test_from_record_none_gives_defaults():
    assert PreferencesState.from_record(None) == PreferencesState()
