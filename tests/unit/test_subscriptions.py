from unittest.mock import Mock

from chainprefs.models import PreferencesState
from chainprefs.preferences import PreferencesController


def test_listener_receives_every_snapshot(controller):
    received = []
    controller.subscribe(received.append)

    controller.set_addresses(["0xa"])
    controller.add_endpoint("rpc_url", "0x1")
    controller.set_use_token_detection(True)

    assert len(received) == 3
    assert all(isinstance(s, PreferencesState) for s in received)
    assert received[-1] is controller.state
    assert received[0].frequent_rpc_list_detail == []
    assert received[1].frequent_rpc_list_detail[0].rpc_url == "rpc_url"

def test_snapshots_are_not_rewritten(controller):
    controller.set_addresses(["0xa"])
    old = controller.state

    controller.set_account_label("0xa", "Renamed")

    assert old.identities["0xa"].name == "Account 1"
    assert controller.state.identities["0xa"].name == "Renamed"

def test_no_publish_for_noop_removals(controller):
    listener = Mock()
    controller.subscribe(listener)

    controller.remove_address("0xmissing")
    controller.remove_endpoint("missing")

    listener.assert_not_called()

def test_unsubscribe(controller):
    listener = Mock()
    detach = controller.subscribe(listener)

    assert detach() is True
    assert controller.unsubscribe(listener) is False
    controller.set_use_blockie(True)
    listener.assert_not_called()

def test_failing_listener_does_not_block_others(controller, caplog):
    good = Mock()
    controller.subscribe(Mock(side_effect=RuntimeError("boom")))
    controller.subscribe(good)

    controller.set_use_nonce_field(True)

    good.assert_called_once()
    assert controller.state.use_nonce_field is True
    assert "failed after set_use_nonce_field" in caplog.text

def test_initial_state_from_record(network):
    controller = PreferencesController(
        network=network,
        initial_state={
            "identities": {"0xa": {"address": "0xa", "name": "Main"}},
            "selectedAddress": "0xa",
            "usePhishDetect": False,
        },
    )

    assert controller.get_selected_address() == "0xa"
    assert controller.state.identities["0xa"].name == "Main"
    assert controller.state.use_phish_detect is False
