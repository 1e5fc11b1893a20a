import pydantic
import pytest

from chainprefs.exceptions import ValidationError
from chainprefs.models import RpcEndpoint
from chainprefs.validators import format_address, is_valid_chain_id, validate_chain_id, validate_flag, validate_text


@pytest.mark.parametrize("chain_id", ["0x1", "0xa", "0xA", "0x89", "0x00ff", "0xDEADbeef"])
def test_valid_chain_ids(chain_id):
    assert is_valid_chain_id(chain_id)
    assert validate_chain_id(chain_id) == chain_id

@pytest.mark.parametrize("chain_id", ["1", "0x", "0X1", "0x1g", " 0x1", "0x1 ", "", None, 1, b"0x1"])
def test_invalid_chain_ids(chain_id):
    assert not is_valid_chain_id(chain_id)

def test_validation_error_carries_value():
    with pytest.raises(ValidationError) as exc_info:
        validate_chain_id("1")
    assert exc_info.value.value == "1"
    assert exc_info.value.field == "chainId"
    assert '"1"' in str(exc_info.value)

def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        validate_chain_id("nope")

def test_format_address():
    assert format_address(" 0xda22le ") == "0xda22le"
    assert format_address("0x7E57E2") == "0x7E57E2"
    assert format_address(None) == ""

def test_validate_flag():
    assert validate_flag("usePhishDetect", False) is False
    with pytest.raises(ValidationError):
        validate_flag("usePhishDetect", 0)

def test_validate_text():
    assert validate_text("currentLocale", "de") == "de"
    with pytest.raises(ValidationError) as exc_info:
        validate_text("currentLocale", None)
    assert exc_info.value.field == "currentLocale"
    assert exc_info.value.value is None

def test_validation_error_from_model_error():
    with pytest.raises(pydantic.ValidationError) as model_exc:
        RpcEndpoint(rpc_url="u", chain_id="0x1", ticker=5)

    error = ValidationError.from_model_error(model_exc.value)

    assert error.field == "ticker"
    assert error.value == 5
    assert "ticker" in str(error)
