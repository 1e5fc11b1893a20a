import pytest

from chainprefs.config import AppConfig
from chainprefs.logger import get_logger


@pytest.fixture
def config(ini_settings):
    return AppConfig(profile="test", settings=ini_settings)

def test_defaults(config):
    assert config.active_id == "chainprefs-test"
    assert config.get_log_level() == "WARNING"
    assert config.get_log_components() == {}
    assert config.get_log_file() is None
    assert config.get_state_file().name == "preferences.ini"

def test_set_get_values(config, tmp_path):
    config.set_log_level("debug")
    assert config.get_log_level() == "DEBUG"

    config.set_log_components({"storage": "INFO"})
    assert config.get_log_components() == {"storage": "INFO"}

    config.set_state_file(str(tmp_path / "prefs.ini"))
    assert config.get_state_file() == tmp_path / "prefs.ini"

def test_broken_component_levels(config):
    config._set_setting("Logging", AppConfig.KEY_LOG_COMPONENTS, "not json")
    assert config.get_log_components() == {}

def test_apply_logging(config, tmp_path):
    config.set_log_level("INFO")
    config.set_log_components({"storage": "DEBUG"})
    config.set_log_file(str(tmp_path / "logs" / "app.log"))

    config.apply_logging()

    assert get_logger("storage").level == 10
    assert (tmp_path / "logs" / "app.log").exists()
