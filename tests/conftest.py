from unittest.mock import AsyncMock, Mock

import pytest
from PyQt6.QtCore import QSettings, QStandardPaths

from chainprefs.preferences import PreferencesController

MAINNET_CHAIN_ID = "0x1"


@pytest.fixture(autouse=True)
def isolated_qt_paths():
    """Keeps QStandardPaths away from the real user config directory."""
    QStandardPaths.setTestModeEnabled(True)
    yield
    QStandardPaths.setTestModeEnabled(False)


@pytest.fixture
def network():
    """Network status provider on mainnet, latest block always reachable."""
    net = Mock()
    net.get_current_chain_identifier.return_value = MAINNET_CHAIN_ID
    net.get_provider_config.return_value = {"type": "mainnet"}
    net.get_latest_block = AsyncMock(return_value={})
    return net


@pytest.fixture
def migrate_address_book():
    return Mock(return_value=None)


@pytest.fixture
def controller(network, migrate_address_book):
    return PreferencesController(network=network, migrate_address_book=migrate_address_book)


@pytest.fixture
def ini_settings(tmp_path):
    """QSettings backed by a throwaway INI file."""
    settings = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    yield settings
    settings.clear()
