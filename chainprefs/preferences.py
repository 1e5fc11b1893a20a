"""
------------------------------------------------------------------------------
Project:        ChainPrefs
File:           chainprefs/preferences.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    PreferencesController, the single entry point for account
                identities, the frequent RPC list and feature flags. Every
                mutation publishes a new immutable PreferencesState to the
                registered listeners.
------------------------------------------------------------------------------
"""

import copy
import inspect
import threading
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import ValidationError as ModelValidationError

from chainprefs.exceptions import MigrationError, ValidationError
from chainprefs.logger import get_logger, log_state_change
from chainprefs.models.endpoint import DEFAULT_TICKER, EndpointUpdate, RpcEndpoint
from chainprefs.models.identity import Identity
from chainprefs.models.state import PreferencesState
from chainprefs.network import AddressBookMigrator, NetworkStatusProvider, is_custom_provider
from chainprefs.repositories import IdentityRegistry, RpcEndpointRegistry
from chainprefs.validators import format_address, validate_chain_id, validate_flag, validate_text

logger = get_logger("preferences")

StateListener = Callable[[PreferencesState], None]

# Locales rendered right-to-left
RTL_LOCALES = ("ar", "dv", "fa", "he", "ku")

# PreferencesState fields held directly by the controller (not by a registry)
_SCALAR_FIELDS = {
    "selected_address",
    "forgotten_password",
    "use_phish_detect",
    "use_token_detection",
    "use_blockie",
    "use_nonce_field",
    "feature_flags",
    "preferences",
    "current_locale",
    "ipfs_gateway",
}


class PreferencesController:
    """
    Owns the preferences aggregate.

    Collaborators are injected: `network` is only read, and
    `migrate_address_book(old_chain_id, new_chain_id)` is called whenever an
    existing endpoint changes its chain id.

    Usage:
        controller = PreferencesController(network, address_book.migrate)
        controller.set_addresses(["0xda22le", "0x7e57e2"])
        controller.add_endpoint("https://rpc.example", "0x89", ticker="MATIC")
        await controller.update_endpoint("https://rpc.example", "0x13881")
    """

    def __init__(
        self,
        network: NetworkStatusProvider,
        migrate_address_book: Optional[AddressBookMigrator] = None,
        initial_state: Union[PreferencesState, Dict[str, Any], None] = None,
    ) -> None:
        """
        Args:
            network: Read-only network status provider.
            migrate_address_book: Address book migration callback.
            initial_state: Snapshot or flat record to start from, e.g. the
                           output of PreferencesStorage.load().
        """
        self.network = network
        self._migrate_address_book = migrate_address_book
        self._lock = threading.RLock()

        if not isinstance(initial_state, PreferencesState):
            initial_state = PreferencesState.from_record(initial_state)

        self._identities = IdentityRegistry(
            self._lock, initial_state.identities, initial_state.lost_identities
        )
        self._endpoints = RpcEndpointRegistry(self._lock, initial_state.frequent_rpc_list_detail)
        self._scalars: Dict[str, Any] = initial_state.model_dump(include=_SCALAR_FIELDS)

        self._listeners: List[StateListener] = []
        self._state = self._build_state()

    # ------------------------------------------------------------------
    # Snapshot & subscription
    # ------------------------------------------------------------------

    @property
    def state(self) -> PreferencesState:
        """The most recently published snapshot."""
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], bool]:
        """
        Registers a callback receiving every new snapshot.

        Returns:
            A function that removes the listener again.
        """
        with self._lock:
            self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: StateListener) -> bool:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
                return True
        return False

    def _build_state(self) -> PreferencesState:
        return PreferencesState(
            identities=self._identities.snapshot(),
            lost_identities=self._identities.lost_snapshot(),
            frequent_rpc_list_detail=self._endpoints.list(),
            **copy.deepcopy(self._scalars),
        )

    def _publish(self, operation: str, *changed_keys: str) -> PreferencesState:
        with self._lock:
            snapshot = self._build_state()
            self._state = snapshot
            listeners = list(self._listeners)

        log_state_change(operation, changed_keys)
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception:
                # A broken observer must not undo a committed mutation
                logger.exception(f"State listener {listener!r} failed after {operation}")
        return snapshot

    # ------------------------------------------------------------------
    # Identities
    # ------------------------------------------------------------------

    def set_addresses(self, addresses: List[str]) -> None:
        """
        Replaces all identities. Names become "Account 1".."Account n" in the
        given order; custom labels are dropped. When no address is selected,
        the first one becomes selected.
        """
        with self._lock:
            self._identities.replace_all(addresses)
            if not self._scalars["selected_address"]:
                self._scalars["selected_address"] = self._identities.first_address()
        self._publish("set_addresses", "identities", "selectedAddress")

    def add_addresses(self, addresses: List[str]) -> List[str]:
        """
        Adds identities for unknown addresses; existing labels are kept.

        Returns:
            The newly added addresses.
        """
        added = self._identities.add_many(addresses)
        if added:
            self._publish("add_addresses", "identities")
        return added

    def sync_addresses(self, addresses: List[str]) -> str:
        """
        Reconciles identities with the keyring's address list.

        Identities no longer present move to lost_identities, new ones are
        added, and a selection outside the list is replaced by its first
        address.

        Returns:
            The selected address after syncing.

        Raises:
            ValidationError: If addresses is empty.
        """
        if not addresses:
            raise ValidationError("Expected a non-empty list of addresses", value=addresses, field="addresses")

        wanted = [format_address(a) for a in addresses]
        with self._lock:
            self._identities.sync(wanted)
            selected = self._scalars["selected_address"]
            if selected not in wanted:
                selected = wanted[0]
                self._scalars["selected_address"] = selected
        self._publish("sync_addresses", "identities", "lostIdentities", "selectedAddress")
        return selected

    def remove_address(self, address: str) -> bool:
        """
        Removes an identity. Removing the selected identity selects the first
        remaining address, or none if the registry is now empty.

        Returns:
            True if removed, False if the address was unknown (no-op).
        """
        key = format_address(address)
        with self._lock:
            if not self._identities.remove(key):
                logger.debug(f"remove_address: {key} not registered, nothing to do")
                return False
            if self._scalars["selected_address"] == key:
                self._scalars["selected_address"] = self._identities.first_address()
        self._publish("remove_address", "identities", "selectedAddress")
        return True

    def set_account_label(self, address: str, label: str) -> Identity:
        """
        Renames an identity.

        Raises:
            ValidationError: If label is not a string.
            NotFoundError: If the address is not registered.
        """
        identity = self._identities.rename(address, label)
        self._publish("set_account_label", "identities")
        return identity

    def set_selected_address(self, address: str) -> None:
        """
        Selects an address. Unknown addresses are accepted (not yet synced)
        but consumers should treat them as invalid.
        """
        key = format_address(address)
        if key and key not in self._identities:
            logger.debug(f"Selecting {key} which has no identity yet")
        with self._lock:
            self._scalars["selected_address"] = key
        self._publish("set_selected_address", "selectedAddress")

    def get_selected_address(self) -> str:
        with self._lock:
            return self._scalars["selected_address"]

    def get_identities(self) -> List[Identity]:
        return self._identities.list()

    # ------------------------------------------------------------------
    # Flags & preferences
    # ------------------------------------------------------------------

    def _set_flag(self, field: str, name: str, value: bool) -> None:
        validate_flag(name, value)
        with self._lock:
            self._scalars[field] = value
        self._publish(f"set_{field}", name)

    def set_password_forgotten(self, forgotten: bool) -> None:
        self._set_flag("forgotten_password", "forgottenPassword", forgotten)

    def set_use_phish_detect(self, enabled: bool) -> None:
        self._set_flag("use_phish_detect", "usePhishDetect", enabled)

    def set_use_token_detection(self, enabled: bool) -> None:
        self._set_flag("use_token_detection", "useTokenDetection", enabled)

    def set_use_blockie(self, enabled: bool) -> None:
        self._set_flag("use_blockie", "useBlockie", enabled)

    def set_use_nonce_field(self, enabled: bool) -> None:
        self._set_flag("use_nonce_field", "useNonceField", enabled)

    def set_feature_flag(self, feature: str, activated: bool) -> Dict[str, bool]:
        """
        Turns a named feature on or off.

        Returns:
            Copy of the updated feature flag mapping.
        """
        validate_text("feature", feature)
        validate_flag(feature, activated)
        with self._lock:
            self._scalars["feature_flags"][feature] = activated
            flags = dict(self._scalars["feature_flags"])
        self._publish("set_feature_flag", "featureFlags")
        return flags

    def set_preference(self, name: str, value: Any) -> Dict[str, Any]:
        """Sets one entry of the display preferences bag and returns the bag."""
        validate_text("preference", name)
        with self._lock:
            self._scalars["preferences"][name] = value
            prefs = dict(self._scalars["preferences"])
        self._publish("set_preference", "preferences")
        return prefs

    def get_preferences(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._scalars["preferences"])

    def set_current_locale(self, locale: str) -> str:
        """
        Stores the UI locale.

        Returns:
            "rtl" for right-to-left languages, otherwise "auto".
        """
        validate_text("currentLocale", locale)
        text_direction = "rtl" if locale in RTL_LOCALES else "auto"
        with self._lock:
            self._scalars["current_locale"] = locale
        self._publish("set_current_locale", "currentLocale")
        return text_direction

    def set_ipfs_gateway(self, domain: str) -> str:
        validate_text("ipfsGateway", domain)
        with self._lock:
            self._scalars["ipfs_gateway"] = domain
        self._publish("set_ipfs_gateway", "ipfsGateway")
        return domain

    # ------------------------------------------------------------------
    # Frequent RPC list
    # ------------------------------------------------------------------

    def add_endpoint(
        self,
        rpc_url: str,
        chain_id: str,
        ticker: str = DEFAULT_TICKER,
        nickname: str = "",
        rpc_prefs: Optional[Dict[str, Any]] = None,
    ) -> RpcEndpoint:
        """
        Adds a custom RPC endpoint, or overwrites the one with the same URL
        in place.

        Raises:
            ValidationError: If chain_id is not "0x"-prefixed hex or another
                             field has the wrong type. The list is left
                             untouched.
        """
        endpoint = self._endpoints.add(rpc_url, chain_id, ticker, nickname, rpc_prefs)
        self._publish("add_endpoint", "frequentRpcListDetail")
        return endpoint

    def remove_endpoint(self, rpc_url: str) -> bool:
        """
        Removes a custom RPC endpoint.

        Returns:
            True if removed, False if the URL was not in the list (no-op).
        """
        if not self._endpoints.remove(rpc_url):
            logger.debug(f"remove_endpoint: {rpc_url} not in list, nothing to do")
            return False
        self._publish("remove_endpoint", "frequentRpcListDetail")
        return True

    async def update_endpoint(
        self,
        rpc_url: str,
        chain_id: Optional[str] = None,
        ticker: Optional[str] = None,
        nickname: Optional[str] = None,
        rpc_prefs: Optional[Dict[str, Any]] = None,
    ) -> Optional[RpcEndpoint]:
        """
        Updates an existing endpoint in place. Omitted fields keep their
        stored values.

        If the endpoint is the active network and its chain id changes, the
        network is asked for its latest block first; a failure there aborts
        the update. After the commit, a chain id change is forwarded to the
        address book migration callback.

        Returns:
            The updated endpoint, or None if no endpoint has this URL.

        Raises:
            ValidationError: If chain_id or another field is malformed.
                             Nothing is changed.
            MigrationError: If the migration callback failed. The endpoint
                            update stays committed.
        """
        if chain_id is not None:
            validate_chain_id(chain_id)
        try:
            update = EndpointUpdate(chain_id=chain_id, ticker=ticker, nickname=nickname, rpc_prefs=rpc_prefs)
        except ModelValidationError as exc:
            raise ValidationError.from_model_error(exc) from exc

        current = self._endpoints.get(rpc_url)
        if current is None:
            logger.debug(f"update_endpoint: {rpc_url} not in list, nothing to do")
            return None

        if chain_id is not None and chain_id != current.chain_id:
            await self._confirm_active_network(current)

        result = self._endpoints.update(rpc_url, update)
        if result is None:
            logger.debug(f"update_endpoint: {rpc_url} was removed concurrently")
            return None
        previous, updated = result
        self._publish("update_endpoint", "frequentRpcListDetail")

        if previous.chain_id != updated.chain_id:
            await self._migrate(previous.chain_id, updated.chain_id)
        return updated.model_copy(deep=True)

    def list_endpoints(self) -> List[RpcEndpoint]:
        """Endpoints in list order, detached from the controller."""
        return self._endpoints.list()

    def get_endpoint(self, rpc_url: str) -> Optional[RpcEndpoint]:
        return self._endpoints.get(rpc_url)

    def get_active_endpoint(self) -> Optional[RpcEndpoint]:
        """
        The custom endpoint the network currently runs on, or None when a
        built-in network is active.
        """
        if not is_custom_provider(self.network):
            return None
        return self._endpoints.find_by_chain_id(self.network.get_current_chain_identifier())

    async def _confirm_active_network(self, endpoint: RpcEndpoint) -> None:
        if not is_custom_provider(self.network):
            return
        if self.network.get_current_chain_identifier().lower() != endpoint.chain_id.lower():
            return
        block = await self.network.get_latest_block()
        logger.info(f"Active endpoint {endpoint.rpc_url} reachable (block {(block or {}).get('number')})")

    async def _migrate(self, old_chain_id: str, new_chain_id: str) -> None:
        if self._migrate_address_book is None:
            logger.debug("No address book migrator configured")
            return
        try:
            result = self._migrate_address_book(old_chain_id, new_chain_id)
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            logger.warning(f"Address book migration {old_chain_id} -> {new_chain_id} failed: {exc}")
            raise MigrationError(old_chain_id, new_chain_id) from exc

    # Names used by the extension's UI layer
    setAddresses = set_addresses
    addAddresses = add_addresses
    syncAddresses = sync_addresses
    removeAddress = remove_address
    setAccountLabel = set_account_label
    setSelectedAddress = set_selected_address
    getSelectedAddress = get_selected_address
    setPasswordForgotten = set_password_forgotten
    setUsePhishDetect = set_use_phish_detect
    setUseTokenDetection = set_use_token_detection
    setFeatureFlag = set_feature_flag
    addToFrequentRpcList = add_endpoint
    removeFromFrequentRpcList = remove_endpoint
    updateRpc = update_endpoint
    getFrequentRpcListDetail = list_endpoints
