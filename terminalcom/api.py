import logging
from collections.abc import Sequence
from typing import Any

from .config import Settings
from .endpoints import Endpoint, get_endpoint
from .service_client import TerminalServiceClient
from .validation import InvalidParameter, ensure_options_validity, ensure_paired, ensure_present

logger = logging.getLogger(__name__)


def build_payload(endpoint: Endpoint, args: Sequence[Any], options: dict[str, Any]) -> dict[str, Any]:
    """Bind call arguments to an endpoint row and return the request body.

    Positional arguments fill the endpoint's parameters in table order, then
    its defaulted parameters, then the variadic tail (sent as a list).
    Keyword options are checked against the row's allow-list before merging.
    Raises ``InvalidParameter`` without touching the network.
    """
    positional = endpoint.positional
    required_count = len(positional) - len(endpoint.defaults)

    if len(args) < required_count:
        missing = positional[len(args) : required_count]
        raise InvalidParameter(
            f"{endpoint.signature} missing required arguments: {', '.join(missing)}",
            keys=missing,
        )
    if endpoint.variadic is None and len(args) > len(positional):
        raise InvalidParameter(
            f"{endpoint.signature} takes {len(positional)} positional arguments but {len(args)} were given"
        )

    if endpoint.paired is not None:
        ensure_paired(options, *endpoint.paired)
    ensure_options_validity(options, *endpoint.optional)
    if endpoint.required_options:
        ensure_present(options, *endpoint.required_options)

    payload: dict[str, Any] = dict(zip(positional, args))
    for name, value in endpoint.defaults:
        payload.setdefault(name, value)
    if endpoint.variadic is not None:
        payload[endpoint.variadic] = list(args[len(positional) :])
    payload.update(options)
    return payload


class TerminalAPI:
    """Low-level 1:1 mapping of the Terminal.com endpoints.

    Every method takes the endpoint's parameters explicitly, tokens included.
    Use ``terminalcom.Terminal`` to bind a token pair once.
    """

    def __init__(self, client: TerminalServiceClient | None = None, *, settings: Settings | None = None):
        self.client = client or TerminalServiceClient(settings)

    def __enter__(self) -> "TerminalAPI":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def invoke(self, endpoint_name: str, /, *args: Any, **options: Any) -> Any:
        # Positional-only: ``name`` is itself an option of some endpoints.
        endpoint = get_endpoint(endpoint_name)
        payload = build_payload(endpoint, args, options)
        logger.debug("Invoking %s", endpoint.name)
        return self.client.call(endpoint.path, payload)

    # Browse snapshots & users

    def get_snapshot(self, snapshot_id: str) -> Any:
        return self.invoke("get_snapshot", snapshot_id)

    def get_profile(self, username: str) -> Any:
        return self.invoke("get_profile", username)

    def list_public_snapshots(self, **options: Any) -> Any:
        """``sortby`` accepts ``"popularity"`` or ``"date"``."""
        return self.invoke("list_public_snapshots", **options)

    def count_public_snapshots(self, **options: Any) -> Any:
        return self.invoke("count_public_snapshots", **options)

    # Create and manage terminals

    def list_terminals(self, user_token: str, access_token: str) -> Any:
        return self.invoke("list_terminals", user_token, access_token)

    def get_terminal(self, user_token: str, access_token: str, **options: Any) -> Any:
        """Look a terminal up by ``container_key`` or ``subdomain``."""
        return self.invoke("get_terminal", user_token, access_token, **options)

    def start_snapshot(self, user_token: str, access_token: str, snapshot_id: str, **options: Any) -> Any:
        """Start a terminal from a snapshot.

        ``cpu`` and ``ram`` must be given together, using the values of one of
        the instance types (see ``terminalcom.facade.INSTANCE_TYPES``).
        """
        return self.invoke("start_snapshot", user_token, access_token, snapshot_id, **options)

    def delete_terminal(self, user_token: str, access_token: str, container_key: str) -> Any:
        return self.invoke("delete_terminal", user_token, access_token, container_key)

    def restart_terminal(self, user_token: str, access_token: str, container_key: str) -> Any:
        return self.invoke("restart_terminal", user_token, access_token, container_key)

    def pause_terminal(self, user_token: str, access_token: str, container_key: str) -> Any:
        return self.invoke("pause_terminal", user_token, access_token, container_key)

    def resume_terminal(self, user_token: str, access_token: str, container_key: str) -> Any:
        return self.invoke("resume_terminal", user_token, access_token, container_key)

    def edit_terminal(self, user_token: str, access_token: str, container_key: str, **options: Any) -> Any:
        """Resize a terminal. ``cpu``, ``ram`` and ``diskspace`` are mandatory."""
        return self.invoke("edit_terminal", user_token, access_token, container_key, **options)

    # Create and manage snapshots

    def list_snapshots(self, user_token: str, access_token: str, **options: Any) -> Any:
        return self.invoke("list_snapshots", user_token, access_token, **options)

    def count_snapshots(self, user_token: str, access_token: str, **options: Any) -> Any:
        return self.invoke("count_snapshots", user_token, access_token, **options)

    def delete_snapshot(self, user_token: str, access_token: str, snapshot_id: str) -> Any:
        return self.invoke("delete_snapshot", user_token, access_token, snapshot_id)

    def edit_snapshot(self, user_token: str, access_token: str, snapshot_id: str, **options: Any) -> Any:
        return self.invoke("edit_snapshot", user_token, access_token, snapshot_id, **options)

    def snapshot_terminal(self, user_token: str, access_token: str, container_key: str, **options: Any) -> Any:
        return self.invoke("snapshot_terminal", user_token, access_token, container_key, **options)

    # Manage terminal access

    def add_terminal_links(self, user_token: str, access_token: str, container_key: str, *links: Any) -> Any:
        return self.invoke("add_terminal_links", user_token, access_token, container_key, *links)

    def remove_terminal_links(self, user_token: str, access_token: str, container_key: str, *links: Any) -> Any:
        return self.invoke("remove_terminal_links", user_token, access_token, container_key, *links)

    def list_terminal_access(self, user_token: str, access_token: str, container_key: str) -> Any:
        return self.invoke("list_terminal_access", user_token, access_token, container_key)

    def edit_terminal_access(self, user_token: str, access_token: str, container_key: str, **options: Any) -> Any:
        return self.invoke("edit_terminal_access", user_token, access_token, container_key, **options)

    # Manage terminal DNS & domains

    def get_cname_records(self, user_token: str, access_token: str) -> Any:
        return self.invoke("get_cname_records", user_token, access_token)

    def add_domain_to_pool(self, user_token: str, access_token: str, domain: str) -> Any:
        return self.invoke("add_domain_to_pool", user_token, access_token, domain)

    def remove_domain_from_pool(self, user_token: str, access_token: str, domain: str) -> Any:
        return self.invoke("remove_domain_from_pool", user_token, access_token, domain)

    def add_cname_record(self, user_token: str, access_token: str, domain: str, subdomain: str, port: int) -> Any:
        return self.invoke("add_cname_record", user_token, access_token, domain, subdomain, port)

    def remove_cname_record(self, user_token: str, access_token: str, domain: str) -> Any:
        return self.invoke("remove_cname_record", user_token, access_token, domain)

    # Manage terminal idle settings

    def set_terminal_idle_settings(
        self, user_token: str, access_token: str, container_key: str, action: str, *triggers: Any
    ) -> Any:
        return self.invoke("set_terminal_idle_settings", user_token, access_token, container_key, action, *triggers)

    def get_terminal_idle_settings(self, user_token: str, access_token: str, container_key: str) -> Any:
        return self.invoke("get_terminal_idle_settings", user_token, access_token, container_key)

    # Manage terminal passwords

    def list_terminal_passwords(self, user_token: str, access_token: str, container_key: str) -> Any:
        return self.invoke("list_terminal_passwords", user_token, access_token, container_key)

    def add_terminal_password(self, user_token: str, access_token: str, container_key: str, password: str) -> Any:
        return self.invoke("add_terminal_password", user_token, access_token, container_key, password)

    def remove_terminal_password(self, user_token: str, access_token: str, container_key: str, password: str) -> Any:
        return self.invoke("remove_terminal_password", user_token, access_token, container_key, password)

    # Manage usage & credits

    def instance_types(self) -> Any:
        return self.invoke("instance_types")

    def instance_price(self, instance_type: str, status: str = "running") -> Any:
        return self.invoke("instance_price", instance_type, status)

    def balance(self, user_token: str, access_token: str) -> Any:
        return self.invoke("balance", user_token, access_token)

    def balance_added(self, user_token: str, access_token: str) -> Any:
        return self.invoke("balance_added", user_token, access_token)

    def gift(self, user_token: str, access_token: str, email: str, cents: int) -> Any:
        return self.invoke("gift", user_token, access_token, email, cents)

    def burn_history(self, user_token: str, access_token: str) -> Any:
        return self.invoke("burn_history", user_token, access_token)

    def terminal_usage_history(self, user_token: str, access_token: str) -> Any:
        return self.invoke("terminal_usage_history", user_token, access_token)

    def burn_state(self, user_token: str, access_token: str) -> Any:
        return self.invoke("burn_state", user_token, access_token)

    def burn_estimates(self, user_token: str, access_token: str) -> Any:
        return self.invoke("burn_estimates", user_token, access_token)

    # Manage SSH public keys

    def add_authorized_key_to_terminal(
        self, user_token: str, access_token: str, container_key: str, public_key: str
    ) -> Any:
        return self.invoke("add_authorized_key_to_terminal", user_token, access_token, container_key, public_key)

    def add_authorized_key_to_ssh_proxy(self, user_token: str, access_token: str, name: str, public_key: str) -> Any:
        return self.invoke("add_authorized_key_to_ssh_proxy", user_token, access_token, name, public_key)

    def del_authorized_key_from_ssh_proxy(self, user_token: str, access_token: str, name: str, fingerprint: str) -> Any:
        return self.invoke("del_authorized_key_from_ssh_proxy", user_token, access_token, name, fingerprint)

    def get_authorized_keys_from_ssh_proxy(self, user_token: str, access_token: str) -> Any:
        return self.invoke("get_authorized_keys_from_ssh_proxy", user_token, access_token)

    # Other

    def who_am_i(self, user_token: str, access_token: str) -> Any:
        return self.invoke("who_am_i", user_token, access_token)

    def request_progress(self, request_id: str) -> Any:
        return self.invoke("request_progress", request_id)
