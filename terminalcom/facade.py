from dataclasses import KW_ONLY, InitVar, dataclass, field
from types import MappingProxyType
from typing import Any

from .api import TerminalAPI
from .config import Settings
from .validation import InvalidParameter

# https://www.terminal.com/faq#instanceTypes
INSTANCE_TYPES: MappingProxyType[str, MappingProxyType[str, Any]] = MappingProxyType(
    {
        "micro": MappingProxyType({"cpu": "2 (max)", "ram": 256}),
        "mini": MappingProxyType({"cpu": 50, "ram": 800}),
        "small": MappingProxyType({"cpu": 100, "ram": 1600}),
        "medium": MappingProxyType({"cpu": 200, "ram": 3200}),
        "xlarge": MappingProxyType({"cpu": 400, "ram": 6400}),
        "2xlarge": MappingProxyType({"cpu": 800, "ram": 12_800}),
        "4xlarge": MappingProxyType({"cpu": 1600, "ram": 25_600}),
        "8xlarge": MappingProxyType({"cpu": 3200, "ram": 51_200}),
    }
)


def resolve_instance_type(instance: str) -> dict[str, Any]:
    sizing = INSTANCE_TYPES.get(str(instance))
    if sizing is None:
        known = ", ".join(repr(name) for name in INSTANCE_TYPES)
        raise InvalidParameter(
            f"No such instance type: {instance!r}. Instance types are: {known}.",
            keys=["instance"],
        )
    return dict(sizing)


def apply_instance_type(options: dict[str, Any]) -> dict[str, Any]:
    """Replace an ``instance`` size tag with the matching ``cpu``/``ram`` pair."""
    if "instance" not in options:
        return options
    resolved = dict(options)
    instance = resolved.pop("instance")
    if "cpu" in resolved or "ram" in resolved:
        raise InvalidParameter("Pass either instance or cpu and ram, not both", keys=["instance"])
    resolved.update(resolve_instance_type(instance))
    return resolved


@dataclass(frozen=True)
class Terminal:
    """A token pair bound to the Terminal.com API.

    Exposes every endpoint of ``TerminalAPI`` under the same name with the
    ``user_token``/``access_token`` arguments filled in. Instances are
    immutable; share one per credential pair, or create one per thread if the
    underlying client should not be shared.

    Pass ``api`` to reuse an existing ``TerminalAPI``, or ``settings`` to have
    one built for this terminal.
    """

    user_token: str = field(repr=False)
    access_token: str = field(repr=False)
    _: KW_ONLY
    api: TerminalAPI = field(default=None, repr=False, compare=False)  # type: ignore[assignment]
    settings: InitVar[Settings | None] = None

    def __post_init__(self, settings: Settings | None) -> None:
        if self.api is None:
            object.__setattr__(self, "api", TerminalAPI(settings=settings))

    def __enter__(self) -> "Terminal":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def credentials(self) -> tuple[str, str]:
        return self.user_token, self.access_token

    def close(self) -> None:
        self.api.close()

    # Browse snapshots & users

    def get_snapshot(self, snapshot_id: str) -> Any:
        return self.api.get_snapshot(snapshot_id)

    def get_profile(self, username: str) -> Any:
        return self.api.get_profile(username)

    def list_public_snapshots(self, **options: Any) -> Any:
        return self.api.list_public_snapshots(**options)

    def count_public_snapshots(self, **options: Any) -> Any:
        return self.api.count_public_snapshots(**options)

    # Create and manage terminals

    def list_terminals(self) -> Any:
        return self.api.list_terminals(*self.credentials)

    def get_terminal(self, **options: Any) -> Any:
        return self.api.get_terminal(*self.credentials, **options)

    def start_snapshot(self, snapshot_id: str, **options: Any) -> Any:
        """Start a snapshot, optionally sized with ``instance="small"`` etc."""
        return self.api.start_snapshot(*self.credentials, snapshot_id, **apply_instance_type(options))

    def delete_terminal(self, container_key: str) -> Any:
        return self.api.delete_terminal(*self.credentials, container_key)

    def restart_terminal(self, container_key: str) -> Any:
        return self.api.restart_terminal(*self.credentials, container_key)

    def pause_terminal(self, container_key: str) -> Any:
        return self.api.pause_terminal(*self.credentials, container_key)

    def resume_terminal(self, container_key: str) -> Any:
        return self.api.resume_terminal(*self.credentials, container_key)

    def edit_terminal(self, container_key: str, **options: Any) -> Any:
        return self.api.edit_terminal(*self.credentials, container_key, **apply_instance_type(options))

    # Create and manage snapshots

    def list_snapshots(self, **options: Any) -> Any:
        return self.api.list_snapshots(*self.credentials, **options)

    def count_snapshots(self, **options: Any) -> Any:
        return self.api.count_snapshots(*self.credentials, **options)

    def delete_snapshot(self, snapshot_id: str) -> Any:
        return self.api.delete_snapshot(*self.credentials, snapshot_id)

    def edit_snapshot(self, snapshot_id: str, **options: Any) -> Any:
        return self.api.edit_snapshot(*self.credentials, snapshot_id, **options)

    def snapshot_terminal(self, container_key: str, **options: Any) -> Any:
        return self.api.snapshot_terminal(*self.credentials, container_key, **options)

    # Manage terminal access

    def add_terminal_links(self, container_key: str, *links: Any) -> Any:
        return self.api.add_terminal_links(*self.credentials, container_key, *links)

    def remove_terminal_links(self, container_key: str, *links: Any) -> Any:
        return self.api.remove_terminal_links(*self.credentials, container_key, *links)

    def list_terminal_access(self, container_key: str) -> Any:
        return self.api.list_terminal_access(*self.credentials, container_key)

    def edit_terminal_access(self, container_key: str, **options: Any) -> Any:
        return self.api.edit_terminal_access(*self.credentials, container_key, **options)

    # Manage terminal DNS & domains

    def get_cname_records(self) -> Any:
        return self.api.get_cname_records(*self.credentials)

    def add_domain_to_pool(self, domain: str) -> Any:
        return self.api.add_domain_to_pool(*self.credentials, domain)

    def remove_domain_from_pool(self, domain: str) -> Any:
        return self.api.remove_domain_from_pool(*self.credentials, domain)

    def add_cname_record(self, domain: str, subdomain: str, port: int) -> Any:
        return self.api.add_cname_record(*self.credentials, domain, subdomain, port)

    def remove_cname_record(self, domain: str) -> Any:
        return self.api.remove_cname_record(*self.credentials, domain)

    # Manage terminal idle settings

    def set_terminal_idle_settings(self, container_key: str, action: str, *triggers: Any) -> Any:
        return self.api.set_terminal_idle_settings(*self.credentials, container_key, action, *triggers)

    def get_terminal_idle_settings(self, container_key: str) -> Any:
        return self.api.get_terminal_idle_settings(*self.credentials, container_key)

    # Manage terminal passwords

    def list_terminal_passwords(self, container_key: str) -> Any:
        return self.api.list_terminal_passwords(*self.credentials, container_key)

    def add_terminal_password(self, container_key: str, password: str) -> Any:
        return self.api.add_terminal_password(*self.credentials, container_key, password)

    def remove_terminal_password(self, container_key: str, password: str) -> Any:
        return self.api.remove_terminal_password(*self.credentials, container_key, password)

    # Manage usage & credits

    def instance_types(self) -> Any:
        return self.api.instance_types()

    def instance_price(self, instance_type: str, status: str = "running") -> Any:
        return self.api.instance_price(instance_type, status)

    def balance(self) -> Any:
        return self.api.balance(*self.credentials)

    def balance_added(self) -> Any:
        return self.api.balance_added(*self.credentials)

    def gift(self, email: str, cents: int) -> Any:
        return self.api.gift(*self.credentials, email, cents)

    def burn_history(self) -> Any:
        return self.api.burn_history(*self.credentials)

    def terminal_usage_history(self) -> Any:
        return self.api.terminal_usage_history(*self.credentials)

    def burn_state(self) -> Any:
        return self.api.burn_state(*self.credentials)

    def burn_estimates(self) -> Any:
        return self.api.burn_estimates(*self.credentials)

    # Manage SSH public keys

    def add_authorized_key_to_terminal(self, container_key: str, public_key: str) -> Any:
        return self.api.add_authorized_key_to_terminal(*self.credentials, container_key, public_key)

    def add_authorized_key_to_ssh_proxy(self, name: str, public_key: str) -> Any:
        return self.api.add_authorized_key_to_ssh_proxy(*self.credentials, name, public_key)

    def del_authorized_key_from_ssh_proxy(self, name: str, fingerprint: str) -> Any:
        return self.api.del_authorized_key_from_ssh_proxy(*self.credentials, name, fingerprint)

    def get_authorized_keys_from_ssh_proxy(self) -> Any:
        return self.api.get_authorized_keys_from_ssh_proxy(*self.credentials)

    # Other

    def who_am_i(self) -> Any:
        return self.api.who_am_i(*self.credentials)

    def request_progress(self, request_id: str) -> Any:
        return self.api.request_progress(request_id)
