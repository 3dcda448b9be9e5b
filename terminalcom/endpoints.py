"""The Terminal.com endpoint table.

Each row fixes an operation's path, the parameters it takes positionally and
the optional keywords the service recognizes. Authenticated rows implicitly
take ``user_token`` and ``access_token`` first. Documentation for every row
lives at https://www.terminal.com/api/docs.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

TOKEN_PARAMS = ("user_token", "access_token")

SNAPSHOT_FILTERS = ("username", "tag", "featured", "title")
SNAPSHOT_METADATA = ("body", "title", "readme", "tags", "public")


@dataclass(frozen=True)
class Endpoint:
    name: str
    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    variadic: str | None = None
    defaults: tuple[tuple[str, Any], ...] = ()
    paired: tuple[str, str] | None = None
    required_options: tuple[str, ...] = ()
    authenticated: bool = True
    path: str = field(default="")

    def __post_init__(self) -> None:
        if not self.path:
            object.__setattr__(self, "path", f"/{self.name}")

    @property
    def positional(self) -> tuple[str, ...]:
        params = TOKEN_PARAMS + self.required if self.authenticated else self.required
        return params + tuple(name for name, _ in self.defaults)

    @property
    def signature(self) -> str:
        params = list(TOKEN_PARAMS + self.required if self.authenticated else self.required)
        params.extend(f"{name}={value!r}" for name, value in self.defaults)
        if self.variadic:
            params.append(f"*{self.variadic}")
        if self.optional:
            params.append("**options")
        return f"{self.name}({', '.join(params)})"


def _public(name: str, *required: str, **kwargs: Any) -> Endpoint:
    return Endpoint(name=name, required=required, authenticated=False, **kwargs)


def _auth(name: str, *required: str, **kwargs: Any) -> Endpoint:
    return Endpoint(name=name, required=required, **kwargs)


_TABLE = (
    # Browse snapshots & users
    _public("get_snapshot", "snapshot_id"),
    _public("get_profile", "username"),
    _public("list_public_snapshots", optional=SNAPSHOT_FILTERS + ("page", "perPage", "sortby")),
    _public("count_public_snapshots", optional=SNAPSHOT_FILTERS),
    # Create and manage terminals
    _auth("list_terminals"),
    _auth("get_terminal", optional=("container_key", "subdomain")),
    _auth(
        "start_snapshot",
        "snapshot_id",
        optional=("cpu", "ram", "temporary", "name", "autopause", "startup_script", "custom_data"),
        paired=("cpu", "ram"),
    ),
    _auth("delete_terminal", "container_key"),
    _auth("restart_terminal", "container_key"),
    _auth("pause_terminal", "container_key"),
    _auth("resume_terminal", "container_key"),
    _auth(
        "edit_terminal",
        "container_key",
        optional=("cpu", "ram", "diskspace", "name"),
        paired=("cpu", "ram"),
        required_options=("cpu", "ram", "diskspace"),
    ),
    # Create and manage snapshots
    _auth("list_snapshots", optional=SNAPSHOT_FILTERS + ("page", "perPage")),
    _auth("count_snapshots", optional=SNAPSHOT_FILTERS),
    _auth("delete_snapshot", "snapshot_id"),
    _auth("edit_snapshot", "snapshot_id", optional=SNAPSHOT_METADATA + ("custom_data",)),
    _auth("snapshot_terminal", "container_key", optional=SNAPSHOT_METADATA),
    # Manage terminal access
    _auth("add_terminal_links", "container_key", variadic="links"),
    _auth("remove_terminal_links", "container_key", variadic="links"),
    _auth("list_terminal_access", "container_key"),
    _auth("edit_terminal_access", "container_key", optional=("is_public_list", "access_rules")),
    # Manage terminal DNS & domains
    _auth("get_cname_records"),
    _auth("add_domain_to_pool", "domain"),
    _auth("remove_domain_from_pool", "domain"),
    _auth("add_cname_record", "domain", "subdomain", "port"),
    _auth("remove_cname_record", "domain"),
    # Manage terminal idle settings
    _auth("set_terminal_idle_settings", "container_key", "action", variadic="triggers"),
    _auth("get_terminal_idle_settings", "container_key"),
    # Manage terminal passwords
    _auth("list_terminal_passwords", "container_key"),
    _auth("add_terminal_password", "container_key", "password"),
    _auth("remove_terminal_password", "container_key", "password"),
    # Manage usage & credits
    _public("instance_types"),
    _public("instance_price", "instance_type", defaults=(("status", "running"),)),
    _auth("balance"),
    _auth("balance_added"),
    _auth("gift", "email", "cents"),
    _auth("burn_history"),
    _auth("terminal_usage_history"),
    _auth("burn_state"),
    _auth("burn_estimates"),
    # Manage SSH public keys
    _auth("add_authorized_key_to_terminal", "container_key", "publicKey"),
    _auth("add_authorized_key_to_ssh_proxy", "name", "publicKey"),
    _auth("del_authorized_key_from_ssh_proxy", "name", "fingerprint"),
    _auth("get_authorized_keys_from_ssh_proxy"),
    # Other
    _auth("who_am_i"),
    _public("request_progress", "request_id"),
)

ENDPOINTS: MappingProxyType[str, Endpoint] = MappingProxyType({endpoint.name: endpoint for endpoint in _TABLE})


def get_endpoint(name: str) -> Endpoint:
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise KeyError(f"Unknown endpoint: {name!r}") from None
