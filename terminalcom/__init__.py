__version__ = "0.1.0"

from .api import TerminalAPI
from .config import Settings, get_settings
from .endpoints import ENDPOINTS, Endpoint
from .facade import INSTANCE_TYPES, Terminal, resolve_instance_type
from .service_client import NetworkError, RemoteError, TerminalAPIError, TerminalServiceClient
from .validation import InvalidParameter

__all__ = [
    "ENDPOINTS",
    "INSTANCE_TYPES",
    "Endpoint",
    "InvalidParameter",
    "NetworkError",
    "RemoteError",
    "Settings",
    "Terminal",
    "TerminalAPI",
    "TerminalAPIError",
    "TerminalServiceClient",
    "get_settings",
    "resolve_instance_type",
]
