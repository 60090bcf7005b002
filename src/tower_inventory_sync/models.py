"""Data models for Tower inventory synchronisation."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TowerConfig:
    """Connection and target settings for one Tower instance."""

    url: str  # "https://tower.example.com"
    username: str
    password: str = field(repr=False)
    inventory_name: str  # "Lab"
    api_version: str = "v2"
    verify_ssl: bool = True
    timeout: float = 30


@dataclass
class VirtualMachine:
    """The VM whose host record is being reconciled."""

    name: str
    hostnames: list[str] = field(default_factory=list)
    ipaddresses: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class HostIdentity:
    """Hostname and address a VM is registered under."""

    hostname: str
    ip_address: str


@dataclass(frozen=True)
class InventoryRef:
    """Inventory resolved from its name."""

    id: Any  # Tower returns an int, kept opaque
    name: str


@dataclass
class ApiResponse:
    """A successful (2xx) Tower API response."""

    status_code: int
    body: str = ""
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ReconcileResult:
    """Confirmation record of a completed sync run."""

    hostname: str
    ip_address: str
    inventory_name: str
    inventory_id: Any = None
    host_id: Any = None
    created: bool = False
