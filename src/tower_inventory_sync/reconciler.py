"""Ensure a VM is registered as a host in an Ansible Tower inventory."""

import logging
from typing import Any
from urllib.parse import quote_plus

from .client import TowerClient
from .config import validate_config
from .errors import (
    ApiError,
    HostnameUnresolvedError,
    InventoryNotFoundError,
    MalformedResponseError,
    NoIpAddressError,
    UpsertFailedError,
    VerificationFailedError,
    VmNotFoundError,
)
from .models import HostIdentity, InventoryRef, ReconcileResult, TowerConfig, VirtualMachine
from .utils import encode_host_variables, is_blank

log = logging.getLogger(__name__)


def derive_host_identity(vm: VirtualMachine | None) -> HostIdentity:
    """Pick the hostname and IP address a VM is registered under.

    The first known hostname is used when the VM has any, otherwise the VM
    name. A blank first hostname is an error, not a reason to try the next.
    Only the first IP address is used.
    """
    if vm is None:
        raise VmNotFoundError("Unable to find VM")

    hostname = vm.hostnames[0] if vm.hostnames else vm.name
    if is_blank(hostname):
        raise HostnameUnresolvedError(f"Unable to determine hostname for VM {vm.name!r}")
    if is_blank(vm.ipaddresses):
        raise NoIpAddressError(f"No IP addresses associated with VM {hostname}")

    ip_address = vm.ipaddresses[0]
    if is_blank(ip_address):
        raise NoIpAddressError(f"No IP addresses associated with VM {hostname}")
    return HostIdentity(hostname=hostname.strip(), ip_address=ip_address.strip())


def host_payload(identity: HostIdentity, inventory: InventoryRef) -> dict[str, Any]:
    """Build the host record body sent on create and update."""
    return {
        "name": identity.hostname,
        "inventory": inventory.id,
        "enabled": True,
        "variables": encode_host_variables(identity.ip_address),
    }


def _count(result: dict[str, Any], api_path: str) -> int:
    count = result.get("count")
    if isinstance(count, bool) or not isinstance(count, int):
        raise MalformedResponseError(f"Tower response for {api_path} has no integer count: {count!r}")
    return count


class HostReconciler:
    """Create or update one VM's host record in the configured inventory."""

    def __init__(self, config: TowerConfig, client: TowerClient | None = None) -> None:
        self.config = config
        self._client = client

    @property
    def client(self) -> TowerClient:
        if self._client is None:
            self._client = TowerClient(self.config)
        return self._client

    def reconcile(self, vm: VirtualMachine | None) -> ReconcileResult:
        """Run the full sync for a VM and return the confirmation record."""
        log.info("Starting Ansible Tower REST API call to add a host to the inventory")

        validate_config(self.config)
        inventory = self.resolve_inventory(self.config.inventory_name)
        identity = derive_host_identity(vm)
        log.info("Host %s with IP address %s will be synced", identity.hostname, identity.ip_address)

        host_id = self.lookup_host(inventory, identity.hostname)
        created = host_id is None
        result_id = self.upsert_host(inventory, identity, host_id)
        self.verify_presence(inventory, identity.hostname)

        log.info(
            "VM %s with IP address %s successfully added to Ansible Tower inventory [ %s ]",
            identity.hostname,
            identity.ip_address,
            inventory.name,
        )
        return ReconcileResult(
            hostname=identity.hostname,
            ip_address=identity.ip_address,
            inventory_name=inventory.name,
            inventory_id=inventory.id,
            host_id=result_id,
            created=created,
        )

    def resolve_inventory(self, inventory_name: str) -> InventoryRef:
        """Look up an inventory id by its name."""
        result = self.client.get(f"inventories?name={quote_plus(inventory_name)}")
        results = result.get("results")
        first = results[0] if isinstance(results, list) and results else None
        inventory_id = first.get("id") if isinstance(first, dict) else None
        if is_blank(inventory_id):
            raise InventoryNotFoundError(
                f"Unable to determine Tower inventory_id from inventory name: [ {inventory_name} ]"
            )
        if len(results) > 1:
            log.warning("%d inventories named %s, using id %s", len(results), inventory_name, inventory_id)
        log.info("Resolved inventory %s to id %s", inventory_name, inventory_id)
        return InventoryRef(id=inventory_id, name=inventory_name)

    def lookup_host(self, inventory: InventoryRef, hostname: str) -> Any:
        """Return the id of an existing host record, or None if absent."""
        api_path = f"inventories/{inventory.id}/hosts/?name={quote_plus(hostname)}"
        result = self.client.get(api_path)
        if _count(result, api_path) == 0:
            log.info("Host %s not yet present in Tower inventory", hostname)
            return None

        results = result.get("results") or []
        first = results[0] if isinstance(results, list) and results else None
        host_id = first.get("id") if isinstance(first, dict) else None
        if host_id is None:
            raise MalformedResponseError(f"Tower reported host {hostname} present but returned no host id")
        log.info("Host already present in Tower inventory: Host ID = %s", host_id)
        return host_id

    def upsert_host(self, inventory: InventoryRef, identity: HostIdentity, host_id: Any = None) -> Any:
        """PATCH an existing host record or POST a new one."""
        payload = host_payload(identity, inventory)
        try:
            if host_id is not None:
                self.client.patch(f"hosts/{host_id}", payload)
                return host_id
            created = self.client.post("hosts", payload)
        except ApiError as e:
            action = "update" if host_id is not None else "create"
            raise UpsertFailedError(
                f"Failed to {action} host {identity.hostname} in inventory [ {inventory.name} ]: "
                f"status {e.status_code}: {e.body}"
            ) from e
        return created.get("id")

    def verify_presence(self, inventory: InventoryRef, hostname: str) -> None:
        """Check the host record is now listed in the inventory."""
        api_path = f"inventories/{inventory.id}/hosts?name={quote_plus(hostname)}"
        result = self.client.get(api_path)
        if _count(result, api_path) == 0:
            raise VerificationFailedError(f"Failed to add {hostname} to Ansible Inventory [ {inventory.name} ].")
