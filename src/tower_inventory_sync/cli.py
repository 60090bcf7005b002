#!/usr/bin/env python3
"""CLI entry point for syncing a VM into an Ansible Tower inventory."""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Any, cast

import yaml

from .config import load_config
from .errors import ConfigurationError, TowerError, exit_code_for
from .models import VirtualMachine
from .reconciler import HostReconciler


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Add or update a VM host record in an Ansible Tower inventory.")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("tower.yaml"),
        help="YAML file with tower_* settings (default: tower.yaml)",
    )
    parser.add_argument("--inventory", help="Inventory name, overrides tower_inventory_name")
    parser.add_argument("--vm-name", help="VM name, used as hostname when no --hostname is given")
    parser.add_argument(
        "--hostname",
        dest="hostnames",
        action="append",
        default=[],
        help="Known hostname of the VM, may be repeated (first one wins)",
    )
    parser.add_argument(
        "--ip",
        dest="ipaddresses",
        action="append",
        default=[],
        help="IP address of the VM, may be repeated (first one wins)",
    )
    parser.add_argument("--vm-file", type=Path, help="YAML file describing the VM (name, hostnames, ipaddresses)")
    parser.add_argument("--debug", action="store_true", help="Log every request URL and payload")
    return parser.parse_args(argv)


def load_vm_file(vm_path: Path) -> VirtualMachine:
    """Load a VM descriptor from a YAML file."""
    if not vm_path.exists():
        raise ConfigurationError(f"VM file not found: {vm_path}")
    with open(vm_path) as f:
        try:
            data = cast(dict[str, Any] | None, yaml.safe_load(f))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in VM file {vm_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"VM file {vm_path} must contain a mapping")
    return VirtualMachine(
        name=str(data.get("name") or ""),
        hostnames=[str(h) for h in data.get("hostnames") or []],
        ipaddresses=[str(ip) for ip in data.get("ipaddresses") or []],
    )


def build_vm(args: argparse.Namespace) -> VirtualMachine | None:
    """Build the VM descriptor from --vm-file or the individual flags."""
    if args.vm_file:
        return load_vm_file(args.vm_file)
    if not (args.vm_name or args.hostnames or args.ipaddresses):
        return None
    return VirtualMachine(name=args.vm_name or "", hostnames=args.hostnames, ipaddresses=args.ipaddresses)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the sync tool."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        if args.inventory:
            config = dataclasses.replace(config, inventory_name=args.inventory)
        vm = build_vm(args)
        result = HostReconciler(config).reconcile(vm)
    except TowerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return exit_code_for(e)

    action = "Created" if result.created else "Updated"
    print(f"{action} host {result.hostname} ({result.ip_address}) in inventory {result.inventory_name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
