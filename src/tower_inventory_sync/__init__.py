"""Sync a virtual machine into an Ansible Tower / AWX inventory."""

from .cli import main
from .client import TowerClient
from .models import ReconcileResult, TowerConfig, VirtualMachine
from .reconciler import HostReconciler

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "main",
    "HostReconciler",
    "ReconcileResult",
    "TowerClient",
    "TowerConfig",
    "VirtualMachine",
]
