"""Pulumi components for a private GKE Autopilot cluster and its kubeconfig secret."""

__version__ = "0.1.0"

from autopilot_gke.config import AuthorizedNetwork, ClusterSpec, NetworkPolicy, load_cluster_spec
from autopilot_gke.exceptions import AutopilotStackError, StackConfigError
from autopilot_gke.kubeconfig import compose_kubeconfig, render_kubeconfig
from autopilot_gke.stack import AutopilotStack, create_stack, export_stack_outputs

__all__ = [
    "__version__",
    # Configuration
    "AuthorizedNetwork",
    "ClusterSpec",
    "NetworkPolicy",
    "load_cluster_spec",
    # Kubeconfig
    "compose_kubeconfig",
    "render_kubeconfig",
    # Stack
    "AutopilotStack",
    "create_stack",
    "export_stack_outputs",
    # Exceptions
    "AutopilotStackError",
    "StackConfigError",
]
