"""Wiring of the Autopilot stack: service account, cluster, kubeconfig secret."""

from dataclasses import dataclass

import pulumi
import pulumi_gcp as gcp

from autopilot_gke.cluster import create_cluster
from autopilot_gke.config import ClusterSpec
from autopilot_gke.kubeconfig import cluster_kubeconfig
from autopilot_gke.secret_store import create_kubeconfig_secret
from autopilot_gke.service_account import create_service_account


@dataclass(frozen=True)
class AutopilotStack:
    """Resources declared for one cluster."""

    spec: ClusterSpec
    service_account: gcp.serviceaccount.Account
    cluster: gcp.container.Cluster
    kubeconfig: pulumi.Output[str]
    secret: gcp.secretmanager.Secret
    secret_version: gcp.secretmanager.SecretVersion


def create_stack(spec: ClusterSpec) -> AutopilotStack:
    """Declare every resource of the stack for ``spec``."""
    service_account = create_service_account(spec)
    cluster = create_cluster(spec)

    # Rendered once the cluster reports its CA certificate and endpoint
    kubeconfig = cluster_kubeconfig(cluster)
    secret, secret_version = create_kubeconfig_secret(spec, kubeconfig)

    return AutopilotStack(
        spec=spec,
        service_account=service_account,
        cluster=cluster,
        kubeconfig=kubeconfig,
        secret=secret,
        secret_version=secret_version,
    )


def export_stack_outputs(stack: AutopilotStack) -> None:
    """Export the service account, cluster, secret and secret version names."""
    pulumi.export("service_account", stack.service_account.account_id)
    pulumi.export("cluster", stack.cluster.name)
    pulumi.export("secret", stack.secret.name)
    pulumi.export("secret_version", stack.secret_version.name)
