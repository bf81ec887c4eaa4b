"""Kubeconfig generation for GKE clusters.

The document authenticates through ``gke-gcloud-auth-plugin``, so it carries no
credentials of its own: only the cluster CA certificate and endpoint.

Rendering is pure and synchronous. ``compose_kubeconfig`` joins the three
cluster outputs and renders once all of them have resolved; if one of them
never resolves, neither does the kubeconfig.
"""

from typing import Any, Dict

import pulumi
import pulumi_gcp as gcp
import yaml

EXEC_API_VERSION = "client.authentication.k8s.io/v1beta1"
AUTH_PLUGIN_COMMAND = "gke-gcloud-auth-plugin"
AUTH_PLUGIN_INSTALL_HINT = (
    "Install gke-gcloud-auth-plugin for use with kubectl by following "
    "https://cloud.google.com/kubernetes-engine/docs/how-to/cluster-access-for-kubectl#install_plugin"
)


def build_kubeconfig(ca_certificate: str, endpoint: str, name: str) -> Dict[str, Any]:
    """Return the kubeconfig structure for a single cluster.

    The cluster, context and user entries are all keyed by ``name``, which is
    also the current context.

    Args:
        ca_certificate: Base64 encoded cluster CA certificate, embedded as is.
        endpoint: Host or IP of the cluster API server, without scheme.
        name: Cluster name.

    Returns:
        The kubeconfig as a dict, keys in kubectl's order.

    """
    return {
        "apiVersion": "v1",
        "clusters": [
            {
                "cluster": {
                    "certificate-authority-data": ca_certificate,
                    "server": f"https://{endpoint}",
                },
                "name": name,
            }
        ],
        "contexts": [
            {
                "context": {
                    "cluster": name,
                    "user": name,
                },
                "name": name,
            }
        ],
        "current-context": name,
        "kind": "Config",
        "preferences": {},
        "users": [
            {
                "name": name,
                "user": {
                    "exec": {
                        "apiVersion": EXEC_API_VERSION,
                        "command": AUTH_PLUGIN_COMMAND,
                        "installHint": AUTH_PLUGIN_INSTALL_HINT,
                        "provideClusterInfo": True,
                    }
                },
            }
        ],
    }


def render_kubeconfig(ca_certificate: str, endpoint: str, name: str) -> str:
    """Render the kubeconfig for a cluster as a YAML document.

    Values are emitted by the YAML serializer, so anything that needs quoting
    gets quoted instead of breaking the document.
    """
    return yaml.safe_dump(
        build_kubeconfig(ca_certificate, endpoint, name),
        default_flow_style=False,
        sort_keys=False,
    )


def compose_kubeconfig(
    ca_certificate: pulumi.Input[str],
    endpoint: pulumi.Input[str],
    name: pulumi.Input[str],
) -> pulumi.Output[str]:
    """Render the kubeconfig once the CA certificate, endpoint and name are all known."""
    return pulumi.Output.all(ca_certificate, endpoint, name).apply(lambda args: render_kubeconfig(*args))


def cluster_kubeconfig(cluster: gcp.container.Cluster) -> pulumi.Output[str]:
    """Compose the kubeconfig of a declared GKE cluster."""
    ca_certificate = cluster.master_auth.apply(lambda auth: auth.cluster_ca_certificate)
    return compose_kubeconfig(ca_certificate, cluster.endpoint, cluster.name)
