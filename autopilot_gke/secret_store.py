"""Secret Manager storage for the generated kubeconfig."""

from typing import Optional, Tuple

import pulumi
import pulumi_gcp as gcp

from autopilot_gke.config import ClusterSpec


def create_kubeconfig_secret(
    spec: ClusterSpec,
    kubeconfig: pulumi.Input[str],
    opts: Optional[pulumi.ResourceOptions] = None,
) -> Tuple[gcp.secretmanager.Secret, gcp.secretmanager.SecretVersion]:
    """Store ``kubeconfig`` as the active version of the ``kubeconfig-<cluster>`` secret.

    Args:
        spec: The cluster the kubeconfig belongs to.
        kubeconfig: The kubeconfig document, usually still pending.
        opts: Options applied to both resources.

    Returns:
        The secret and its version.

    """
    secret_id = spec.kubeconfig_secret_id
    pulumi.log.info(f"Declaring Secret Manager secret {secret_id}")

    secret = gcp.secretmanager.Secret(
        secret_id,
        secret_id=secret_id,
        project=spec.project_id,
        replication=gcp.secretmanager.SecretReplicationArgs(
            auto=gcp.secretmanager.SecretReplicationAutoArgs(),
        ),
        opts=opts,
    )

    version = gcp.secretmanager.SecretVersion(
        f"{secret_id}-version",
        enabled=True,
        secret=secret.id,
        secret_data=kubeconfig,
        opts=opts,
    )

    return secret, version
