"""Service account created alongside the cluster."""

from typing import Optional

import pulumi
import pulumi_gcp as gcp

from autopilot_gke.config import ClusterSpec


def create_service_account(
    spec: ClusterSpec,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> gcp.serviceaccount.Account:
    """Declare the ``sa-gke-<cluster>`` service account."""
    pulumi.log.info(f"Declaring service account {spec.service_account_id}")

    return gcp.serviceaccount.Account(
        "gke-autopilot-serviceaccount",
        account_id=spec.service_account_id,
        display_name=spec.service_account_id,
        description=f"Service account for {spec.name} cluster",
        disabled=False,
        project=spec.project_id,
        opts=opts,
    )
