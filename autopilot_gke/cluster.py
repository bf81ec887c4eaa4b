"""The GKE Autopilot cluster.

Nodes and the control plane endpoint are private. The control plane only
accepts connections from the authorized networks of the spec, and pods and
services take their addresses from the subnetwork's secondary ranges.
"""

from typing import Optional

import pulumi
import pulumi_gcp as gcp

from autopilot_gke.config import ClusterSpec


def create_cluster(
    spec: ClusterSpec,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> gcp.container.Cluster:
    """Declare the Autopilot cluster described by ``spec``.

    The Pulumi resource name is the cluster name.
    """
    pulumi.log.info(
        f"Declaring GKE Autopilot cluster {spec.name} in {spec.location} "
        f"({spec.release_channel} channel)"
    )
    policy = spec.network_policy

    return gcp.container.Cluster(
        spec.name,
        name=spec.name,
        project=spec.project_id,
        # Network
        network=spec.network_self_link,
        subnetwork=spec.subnetwork_self_link,
        location=spec.location,
        # Release Channel
        release_channel=gcp.container.ClusterReleaseChannelArgs(
            channel=spec.release_channel,
        ),
        # Extra configs
        enable_autopilot=True,
        enable_cilium_clusterwide_network_policy=True,
        enable_fqdn_network_policy=True,
        enable_l4_ilb_subsetting=True,
        enable_multi_networking=True,
        deletion_protection=spec.deletion_protection,
        # Private Cluster Config
        private_cluster_config=gcp.container.ClusterPrivateClusterConfigArgs(
            enable_private_nodes=True,
            enable_private_endpoint=True,
            master_ipv4_cidr_block=str(policy.master_ipv4_cidr_block),
        ),
        # Authorized allowed networks
        master_authorized_networks_config=gcp.container.ClusterMasterAuthorizedNetworksConfigArgs(
            cidr_blocks=[
                gcp.container.ClusterMasterAuthorizedNetworksConfigCidrBlockArgs(
                    cidr_block=str(network.cidr_block),
                    display_name=network.display_name,
                )
                for network in spec.authorized_networks
            ],
        ),
        ip_allocation_policy=gcp.container.ClusterIpAllocationPolicyArgs(
            stack_type="IPV4",
            cluster_secondary_range_name=policy.pod_range_name,
            services_secondary_range_name=policy.service_range_name,
        ),
        addons_config=gcp.container.ClusterAddonsConfigArgs(
            http_load_balancing=gcp.container.ClusterAddonsConfigHttpLoadBalancingArgs(
                disabled=False,
            ),
        ),
        opts=opts,
    )
