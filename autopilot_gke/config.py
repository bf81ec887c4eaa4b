"""Stack configuration for the Autopilot cluster.

Settings are read from the Pulumi stack config once, at program start, and
validated into frozen models. If nothing is set the sandbox defaults below
take effect.
"""

from ipaddress import IPv4Network
from typing import Literal, Optional, Tuple

import pulumi
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from autopilot_gke.exceptions import StackConfigError

COMPUTE_API = "https://www.googleapis.com/compute/v1"

# Sandbox defaults
CLUSTER_NAME = "autopilot-mgmt-sbx"
NETWORK = "conro-sbx"
SUBNETWORK = "cnr-sbx-sub"
LOCATION = "europe-west1"
RELEASE_CHANNEL = "STABLE"
MASTER_IPV4_CIDR_BLOCK = "10.4.0.0/28"
POD_RANGE_NAME = "cnr-sbx1-pod-sub-c2"
SERVICE_RANGE_NAME = "cnr-sbx1-svc-sub-c2"

ReleaseChannel = Literal["UNSPECIFIED", "RAPID", "REGULAR", "STABLE", "EXTENDED"]

# GKE: lowercase letter first, no trailing hyphen, 40 chars at most
CLUSTER_NAME_PATTERN = r"^[a-z](?:[-a-z0-9]*[a-z0-9])?$"
SERVICE_ACCOUNT_ID_MAX_LENGTH = 30


class AuthorizedNetwork(BaseModel):
    """A CIDR block allowed to reach the cluster control plane."""

    model_config = ConfigDict(frozen=True)

    cidr_block: IPv4Network
    display_name: str = "RFC1918"


RFC1918_NETWORKS: Tuple[AuthorizedNetwork, ...] = (
    AuthorizedNetwork(cidr_block="10.0.0.0/8"),
    AuthorizedNetwork(cidr_block="172.16.0.0/12"),
    AuthorizedNetwork(cidr_block="192.168.0.0/16"),
)


class NetworkPolicy(BaseModel):
    """Control plane range and the subnetwork secondary ranges used for pods and services."""

    model_config = ConfigDict(frozen=True)

    master_ipv4_cidr_block: IPv4Network
    pod_range_name: str = Field(min_length=1)
    service_range_name: str = Field(min_length=1)

    @field_validator("master_ipv4_cidr_block")
    @classmethod
    def _control_plane_range_is_slash_28(cls, value: IPv4Network) -> IPv4Network:
        if value.prefixlen != 28:
            raise ValueError(f"control plane range must be a /28, got /{value.prefixlen}")
        return value


class ClusterSpec(BaseModel):
    """Deployment parameters for one Autopilot cluster.

    Attributes:
        name: Cluster name, also used for the service account and secret ids.
        network: VPC network name in ``project_id``.
        subnetwork: Subnetwork name in ``location``.
        location: Region the cluster is created in.
        release_channel: GKE upgrade cadence.
        project_id: GCP project holding every resource of the stack.
        network_policy: Control plane CIDR and secondary range names.
        authorized_networks: CIDR blocks allowed to reach the control plane.
        deletion_protection: Whether GKE refuses to delete the cluster.

    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(max_length=40, pattern=CLUSTER_NAME_PATTERN)
    network: str = Field(min_length=1)
    subnetwork: str = Field(min_length=1)
    location: str = Field(min_length=1)
    release_channel: ReleaseChannel
    project_id: str = Field(min_length=1)
    network_policy: NetworkPolicy
    authorized_networks: Tuple[AuthorizedNetwork, ...] = Field(default=RFC1918_NETWORKS, min_length=1)
    deletion_protection: bool = False

    @model_validator(mode="after")
    def _service_account_id_fits(self) -> "ClusterSpec":
        if len(self.service_account_id) > SERVICE_ACCOUNT_ID_MAX_LENGTH:
            raise ValueError(
                f"service account id {self.service_account_id!r} is longer than "
                f"{SERVICE_ACCOUNT_ID_MAX_LENGTH} characters, use a shorter cluster name"
            )
        return self

    @property
    def network_self_link(self) -> str:
        return f"{COMPUTE_API}/projects/{self.project_id}/global/networks/{self.network}"

    @property
    def subnetwork_self_link(self) -> str:
        return f"{COMPUTE_API}/projects/{self.project_id}/regions/{self.location}/subnetworks/{self.subnetwork}"

    @property
    def service_account_id(self) -> str:
        return f"sa-gke-{self.name}"

    @property
    def kubeconfig_secret_id(self) -> str:
        return f"kubeconfig-{self.name}"


def load_cluster_spec(
    config: Optional[pulumi.Config] = None,
    gcp_config: Optional[pulumi.Config] = None,
) -> ClusterSpec:
    """Read and validate the cluster settings of the current stack.

    Args:
        config: Project config namespace, defaults to ``pulumi.Config()``.
        gcp_config: Provider config namespace, defaults to ``pulumi.Config("gcp")``.
            Only consulted for ``project`` when ``project_id`` is not set.

    Returns:
        The validated ClusterSpec.

    Raises:
        StackConfigError: If a setting is missing or invalid.

    """
    config = config or pulumi.Config()
    gcp_config = gcp_config or pulumi.Config("gcp")

    project_id = config.get("project_id") or gcp_config.get("project")
    if not project_id:
        pulumi.log.error("No GCP project configured")
        raise StackConfigError("project_id is required, set it in the stack config or as gcp:project")

    raw = {
        "name": config.get("cluster_name") or CLUSTER_NAME,
        "network": config.get("network") or NETWORK,
        "subnetwork": config.get("subnetwork") or SUBNETWORK,
        "location": config.get("location") or LOCATION,
        "release_channel": config.get("release_channel") or RELEASE_CHANNEL,
        "project_id": project_id,
        "network_policy": {
            "master_ipv4_cidr_block": config.get("master_ipv4_cidr_block") or MASTER_IPV4_CIDR_BLOCK,
            "pod_range_name": config.get("pod_range_name") or POD_RANGE_NAME,
            "service_range_name": config.get("service_range_name") or SERVICE_RANGE_NAME,
        },
    }

    try:
        deletion_protection = config.get_bool("deletion_protection")
        # [{"cidr_block": ..., "display_name": ...}]
        authorized_networks = config.get_object("authorized_networks")
    except pulumi.ConfigTypeError as e:
        pulumi.log.error(f"Invalid stack configuration: {e}")
        raise StackConfigError(f"Invalid stack configuration: {e}") from e

    raw["deletion_protection"] = deletion_protection or False
    if authorized_networks is not None:
        raw["authorized_networks"] = authorized_networks

    try:
        return ClusterSpec.model_validate(raw)
    except ValidationError as e:
        pulumi.log.error(f"Invalid stack configuration: {e}")
        raise StackConfigError(f"Invalid stack configuration: {e}") from e
