"""Shared test fixtures for autopilot-gke tests.

Resources are declared against Pulumi's mock runtime. The mocks echo resource
inputs back as outputs and fill in what GCP would report for the cluster,
secret and secret version.
"""

from unittest.mock import MagicMock

import pulumi
import pytest

from autopilot_gke.config import load_cluster_spec

PROJECT_ID = "conro-sbx"
CA_CERTIFICATE = "BASE64CERTDATA"
ENDPOINT = "34.1.2.3"


class AutopilotMocks(pulumi.runtime.Mocks):
    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        outputs = dict(args.inputs)
        if args.typ == "gcp:container/cluster:Cluster":
            outputs["endpoint"] = ENDPOINT
            outputs["masterAuth"] = {
                "clusterCaCertificate": CA_CERTIFICATE,
                "clientCertificateConfig": {"issueClientCertificate": False},
            }
        elif args.typ == "gcp:secretmanager/secret:Secret":
            outputs["name"] = f"projects/{PROJECT_ID}/secrets/{args.inputs['secretId']}"
        elif args.typ == "gcp:secretmanager/secretVersion:SecretVersion":
            outputs["name"] = f"{args.inputs['secret']}/versions/1"
        return [f"{args.name}_id", outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        return {}


pulumi.runtime.set_mocks(AutopilotMocks(), project="autopilot-gke", stack="sbx", preview=False)


def make_config(values):
    """Build a stand-in for pulumi.Config backed by a dict."""
    config = MagicMock()
    config.get.side_effect = values.get
    config.get_bool.side_effect = values.get
    config.get_object.side_effect = values.get
    return config


@pytest.fixture
def empty_gcp_config():
    """Provider config with no gcp:project set."""
    return make_config({})


@pytest.fixture
def spec(empty_gcp_config):
    """The sandbox cluster spec, from an otherwise empty stack config."""
    return load_cluster_spec(make_config({"project_id": PROJECT_ID}), empty_gcp_config)
