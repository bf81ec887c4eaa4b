"""A Google Cloud Python Pulumi program

Declares a private GKE Autopilot cluster, its service account, and a
kubeconfig for it stored in Secret Manager.
"""

from autopilot_gke.config import load_cluster_spec
from autopilot_gke.stack import create_stack, export_stack_outputs

# Read in the cluster settings of the selected stack.
# If nothing is set the sandbox default values will take effect.
spec = load_cluster_spec()

stack = create_stack(spec)

export_stack_outputs(stack)
