"""Exceptions raised while building the Autopilot stack."""


class AutopilotStackError(Exception):
    """Base exception for errors raised by this program before the engine
    takes over resource creation."""

    pass


class StackConfigError(AutopilotStackError):
    """Raised when the stack configuration is missing or invalid.

    This can occur when:
    - ``project_id`` is set neither in the stack nor as ``gcp:project``
    - a CIDR block is malformed, or the control plane range is not a /28
    - the release channel is not one GKE knows
    - the cluster name is too long to derive a service account id from
    """

    pass
