"""
Exception hierarchy for NodePulse.
"""


class NodePulseError(Exception):
    """Base class for NodePulse errors."""
    pass


class MetricRegistrationError(NodePulseError):
    """
    Raised when a metric cannot be registered.

    This is a configuration error: it means two pieces of start-up code claim
    the same metric name. It must abort start-up rather than be ignored.
    """
    pass


class SerializationError(NodePulseError):
    """Raised when the metrics exposition cannot be encoded as UTF-8."""
    pass


class StatusUnavailableError(NodePulseError):
    """Raised when the node status cannot be fetched or parsed."""
    pass
