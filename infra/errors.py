"""Errors raised while composing the deployment topology."""


class TopologyError(Exception):
    """Base class for orchestration failures."""

    pass


class ConfigurationError(TopologyError):
    """Raised when the run configuration is invalid.

    Raised before any stack is declared, so nothing reaches CloudFormation.
    """

    pass


class ResourceLookupError(TopologyError, LookupError):
    """Raised when pre-existing provider state cannot be found."""

    pass


class HostedZoneNotFoundError(ResourceLookupError):
    """Raised when the Route 53 hosted zone for the root domain is missing."""

    pass


class ImageRepositoryNotFoundError(ResourceLookupError):
    """Raised when a service's ECR repository is missing."""

    pass
