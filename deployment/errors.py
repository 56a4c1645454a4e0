class DeploymentFailure(Exception):
    """Base class for every error that aborts a script run."""


class ConfigurationError(DeploymentFailure, ValueError):
    """Raised when a required setting is absent or malformed."""


class PreflightError(DeploymentFailure):
    """Raised when the deployer account cannot pay for the deployment."""


class NetworkError(DeploymentFailure):
    """Raised when a required chain query fails."""


class DeploymentError(DeploymentFailure):
    """Raised when the proxy deployment itself fails."""


class NoContractError(DeploymentFailure):
    """Raised when there is no contract code at the requested address."""
