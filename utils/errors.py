"""
Deployment Errors
Every failure the harness reports is a DeploymentError
"""


class DeploymentError(Exception):
    """Deployment failed (network error, insufficient funds, compilation mismatch, ...)"""


class ConfigurationError(DeploymentError):
    """Invalid or incomplete configuration / credentials"""
