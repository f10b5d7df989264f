"""
Deployment Errors
"""


class DeploymentError(Exception):
    """Raised when a contract deployment cannot be completed"""
