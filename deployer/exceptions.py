"""
Errors raised by the deployment pipeline
"""


class DeployerError(Exception):
    """Base class for deployer errors"""


class ConfigError(DeployerError):
    """The on-disk configuration file could not be parsed"""


class ArtifactError(DeployerError):
    """A contract artifact is missing or incomplete"""


class ReceiptTimeout(DeployerError):
    """A transaction was not mined within the allowed time"""

    def __init__(self, tx_hash: str, timeout: float):
        super().__init__(f"Transaction {tx_hash} not mined after {timeout}s")
        self.tx_hash = tx_hash
        self.timeout = timeout


class DeploymentCancelled(DeployerError):
    """Waiting for a transaction was cancelled"""


class TransactionReverted(DeployerError):
    """A mined transaction reported a failed status"""

    def __init__(self, tx_hash: str, receipt=None):
        super().__init__(f"Transaction {tx_hash} reverted")
        self.tx_hash = tx_hash
        self.receipt = receipt
