from .deployment import ContractArtifact, DeploymentContext, SendOptions

__all__ = ['ContractArtifact', 'DeploymentContext', 'SendOptions']
