"""
Sequential token and contract deployer
"""

from .config import DeployConfig, load_config
from .orchestrator import DeploymentOrchestrator, RunState, main

__all__ = ['DeployConfig', 'DeploymentOrchestrator', 'RunState', 'load_config', 'main']
