from .abi_exporter import export_abis
from .artifacts import load_artifact, load_artifacts
from .chain_client import ChainClient
from .contract_deployer import ContractDeployer, decimals_for
from .tx_poller import wait_for_mined

__all__ = [
    'ChainClient',
    'ContractDeployer',
    'decimals_for',
    'export_abis',
    'load_artifact',
    'load_artifacts',
    'wait_for_mined',
]
