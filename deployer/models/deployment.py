"""
Data models for contract deployments
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List


@dataclass(frozen=True)
class ContractArtifact:
    """Interface description and bytecode needed to deploy a contract"""
    name: str
    abi: List[dict]
    bytecode: str


@dataclass(frozen=True)
class SendOptions:
    """Transaction fields attached to every submitted transaction"""
    gas_price: int  # wei

    def as_tx_params(self) -> Dict[str, int]:
        return {'gasPrice': self.gas_price}


@dataclass
class DeploymentContext:
    """Registries filled in while a run progresses"""
    tokens: Dict[str, str] = field(default_factory=dict)  # symbol -> address
    contracts: Dict[str, ContractArtifact] = field(default_factory=dict)
    contract_addresses: Dict[str, str] = field(default_factory=dict)  # name -> address

    @classmethod
    def create(cls, token_symbols: Iterable[str], contracts: Iterable[ContractArtifact] = ()):
        """Start a run with every token registered as not yet deployed"""
        return cls(
            tokens={symbol: '' for symbol in token_symbols},
            contracts={artifact.name: artifact for artifact in contracts},
        )
