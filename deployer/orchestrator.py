"""
Run orchestration: deploy tokens, deploy business contracts, report, export ABIs

Usage:
  python deploy.py        # full deployment
  python deploy.py abi    # only write ABI files
"""

import asyncio
import logging
import os
import sys
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from dotenv import load_dotenv

from .config import DeployConfig, load_config
from .constants import (
    ABI_DIR,
    ABI_EXPORT_CONTRACTS,
    BUSINESS_CONTRACTS,
    LOGGER_NAME,
    TOKEN_ARTIFACT,
    TOKEN_SYMBOLS,
)
from .logging_utils import setup_logging
from .models import ContractArtifact, DeploymentContext, SendOptions
from .services import ChainClient, ContractDeployer, export_abis, load_artifact, load_artifacts


class RunState(Enum):
    CONFIG_LOADED = "config_loaded"
    TOKENS_DEPLOYED = "tokens_deployed"
    CONTRACTS_DEPLOYED = "contracts_deployed"
    INITIALIZED = "initialized"
    REPORTED = "reported"
    ABIS_EXPORTED = "abis_exported"
    DONE = "done"


class DeploymentOrchestrator:
    """Runs one full deployment in a fixed order"""

    def __init__(self, config: DeployConfig,
                 client_factory: Callable[[str, str], ChainClient] = ChainClient,
                 token_symbols: Sequence[str] = TOKEN_SYMBOLS,
                 token_artifact: Optional[ContractArtifact] = None,
                 contracts: Optional[List[ContractArtifact]] = None,
                 abis: Optional[Dict[str, list]] = None,
                 abi_dir: Path = ABI_DIR):
        self.logger = logging.getLogger(LOGGER_NAME)
        self.config = config
        self.client_factory = client_factory
        self.token_symbols = tuple(token_symbols)
        self.token_artifact = token_artifact
        self.contracts = contracts
        self.abis = abis
        self.abi_dir = abi_dir
        self.client = None
        self.context = None
        self.state = RunState.CONFIG_LOADED

    def _connect(self) -> ChainClient:
        print(f"current endpoint {self.config.url}")
        client = self.client_factory(self.config.url, self.config.pk)
        print(f"wallet: {client.address}")
        return client

    def _build_deployer(self) -> ContractDeployer:
        send_options = SendOptions(gas_price=ChainClient.to_wei_gwei(self.config.gas_price))
        poll_options = {}
        if self.config.receipt_timeout is not None:
            poll_options['timeout'] = self.config.receipt_timeout
        return ContractDeployer(self.client, send_options, poll_options)

    async def deploy(self):
        """Deploy every token, then every business contract"""
        if self.token_artifact is None:
            self.token_artifact = load_artifact(TOKEN_ARTIFACT, self.config.artifacts_dir)
        if self.contracts is None:
            self.contracts = load_artifacts(BUSINESS_CONTRACTS, self.config.artifacts_dir)

        self.context = DeploymentContext.create(self.token_symbols, self.contracts)
        deployer = self._build_deployer()

        print('deploy token...')
        await deployer.deploy_tokens(self.token_artifact, self.context)
        self.state = RunState.TOKENS_DEPLOYED

        print('deploy contract...')
        await deployer.deploy_contracts(self.context)
        self.state = RunState.CONTRACTS_DEPLOYED

    async def initialize(self):
        """Post-deployment setup of business contracts; nothing to do yet"""
        self.state = RunState.INITIALIZED

    def report(self):
        print('=====Contracts=====')
        for name, address in self.context.contract_addresses.items():
            print(f'"{name}": "{address}",')

        print('=====Tokens=====')
        for symbol, address in self.context.tokens.items():
            print(f'"{symbol}": "{address}",')
        self.state = RunState.REPORTED

    def collect_abis(self) -> Dict[str, list]:
        if self.abis is not None:
            return self.abis
        artifacts = load_artifacts(ABI_EXPORT_CONTRACTS, self.config.artifacts_dir)
        return {artifact.name: artifact.abi for artifact in artifacts}

    def write_abi(self) -> List[Path]:
        written = export_abis(self.collect_abis(), self.abi_dir)
        self.state = RunState.ABIS_EXPORTED
        return written

    async def run(self) -> DeploymentContext:
        self.client = self._connect()

        print('deploy...')
        await self.deploy()
        print('initialize...')
        await self.initialize()

        self.report()
        self.write_abi()
        self.state = RunState.DONE
        return self.context


def dispatch(orchestrator: DeploymentOrchestrator, argv: Sequence[str]):
    """Run the ABI export alone for ``abi``, the whole deployment otherwise"""
    if argv and argv[0] == 'abi':
        return orchestrator.write_abi()
    return asyncio.run(orchestrator.run())


def main(argv: Optional[Sequence[str]] = None):
    load_dotenv()
    argv = sys.argv[1:] if argv is None else list(argv)

    config = load_config(env=os.environ)
    logger = setup_logging(config.log_dir)

    try:
        dispatch(DeploymentOrchestrator(config, client_factory=ChainClient), argv)
    except Exception as e:
        logger.error(f"Deployment failed: {e}")
        raise


if __name__ == "__main__":
    main()
