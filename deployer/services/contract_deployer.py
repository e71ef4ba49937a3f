"""
Deploy-and-confirm operations for token and business contracts

Every transaction is submitted with the shared send options and waited on
until mined before the next one starts.
"""

import logging
from typing import Awaitable, Callable, Dict, Optional

from eth_utils import to_checksum_address

from ..constants import DEFAULT_DECIMALS, LOGGER_NAME, TOKEN_DECIMALS, TOKEN_TOTAL_SUPPLY
from ..exceptions import TransactionReverted
from ..models import ContractArtifact, DeploymentContext, SendOptions
from .tx_poller import wait_for_mined


def decimals_for(symbol: str) -> int:
    return TOKEN_DECIMALS.get(symbol, DEFAULT_DECIMALS)


class ContractDeployer:
    """Deploys contracts one at a time through a ChainClient"""

    def __init__(self, client, send_options: SendOptions, poll_options: Optional[Dict] = None):
        self.client = client
        self.send_options = send_options
        self.poll_options = poll_options or {}
        self.logger = logging.getLogger(LOGGER_NAME)

    async def _confirm(self, tx_hash: str):
        receipt = await wait_for_mined(self.client, tx_hash, **self.poll_options)
        if receipt.get('status') == 0:
            self.logger.error(f"Transaction {tx_hash} reverted")
            raise TransactionReverted(tx_hash, receipt)
        return receipt

    async def transact(self, function_call):
        """Send a contract function call and wait for it to be mined"""
        tx = function_call.build_transaction(self.client.transaction_params(self.send_options))
        tx_hash = await self.client.send_transaction(tx)
        return await self._confirm(tx_hash)

    async def deploy_and_confirm(self, artifact: ContractArtifact,
                                 initializer: Optional[Callable[..., Awaitable]] = None,
                                 on_deployed: Optional[Callable[[str], None]] = None) -> str:
        """Deploy ``artifact`` without constructor arguments.

        ``on_deployed`` receives the new address as soon as the deployment is
        mined; ``initializer`` then receives the bound contract instance and
        is awaited before returning.
        """
        w3 = self.client.w3
        factory = w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        tx = factory.constructor().build_transaction(
            self.client.transaction_params(self.send_options)
        )
        tx_hash = await self.client.send_transaction(tx)
        receipt = await self._confirm(tx_hash)

        address = to_checksum_address(receipt['contractAddress'])
        self.logger.info(f"{artifact.name} deployed at {address}")
        if on_deployed is not None:
            on_deployed(address)

        if initializer is not None:
            instance = w3.eth.contract(address=address, abi=artifact.abi)
            await initializer(instance)

        return address

    async def deploy_tokens(self, token_artifact: ContractArtifact, context: DeploymentContext) -> Dict[str, str]:
        """Deploy and initialize one token contract per registered symbol"""
        owner = self.client.address

        for symbol in list(context.tokens):
            decimals = decimals_for(symbol)

            def record(address: str, symbol=symbol):
                context.tokens[symbol] = address

            async def initialize(instance, symbol=symbol, decimals=decimals):
                await self.transact(instance.functions.initialize(
                    owner, TOKEN_TOTAL_SUPPLY, TOKEN_TOTAL_SUPPLY, decimals, symbol, symbol
                ))

            print(f"🪙 Deploying {symbol} ({decimals} decimals)")
            await self.deploy_and_confirm(token_artifact, initializer=initialize, on_deployed=record)

        return context.tokens

    async def deploy_contracts(self, context: DeploymentContext) -> Dict[str, str]:
        """Deploy every business contract in the registry"""
        for name, artifact in context.contracts.items():
            print(f"📄 Deploying {name}")
            context.contract_addresses[name] = await self.deploy_and_confirm(artifact)

        return context.contract_addresses
