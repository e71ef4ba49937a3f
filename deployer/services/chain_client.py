"""
Chain client wrapping a single RPC connection and a default signer
"""

import logging
from typing import Dict, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.exceptions import TransactionNotFound

from ..constants import LOGGER_NAME
from ..models import SendOptions


class ChainClient:
    """Connection to an Ethereum-compatible node plus the deploying wallet"""

    def __init__(self, url: str, private_key: str, w3: Optional[Web3] = None):
        self.logger = logging.getLogger(LOGGER_NAME)
        self.url = url
        self.private_key = private_key
        self.w3 = w3 if w3 is not None else Web3(Web3.HTTPProvider(url))

        if not self.w3.is_connected():
            raise ConnectionError(f"Failed to connect to {url or '<empty endpoint>'}")

        self.account = self.create_signer()

    @property
    def address(self) -> str:
        return self.account.address

    def create_signer(self, key: Optional[str] = None) -> LocalAccount:
        """Return a signer for ``key``, defaulting to the configured key"""
        return Account.from_key(self.private_key if key is None else key)

    @staticmethod
    def to_wei_gwei(value) -> int:
        return Web3.to_wei(value, 'gwei')

    async def get_block_number(self) -> int:
        return self.w3.eth.block_number

    async def get_transaction_receipt(self, tx_hash: str):
        """Receipt for ``tx_hash``, or None while it is not mined yet"""
        try:
            return self.w3.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound:
            return None

    def transaction_params(self, send_options: SendOptions,
                           signer: Optional[LocalAccount] = None) -> Dict:
        """Fields every transaction from ``signer`` needs before signing"""
        signer = signer or self.account
        params = {
            'from': signer.address,
            'nonce': self.w3.eth.get_transaction_count(signer.address, 'pending'),
            'chainId': self.w3.eth.chain_id,
        }
        params.update(send_options.as_tx_params())
        return params

    async def send_transaction(self, tx: Dict, signer: Optional[LocalAccount] = None) -> str:
        """Sign ``tx`` and submit it, returning the transaction hash"""
        signer = signer or self.account
        signed_tx = signer.sign_transaction(tx)
        tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        tx_hash_hex = Web3.to_hex(tx_hash)
        self.logger.debug(f"Sent transaction {tx_hash_hex} from {signer.address}")
        return tx_hash_hex
