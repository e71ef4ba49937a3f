import os
import sys
from unittest.mock import MagicMock

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from deployer.models import ContractArtifact

OWNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


def make_address(n: int) -> str:
    return "0x" + f"{n:040x}"


class FakeClient:
    """ChainClient double that mines every transaction after ``pending_polls`` misses"""

    def __init__(self, pending_polls: int = 0):
        self.w3 = MagicMock()
        self.address = OWNER
        self.pending_polls = pending_polls
        self.events = []
        self.sent = []
        self.polls = {}
        self.receipts = {}

    def transaction_params(self, send_options, signer=None):
        params = {'from': self.address, 'nonce': len(self.sent), 'chainId': 31337}
        params.update(send_options.as_tx_params())
        return params

    async def send_transaction(self, tx, signer=None):
        tx_hash = "0x" + f"{len(self.sent) + 1:064x}"
        self.sent.append(tx)
        self.events.append(('send', tx_hash))
        self.receipts[tx_hash] = {
            'status': 1,
            'transactionHash': tx_hash,
            'contractAddress': make_address(len(self.sent)),
        }
        return tx_hash

    async def get_transaction_receipt(self, tx_hash):
        self.polls[tx_hash] = self.polls.get(tx_hash, 0) + 1
        self.events.append(('poll', tx_hash))
        if self.polls[tx_hash] <= self.pending_polls:
            return None
        return self.receipts[tx_hash]


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def token_artifact():
    return ContractArtifact(
        name="ExBasisToken",
        abi=[{"type": "function", "name": "initialize", "inputs": [], "outputs": []}],
        bytecode="0x6080",
    )


@pytest.fixture
def no_wait_poll():
    return {'interval': 0, 'settle': 0}
