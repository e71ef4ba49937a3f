"""
Waiting for submitted transactions to be mined
"""

import asyncio
import logging
import time
from typing import Optional

from ..constants import LOGGER_NAME, POLL_INTERVAL, SETTLE_DELAY
from ..exceptions import DeploymentCancelled, ReceiptTimeout

logger = logging.getLogger(LOGGER_NAME)


async def _sleep(delay: float, cancel_event: Optional[asyncio.Event]):
    if cancel_event is None:
        await asyncio.sleep(delay)
        return
    try:
        await asyncio.wait_for(cancel_event.wait(), timeout=delay)
    except asyncio.TimeoutError:
        return
    raise DeploymentCancelled("Stopped waiting for transaction")


async def wait_for_mined(client, tx_hash: str,
                         interval: float = POLL_INTERVAL,
                         settle: float = SETTLE_DELAY,
                         timeout: Optional[float] = None,
                         backoff: float = 1.0,
                         max_interval: Optional[float] = None,
                         cancel_event: Optional[asyncio.Event] = None):
    """Poll ``client`` until ``tx_hash`` has a receipt, then return it.

    The receipt is requested every ``interval`` seconds (multiplied by
    ``backoff`` after each miss, capped at ``max_interval``). Once it shows
    up the coroutine sleeps ``settle`` seconds before returning. Without a
    ``timeout`` this waits forever; setting ``cancel_event`` aborts the wait
    with DeploymentCancelled.
    """
    print(f"tx: {tx_hash}")
    started = time.monotonic()
    delay = interval
    attempts = 0

    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise DeploymentCancelled(f"Stopped waiting for {tx_hash}")

        receipt = await client.get_transaction_receipt(tx_hash)
        attempts += 1
        if receipt is not None:
            break

        if timeout is not None and time.monotonic() - started + delay > timeout:
            raise ReceiptTimeout(tx_hash, timeout)

        await _sleep(delay, cancel_event)
        delay *= backoff
        if max_interval is not None:
            delay = min(delay, max_interval)

    logger.debug(f"Transaction {tx_hash} mined after {attempts} polls")
    await _sleep(settle, cancel_event)
    return receipt
