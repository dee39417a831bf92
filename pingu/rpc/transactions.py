"""Signed transaction submission: estimate, buffer, sign, send, wait."""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from web3 import Web3
from web3.contract.contract import ContractFunction

from pingu.models.common import add_gas_buffer
from pingu.rpc.classifier import error_text
from pingu.rpc.errors import TransactionRevertedError

if TYPE_CHECKING:
    from pingu.client import PinguClient

logger = logging.getLogger(__name__)

# Node replies to a raw transaction that is already in its pool or mined.
ALREADY_BROADCAST_MARKERS = (
    "already known",
    "known transaction",
    "already imported",
    "nonce too low",
)


def is_already_broadcast(error: BaseException) -> bool:
    text = error_text(error).lower()
    return any(marker in text for marker in ALREADY_BROADCAST_MARKERS)


class TransactionSender:
    def __init__(self, client: "PinguClient"):
        self.client = client

    def submit(
        self,
        build_call: Callable[[], ContractFunction],
        value: int = 0,
        action: str = "transaction",
    ) -> Any:
        """Send a contract call as a signed transaction and wait for its receipt.

        Estimation, nonce and signing happen once, on the first endpoint that
        gets that far; ``build_call`` is invoked per attempt until then so the
        call is bound to the current endpoint. Later attempts re-broadcast the
        same signed bytes, so a send that timed out after reaching the network
        can never produce a second transaction. A re-broadcast the node already
        knows counts as sent. The receipt wait is retried separately by hash.
        """
        account = self.client.require_signer()
        chain_id = self.client.config.chain.chain_id
        signed = None
        broadcast_tried = False

        def send() -> bytes:
            nonlocal signed, broadcast_tried
            web3 = self.client.web3
            if signed is None:
                call = build_call()
                params = {"from": account.address, "value": value}
                gas = call.estimate_gas(params)
                tx = call.build_transaction(
                    {
                        **params,
                        "gas": add_gas_buffer(gas),
                        "nonce": web3.eth.get_transaction_count(account.address, "pending"),
                        "chainId": chain_id,
                    }
                )
                signed = account.sign_transaction(tx)

            rebroadcast = broadcast_tried
            broadcast_tried = True
            try:
                return web3.eth.send_raw_transaction(signed.raw_transaction)
            except Exception as e:
                if rebroadcast and is_already_broadcast(e):
                    logger.info(
                        "%s tx %s already known to the network",
                        action, Web3.to_hex(signed.hash),
                    )
                    return signed.hash
                raise

        tx_hash = self.client.with_fallback(send, label=action)
        tx_hex = Web3.to_hex(tx_hash)
        logger.info("Sent %s tx %s", action, tx_hex)

        receipt = self.client.with_fallback(
            lambda: self.client.web3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self.client.config.receipt_timeout
            ),
            label=f"{action} receipt",
        )
        if receipt["status"] == 0:
            logger.error("%s tx %s reverted", action, tx_hex)
            raise TransactionRevertedError(tx_hex)

        logger.info(
            "Confirmed %s tx %s in block %s", action, tx_hex, receipt.get("blockNumber")
        )
        return receipt
