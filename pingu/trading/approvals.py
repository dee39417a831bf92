"""ERC20 approval of the FundStore custody contract."""

from typing import Any

from pingu.client import PinguClient
from pingu.contracts.names import ContractName
from pingu.models.common import MAX_UINT256
from pingu.rpc.classifier import wrap_operation
from pingu.rpc.errors import ValidationError
from pingu.rpc.transactions import TransactionSender


def approve_fund_store(
    client: PinguClient,
    sender: TransactionSender,
    asset: str | None = None,
    amount: int | None = None,
) -> Any:
    """Approve FundStore to pull ``amount`` scaled units (default: unlimited).

    FundStore performs the transferFrom on behalf of Orders, Positions and Pool.
    """
    client.require_signer()
    if client.asset(asset).is_gas_token:
        raise ValidationError("Cannot approve gas token")
    token = client.asset_address(asset)
    approve_amount = MAX_UINT256 if amount is None else amount

    with wrap_operation("approve asset"):
        return sender.submit(
            lambda: client.get_erc20_contract(token).functions.approve(
                client.get_contract_address(ContractName.FUND_STORE), approve_amount
            ),
            action="approve",
        )
