"""JSON ABIs for the exchange contracts, limited to the functions we call."""


def _p(type_: str, name: str = "", components: list[dict] | None = None) -> dict:
    param = {"name": name, "type": type_}
    if components is not None:
        param["components"] = components
    return param


def _fn(
    name: str,
    inputs: list[dict],
    outputs: list[dict] | None = None,
    mutability: str = "view",
) -> dict:
    return {
        "type": "function",
        "name": name,
        "inputs": inputs,
        "outputs": outputs or [],
        "stateMutability": mutability,
    }


ORDER_COMPONENTS = [
    _p("uint256", "orderId"),
    _p("address", "user"),
    _p("address", "asset"),
    _p("string", "market"),
    _p("uint256", "margin"),
    _p("uint256", "size"),
    _p("uint256", "price"),
    _p("uint256", "fee"),
    _p("bool", "isLong"),
    _p("uint8", "orderType"),
    _p("bool", "isReduceOnly"),
    _p("uint256", "timestamp"),
    _p("uint256", "expiry"),
    _p("uint256", "cancelOrderId"),
]

POSITION_COMPONENTS = [
    _p("address", "user"),
    _p("address", "asset"),
    _p("string", "market"),
    _p("bool", "isLong"),
    _p("uint256", "size"),
    _p("uint256", "margin"),
    _p("int256", "fundingTracker"),
    _p("uint256", "price"),
    _p("uint256", "timestamp"),
]

MARKET_COMPONENTS = [
    _p("string", "name"),
    _p("string", "category"),
    _p("address", "chainlinkFeed"),
    _p("uint256", "maxLeverage"),
    _p("uint256", "maxDeviation"),
    _p("uint256", "fee"),
    _p("uint256", "liqThreshold"),
    _p("uint256", "fundingFactor"),
    _p("uint256", "minOrderAge"),
    _p("uint256", "pythMaxAge"),
    _p("bytes32", "pythFeed"),
    _p("bool", "allowChainlinkExecution"),
    _p("bool", "isReduceOnly"),
]

ERC20_ABI = [
    _fn("decimals", [], [_p("uint8")]),
    _fn("balanceOf", [_p("address", "account")], [_p("uint256")]),
    _fn("allowance", [_p("address", "owner"), _p("address", "spender")], [_p("uint256")]),
    _fn("approve", [_p("address", "spender"), _p("uint256", "amount")], [_p("bool")], "nonpayable"),
]

DATA_STORE_ABI = [
    _fn("getAddress", [_p("string", "key")], [_p("address")]),
]

ORDERS_ABI = [
    _fn(
        "submitSimpleOrders",
        [
            _p("tuple[]", "params", ORDER_COMPONENTS),
            _p("uint256[]", "orderIdsToCancel"),
        ],
        mutability="payable",
    ),
    _fn("cancelOrder", [_p("uint256", "orderId")], mutability="nonpayable"),
    _fn("cancelOrders", [_p("uint256[]", "orderIds")], mutability="nonpayable"),
]

ORDER_STORE_ABI = [
    _fn("getUserOrders", [_p("address", "user")], [_p("tuple[]", "", ORDER_COMPONENTS)]),
]

POSITIONS_ABI = [
    _fn(
        "addMargin",
        [_p("address", "asset"), _p("string", "market"), _p("uint256", "margin")],
        mutability="payable",
    ),
    _fn(
        "removeMargin",
        [
            _p("address", "asset"),
            _p("string", "market"),
            _p("uint256", "margin"),
            _p("bytes[]", "priceUpdateData"),
        ],
        mutability="payable",
    ),
    _fn(
        "closePositionWithoutProfit",
        [_p("address", "asset"), _p("string", "market"), _p("bytes[]", "priceUpdateData")],
        mutability="payable",
    ),
    _fn(
        "getPnL",
        [
            _p("address", "asset"),
            _p("string", "market"),
            _p("bool", "isLong"),
            _p("uint256", "price"),
            _p("uint256", "positionPrice"),
            _p("uint256", "size"),
            _p("int256", "fundingTracker"),
        ],
        [_p("int256", "pnl"), _p("int256", "fundingFee")],
    ),
]

POSITION_STORE_ABI = [
    _fn("getUserPositions", [_p("address", "user")], [_p("tuple[]", "", POSITION_COMPONENTS)]),
    _fn("getOI", [_p("address", "asset"), _p("string", "market")], [_p("uint256")]),
    _fn("getOILong", [_p("address", "asset"), _p("string", "market")], [_p("uint256")]),
    _fn("getOIShort", [_p("address", "asset"), _p("string", "market")], [_p("uint256")]),
]

MARKET_STORE_ABI = [
    _fn("getMarketList", [], [_p("string[]")]),
    _fn("get", [_p("string", "_market")], [_p("tuple", "", MARKET_COMPONENTS)]),
    _fn("getMany", [_p("string[]", "_markets")], [_p("tuple[]", "", MARKET_COMPONENTS)]),
]

POOL_ABI = [
    _fn(
        "deposit",
        [_p("address", "asset"), _p("uint256", "amount"), _p("uint256", "lockupPeriodIndex")],
        mutability="payable",
    ),
    _fn("withdraw", [_p("address", "asset"), _p("uint256", "amount")], mutability="nonpayable"),
    _fn(
        "getDepositTaxBps",
        [_p("address", "asset"), _p("uint256", "amount"), _p("uint256", "lockupPeriodIndex")],
        [_p("uint256")],
    ),
    _fn("getWithdrawalTaxBps", [_p("address", "asset"), _p("uint256", "amount")], [_p("uint256")]),
    _fn("getGlobalUPL", [_p("address", "asset")], [_p("int256")]),
]

POOL_STORE_ABI = [
    _fn("getBalance", [_p("address", "asset")], [_p("uint256")]),
    _fn("getUserClpBalance", [_p("address", "asset"), _p("address", "account")], [_p("uint256")]),
    _fn("getClpSupply", [_p("address", "asset")], [_p("uint256")]),
    _fn("getUnlockedClpBalance", [_p("address", "asset"), _p("address", "account")], [_p("uint256")]),
    _fn("getLockedClpBalance", [_p("address", "asset"), _p("address", "account")], [_p("uint256")]),
]

RISK_STORE_ABI = [
    _fn("getMaxOI", [_p("string", "market"), _p("address", "asset")], [_p("uint256")]),
    _fn("getMaxPositionSize", [_p("string", "market"), _p("address", "asset")], [_p("uint256")]),
]

FUNDING_STORE_ABI = [
    _fn("getFundingTracker", [_p("address", "asset"), _p("string", "market")], [_p("int256")]),
    _fn(
        "getLastCappedEmaFundingRate",
        [_p("address", "asset"), _p("string", "market")],
        [_p("int256")],
    ),
    _fn("getLastUpdated", [_p("address", "asset"), _p("string", "market")], [_p("uint256")]),
]

FUNDING_ABI = [
    _fn(
        "getRealTimeFundingTracker",
        [_p("address", "asset"), _p("string", "market")],
        [_p("int256")],
    ),
    _fn(
        "getAccruedFundingV2",
        [_p("address", "asset"), _p("string", "market"), _p("uint256", "intervals")],
        [_p("int256"), _p("int256"), _p("int256"), _p("int256")],
    ),
]
