"""Exception hierarchy for client operations."""


class PinguError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(PinguError):
    """Local validation failure. Never reaches the network."""


class BusinessRejectionError(PinguError):
    """The ledger deterministically refused an operation with a reason code."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code


class EndpointsExhaustedError(PinguError):
    """Every configured RPC endpoint failed with a transport error."""

    def __init__(self, endpoint_count: int, last_error: BaseException | None):
        last_message = "unknown"
        if last_error is not None:
            last_message = getattr(last_error, "message", None) or str(last_error)
        super().__init__(
            f"All {endpoint_count} RPC endpoints failed. Last error: {last_message}"
        )
        self.endpoint_count = endpoint_count
        self.last_error = last_error


class TransactionRevertedError(PinguError):
    """A transaction was mined but reverted (receipt status 0)."""

    def __init__(self, tx_hash: str):
        super().__init__(f"Transaction {tx_hash} reverted on-chain")
        self.tx_hash = tx_hash


class PriceFeedError(PinguError):
    """Fetching or decoding a price update payload failed."""


class OperationError(PinguError):
    """A public operation failed; wraps the classified cause."""

    def __init__(self, operation: str, detail: str, cause: BaseException | None = None):
        super().__init__(f"Failed to {operation}: {detail}")
        self.operation = operation
        self.cause = cause
