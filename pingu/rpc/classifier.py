"""Failure classification: business rejection vs. transport failure.

A revert carrying a ``!code`` reason is a deterministic ledger decision and is
never retried against another endpoint. Everything else (timeouts, refused
connections, malformed responses, unknown exceptions) is a transport failure.
"""

import logging
import re
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from web3.exceptions import ContractLogicError

from pingu.rpc.errors import (
    BusinessRejectionError,
    OperationError,
    PinguError,
    ValidationError,
)

logger = logging.getLogger(__name__)

REVERT_MARKER = "execution reverted:"

REVERT_MESSAGES: dict[str, str] = {
    "!min-size": "Order size is below minimum for this asset",
    "!max-leverage": "Leverage exceeds the market's maximum",
    "!min-leverage": "Leverage is below the market minimum",
    "!margin": "Insufficient margin for this operation",
    "!max-oi": "Open interest limit reached for this market",
    "!max-size": "Position size exceeds the market maximum",
    "!paused": "Trading is paused",
    "!market": "Unknown or inactive market",
    "!market-reduce-only": "Market only accepts reduce-only orders",
    "!asset": "Asset is not supported",
    "!order": "Order not found",
    "!position": "No open position found",
    "!user": "Caller is not authorized for this order or position",
    "!tp-price": "Take-profit price is invalid",
    "!sl-price": "Stop-loss price is invalid",
    "!expiry": "Order expiry is invalid",
    "!pnl-positive": "Position must be in profit to close without profit",
    "!pool-balance": "Pool balance is insufficient",
    "!lockup": "Deposit is still locked",
    "!amount": "Amount must be greater than zero",
    "!value": "Transaction value does not cover margin and fee",
    "!stale-price": "Price update is stale",
}

_REVERT_CODE_RE = re.compile(re.escape(REVERT_MARKER) + r"\s*(![A-Za-z0-9][\w-]*)")
_KNOWN_CODE_RES = [
    (code, re.compile(r"(?<![\w-])" + re.escape(code) + r"(?![\w-])"))
    for code in sorted(REVERT_MESSAGES, key=len, reverse=True)
]


@dataclass(frozen=True)
class BusinessRejection:
    code: str
    message: str


@dataclass(frozen=True)
class TransportFailure:
    detail: str


Classification = BusinessRejection | TransportFailure


def classify(error: BaseException) -> Classification:
    """Decide whether a failure is a terminal rejection or worth a retry."""
    message = error_text(error)

    if isinstance(error, BusinessRejectionError):
        return BusinessRejection(code=error.code, message=message)

    # 1. Structured revert marker with a short reason code
    reason = _structured_reason(error)
    if reason is not None and reason.startswith("!"):
        return BusinessRejection(code=reason.split()[0], message=message)

    # 2. "execution reverted: !code" anywhere in the message
    match = _REVERT_CODE_RE.search(message)
    if match:
        return BusinessRejection(code=match.group(1), message=message)

    # 3. Heuristic: any known code in the message
    for code, pattern in _KNOWN_CODE_RES:
        if pattern.search(message):
            return BusinessRejection(code=code, message=message)

    return TransportFailure(detail=message or type(error).__name__)


def format_error_message(error: BaseException) -> str:
    """Human-readable explanation of a failure.

    Recognized rejection codes map to ``"<text> (<code>)"``, unmapped codes are
    returned raw, and any other error passes through verbatim.
    """
    if isinstance(error, PinguError) and not isinstance(error, BusinessRejectionError):
        return str(error)
    classification = classify(error)
    if isinstance(classification, TransportFailure):
        return error_text(error)
    text = REVERT_MESSAGES.get(classification.code)
    if text is None:
        return classification.code
    return f"{text} ({classification.code})"


def is_business_rejection(error: BaseException) -> bool:
    return isinstance(classify(error), BusinessRejection)


def error_text(error: BaseException) -> str:
    """The error's own message, without the args tuple some libraries add."""
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error)


def _structured_reason(error: BaseException) -> str | None:
    reason = getattr(error, "reason", None)
    if isinstance(reason, str) and reason:
        return reason.strip()
    if isinstance(error, ContractLogicError):
        text = error_text(error)
        if text.startswith(REVERT_MARKER):
            text = text[len(REVERT_MARKER):]
        return text.strip()
    return None


@contextmanager
def wrap_operation(operation: str) -> Iterator[None]:
    """Re-raise any failure of a public operation as OperationError.

    Local validation errors pass through unchanged.
    """
    try:
        yield
    except (ValidationError, OperationError):
        raise
    except Exception as e:
        detail = format_error_message(e)
        logger.error("Failed to %s: %s", operation, detail)
        raise OperationError(operation, detail, cause=e) from e
