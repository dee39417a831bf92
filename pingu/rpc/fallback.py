"""Retry-across-endpoints executor for remote calls."""

import logging
import threading
from collections.abc import Callable
from typing import TypeVar

from pingu.rpc.classifier import BusinessRejection, classify
from pingu.rpc.endpoint_pool import EndpointPool
from pingu.rpc.errors import (
    BusinessRejectionError,
    EndpointsExhaustedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FallbackExecutor:
    """Runs an operation against the active endpoint, failing over on transport errors.

    Each endpoint is tried at most once per outermost call, starting from the
    currently active one. Business rejections and local validation errors are
    raised on the first occurrence. Nested calls (an operation that itself
    resolves an address) run directly; the outermost call owns the retry budget.
    Nesting is tracked per thread, so reads issued from several threads at once
    each get their own failover.

    The operation must be safe to run more than once and must fetch handles
    from the pool on every attempt, never reuse ones captured earlier.
    """

    def __init__(self, pool: EndpointPool):
        self.pool = pool
        self._local = threading.local()

    def run(self, operation: Callable[[], T], label: str = "rpc call") -> T:
        if getattr(self._local, "depth", 0) > 0:
            return operation()

        total = self.pool.size
        last_error: Exception | None = None
        self._local.depth = 1
        try:
            for attempt in range(1, total + 1):
                try:
                    return operation()
                except (ValidationError, BusinessRejectionError):
                    raise
                except Exception as e:
                    classification = classify(e)
                    if isinstance(classification, BusinessRejection):
                        logger.info(
                            "%s rejected by ledger: %s", label, classification.code
                        )
                        raise BusinessRejectionError(
                            classification.code, classification.message
                        ) from e

                    last_error = e
                    logger.warning(
                        "%s failed on %s (attempt %d/%d): %s",
                        label, self.pool.state.active_endpoint, attempt, total, e,
                    )
                    if attempt < total:
                        self.pool.switch_to_next()
        finally:
            self._local.depth = 0

        logger.error("%s failed on all %d RPC endpoints", label, total)
        raise EndpointsExhaustedError(total, last_error) from last_error
