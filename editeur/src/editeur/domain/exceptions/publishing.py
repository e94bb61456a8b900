"""
Publish orchestration exceptions.

Both leave the ledger with the fee already charged and require
manual reconciliation.
"""

from typing import Optional

from editeur.domain.exceptions.base import EditeurException


class PublishFailedError(EditeurException):
    """Raised when a publish step after the fee commitment point fails."""

    def __init__(
        self,
        step: str,
        reason: str,
        retryable: bool = False,
        fee_charged: Optional[int] = None,
    ):
        super().__init__(
            f"Publish failed at step '{step}': {reason}",
            code="PUBLISH_FAILED",
            details={
                "step": step,
                "reason": reason,
                "retryable": retryable,
                "feeCharged": None if fee_charged is None else str(fee_charged),
            },
        )
        self.step = step
        self.reason = reason
        self.retryable = retryable
        self.fee_charged = fee_charged


class AmbiguousOutcomeError(EditeurException):
    """Raised when a chain-B finalization wait timed out.

    The transaction may or may not have landed; it must not be resubmitted.
    """

    def __init__(
        self,
        step: str,
        digest: Optional[str],
        fee_charged: Optional[int] = None,
    ):
        super().__init__(
            f"Outcome of '{step}' transaction is unknown (digest {digest}); "
            "do not resubmit",
            code="AMBIGUOUS_OUTCOME",
            details={
                "step": step,
                "digest": digest,
                "feeCharged": None if fee_charged is None else str(fee_charged),
            },
        )
        self.step = step
        self.digest = digest
        self.fee_charged = fee_charged
