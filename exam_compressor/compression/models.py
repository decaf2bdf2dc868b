from dataclasses import dataclass
from enum import Enum


class OutcomeStatus(str, Enum):
    COMPRESSED = "compressed"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass(frozen=True)
class CompressionOutcome:
    """Result of dispatching one file to a compression strategy.

    A degraded outcome means the strategy failed and the original bytes were
    stored instead, so `size_bytes` equals the original size. Only a failed
    outcome leaves no artifact behind.
    """

    status: OutcomeStatus
    strategy: str
    size_bytes: int | None = None
    reason: str = ""

    @classmethod
    def compressed(cls, strategy: str, size_bytes: int) -> "CompressionOutcome":
        return cls(status=OutcomeStatus.COMPRESSED, strategy=strategy, size_bytes=size_bytes)

    @classmethod
    def degraded(
        cls, strategy: str, original_size: int, reason: str
    ) -> "CompressionOutcome":
        return cls(
            status=OutcomeStatus.DEGRADED,
            strategy=strategy,
            size_bytes=original_size,
            reason=reason,
        )

    @classmethod
    def failed(cls, strategy: str, reason: str) -> "CompressionOutcome":
        return cls(status=OutcomeStatus.FAILED, strategy=strategy, reason=reason)

    @property
    def has_artifact(self) -> bool:
        return self.status is not OutcomeStatus.FAILED
