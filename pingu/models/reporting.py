"""Reporting models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FundingSnapshot:
    market: str
    rate: float  # percent per 8 h; positive means longs pay
    category: str

    @property
    def direction(self) -> str:
        return "LONGS PAY" if self.rate > 0 else "SHORTS PAY"


@dataclass
class FundingScan:
    asset: str
    threshold: float
    snapshots: list[FundingSnapshot] = field(default_factory=list)  # sorted by |rate|, desc
    skipped: list[str] = field(default_factory=list)

    @property
    def anomalies(self) -> list[FundingSnapshot]:
        return [s for s in self.snapshots if abs(s.rate) > self.threshold]
