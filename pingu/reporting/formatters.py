"""Plain text formatters for CLI output."""

from pingu.models.amounts import from_scaled
from pingu.models.market import MarketInfo
from pingu.models.order import Order, Position
from pingu.models.reporting import FundingScan

TOP_N = 10


def format_funding_scan(scan: FundingScan, top: int = TOP_N) -> str:
    lines = [
        f"=== Funding Scan ({scan.asset}) | threshold {scan.threshold}% ===",
    ]
    anomalies = scan.anomalies
    if anomalies:
        lines.append(f"Anomalies (|rate| > {scan.threshold}%):")
        for s in anomalies:
            lines.append(
                f"  {s.market:<15} {s.rate:.6f}%  [{s.direction}]  ({s.category})"
            )
    else:
        lines.append("No anomalies detected.")

    lines.append(f"Top {top} by rate:")
    for s in scan.snapshots[:top]:
        lines.append(f"  {s.market:<15} {s.rate:+.6f}%  ({s.category})")

    lines.append(
        f"Markets scanned: {len(scan.snapshots)} | Anomalies: {len(anomalies)}"
    )
    if scan.skipped:
        lines.append(f"Skipped: {', '.join(scan.skipped)}")
    return "\n".join(lines)


def format_market(m: MarketInfo) -> str:
    lines = [
        f"{m.market} ({m.name}, {m.category})",
        f"  Max leverage: {m.max_leverage}x | Fee: {m.fee * 100:.2f}%",
        f"  Liq threshold: {m.liq_threshold * 100:.0f}% | "
        f"Funding factor: {m.funding_factor}",
        f"  Max deviation: {m.max_deviation * 100:.2f}% | "
        f"Min order age: {m.min_order_age}s | Pyth max age: {m.pyth_max_age}s",
        f"  Pyth feed: {m.pyth_feed}",
    ]
    if m.is_reduce_only:
        lines.append("  Reduce-only")
    return "\n".join(lines)


def format_market_row(m: MarketInfo) -> str:
    return f"  {m.market:<15} {m.category:<10} {m.max_leverage:>4}x  fee {m.fee * 100:.2f}%"


def format_position(p: Position, decimals: int) -> str:
    side = "LONG" if p.is_long else "SHORT"
    return (
        f"  {p.market:<15} {side:<5} size {from_scaled(p.size, decimals)} "
        f"margin {from_scaled(p.margin, decimals)} [{p.asset}] "
        f"{p.leverage:.2f}x @ {from_scaled(p.price, 18)}"
    )


def format_order(o: Order, decimals: int) -> str:
    side = "LONG" if o.is_long else "SHORT"
    flags = " reduce-only" if o.is_reduce_only else ""
    return (
        f"  #{o.order_id} {o.market:<15} {side:<5} {o.order_type.name} "
        f"size {from_scaled(o.size, decimals)} margin {from_scaled(o.margin, decimals)} "
        f"[{o.asset}] @ {from_scaled(o.price, 18)}{flags}"
    )
