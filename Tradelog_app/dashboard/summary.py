# Tradelog_app/dashboard/summary.py

from dataclasses import dataclass


@dataclass(frozen=True)
class SummaryStats:
    total_trades: int
    wins: int
    win_rate: float      # percent, 0 when there are no trades
    avg_return: float    # mean return_pct
    total_pl: float


def compute_summary(trades):
    total = len(trades)
    wins = sum(1 for t in trades if t.pl > 0)
    total_pl = sum(t.pl for t in trades)
    avg_return = sum(t.return_pct for t in trades) / total if total else 0.0
    win_rate = wins / total * 100 if total else 0.0
    return SummaryStats(
        total_trades=total,
        wins=wins,
        win_rate=win_rate,
        avg_return=avg_return,
        total_pl=total_pl,
    )


def format_signed_money(value):
    return f"{'+' if value >= 0 else '-'}${abs(value):.2f}"


def format_signed_pct(value):
    return f"{'+' if value >= 0 else ''}{value:.2f}%"


def format_summary(stats):
    """Display strings for the summary cards"""
    return {
        'Total Trades': str(stats.total_trades),
        'Win Rate': f"{stats.win_rate:.1f}%",
        'Avg Return': format_signed_pct(stats.avg_return),
        'Total P/L': format_signed_money(stats.total_pl),
    }
