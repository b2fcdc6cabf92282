from __future__ import annotations

import sys
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from farmhand.save_state import SaveError, load_game
from farmhand.utils import money_total

DEFAULT_OUTPUT = "farmhand_ledger.png"


def ledger_series(state: dict) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Return (days, revenues, losses, profits) for the recorded history, oldest
    day first. Losses are reported as positive amounts.
    """
    revenues = np.array(state.get("historical_daily_revenues", [])[::-1], dtype=float)
    losses = np.array(state.get("historical_daily_losses", [])[::-1], dtype=float)
    length = min(len(revenues), len(losses))
    revenues = revenues[-length:] if length else np.zeros(0)
    losses = -losses[-length:] if length else np.zeros(0)
    last_day = int(state.get("day_count", 0)) - 1
    days = np.arange(last_day - length + 1, last_day + 1)
    return days, revenues, losses, revenues - losses


def _best_day(days: np.ndarray, profits: np.ndarray) -> tuple[int, float]:
    idx = int(np.argmax(profits))
    return int(days[idx]), float(profits[idx])


def main() -> int:
    if len(sys.argv) not in (2, 3):
        print("Usage: python -m farmhand.ledger_chart path/to/save.json [output.png]")
        return 2

    save_path = sys.argv[1]
    output_path = sys.argv[2] if len(sys.argv) == 3 else DEFAULT_OUTPUT

    try:
        state = load_game(save_path)
    except SaveError as exc:
        print(f"error: {exc}")
        return 1

    days, revenues, losses, profits = ledger_series(state)
    print(f"day {state['day_count']}: money=${state['money']:,.2f} loan=${state['loan_balance']:,.2f}")
    if days.size == 0:
        print("no financial history recorded yet.")
        return 0

    best_day, best_profit = _best_day(days, profits)
    print(f"last {days.size} days: revenue ${money_total(*revenues):,.2f}, losses ${money_total(*losses):,.2f}")
    print(f"best day: {best_day} (${best_profit:,.2f})")
    print(f"record single-day profit: ${state.get('record_single_day_profit', 0):,.2f}")
    print(f"record seven-day profit: ${state.get('record_seven_day_profit', 0):,.2f}")

    width = 0.4
    fig, ax = plt.subplots(figsize=(10, 6))
    ax.bar(days - width / 2, revenues, width=width, label="revenue")
    ax.bar(days + width / 2, losses, width=width, label="losses")
    ax.plot(days, profits, label="profit", linewidth=2, color="black", marker="o")
    ax.axhline(0, color="gray", linewidth=1)
    ax.scatter([best_day], [best_profit], s=60, zorder=3)
    ax.set_title("Farm ledger (last seven days)")
    ax.set_xlabel("Day")
    ax.set_ylabel("Dollars")
    ax.set_xticks(days)
    ax.legend()
    ax.grid(True, alpha=0.2)

    output_path = str(Path(output_path))
    fig.tight_layout()
    fig.savefig(output_path, dpi=200)
    print(f"\nchart saved to {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
