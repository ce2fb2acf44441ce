"""
BAC-over-time graph. Produces image file or returns data for web/iOS.
"""

from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Sequence, Tuple

from bac_estimator.calculations import Profile, bac_curve, hours_until_sober
from bac_estimator.drinks import DrinkEvent
from bac_estimator.status import DISPLAY, bands, describe


def curve_data(
    drinks: Sequence[DrinkEvent],
    profile: Profile,
    observed_at: datetime,
    step_hours: float = 0.25,
    max_hours: float = 12.0,
) -> List[Tuple[datetime, float]]:
    """(time, bac_percent) from the first drink until sober, capped at max_hours past it."""
    if not drinks:
        return []
    start = min(d.occurred_at for d in drinks)
    observed_offset = (observed_at - start).total_seconds() / 3600.0
    sober_offset = observed_offset + hours_until_sober(drinks, profile, observed_at)
    # Window is kept in float hours; sober_offset may be huge for extreme inputs.
    span = min(max(sober_offset, observed_offset, 0.0), max_hours)
    return bac_curve(drinks, profile, start, start + timedelta(hours=span), step_hours=step_hours)


def save_bac_graph(
    drinks: Sequence[DrinkEvent],
    profile: Profile,
    observed_at: datetime,
    output_path: str = "bac_graph.png",
    step_hours: float = 0.25,
    max_hours: float = 12.0,
    title: str = "BAC over time",
) -> str:
    """
    Plot BAC curve over shaded status bands and save to file.
    Returns path to saved file. Requires: pip install matplotlib
    """
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for save_bac_graph. pip install matplotlib")

    points = curve_data(drinks, profile, observed_at, step_hours=step_hours, max_hours=max_hours)
    if not points:
        origin = observed_at
        hours, bacs = [0.0], [0.0]
    else:
        origin = points[0][0]
        hours = [(t - origin).total_seconds() / 3600.0 for t, _ in points]
        bacs = [b for _, b in points]

    top = max(max(bacs) * 1.15, 0.06)
    fig, ax = plt.subplots(figsize=(10, 5))
    for lower, upper, level in bands():
        if lower >= top:
            break
        ax.axhspan(lower, min(upper, top), color=DISPLAY[level].color, alpha=0.12,
                   label=f"{describe(level)} ({lower:.2f}%+)")
    ax.plot(hours, bacs, color="#1e3a8a", linewidth=2, label="Estimated BAC")
    now_h = (observed_at - origin).total_seconds() / 3600.0
    if hours[0] <= now_h <= hours[-1]:
        ax.axvline(x=now_h, color="#475569", linestyle=":", linewidth=1, label="Now")
    ax.set_xlabel("Hours since first drink")
    ax.set_ylabel("BAC (%)")
    ax.set_title(title)
    ax.legend(loc="upper right", fontsize="small")
    ax.set_ylim(0, top)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
