# delivery_lab/plots/plotting.py
# Bar charts of benchmark rows (see benchmarks/run_all.py), one panel per measure.
from __future__ import annotations
import matplotlib.pyplot as plt

PANELS = (
    ("nodes_expanded", "Nodes Expanded"),
    ("cost", "Total Path Cost"),
    ("time_s", "Time (s)"),
    ("peak_kb", "Peak Memory (KB)"),
)

def bar_compare(rows, title="Strategy Comparison"):
    names = [r["algo"] for r in rows]
    fig, axs = plt.subplots(2, 2, figsize=(11, 8))
    for ax, (key, label) in zip(axs.ravel(), PANELS):
        ax.bar(names, [r.get(key) or 0 for r in rows])
        ax.set_title(label)
        ax.tick_params(axis="x", rotation=45)

    # solved/pairs above each cost bar
    for i, r in enumerate(rows):
        axs[0, 1].annotate(f"{r['solved']}/{r['pairs']}", (i, r["cost"]),
                           ha="center", va="bottom", fontsize=8)
    fig.suptitle(title)
    fig.tight_layout(rect=[0, 0, 1, 0.95])
    return fig

def save_comparison(rows, path, title="Strategy Comparison"):
    fig = bar_compare(rows, title=title)
    fig.savefig(path, dpi=160)
    plt.close(fig)
    return path
