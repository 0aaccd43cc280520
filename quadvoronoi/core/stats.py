"""Insertion statistics for a triangulation and a small table formatter."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any


@dataclass
class InsertionStats:
    attempts: int = 0
    inserted: int = 0
    duplicates: int = 0
    on_edge: int = 0
    flips: int = 0
    walk_steps: int = 0
    bbox_resizes: int = 0
    # Timing (seconds)
    time_total: float = 0.0
    time_max: float = 0.0
    time_min: float = 0.0  # 0 means uninitialized

    def record_time(self, dt: float):
        self.time_total += dt
        if dt > self.time_max:
            self.time_max = dt
        if self.time_min == 0.0 or dt < self.time_min:
            self.time_min = dt

    def to_dict(self) -> Dict[str, Any]:
        return {
            'attempts': self.attempts,
            'inserted': self.inserted,
            'duplicates': self.duplicates,
            'on_edge': self.on_edge,
            'flips': self.flips,
            'walk_steps': self.walk_steps,
            'bbox_resizes': self.bbox_resizes,
            'duplicate_rate': (self.duplicates / self.attempts) if self.attempts else 0.0,
            'flips_per_insert': (self.flips / self.inserted) if self.inserted else 0.0,
            'walk_per_attempt': (self.walk_steps / self.attempts) if self.attempts else 0.0,
            'time_total': self.time_total,
            'time_max': self.time_max,
            'time_min': self.time_min,
            'time_avg': (self.time_total / self.attempts) if self.attempts else 0.0,
        }


def format_stats_table(stats_dict) -> str:
    """Return a human readable multi-line table summarizing insertion stats.

    ``stats_dict`` maps a label (e.g. one per layer) to ``InsertionStats.to_dict()``.
    """
    if not stats_dict:
        return "<no stats>"
    header = ["run", "attempts", "ins", "dup", "onEdge", "flips", "walk/pt", "avg_ms", "max_ms"]
    rows = []
    for label in sorted(stats_dict.keys()):
        s = stats_dict[label]
        rows.append([
            str(label), str(s['attempts']), str(s['inserted']), str(s['duplicates']),
            str(s['on_edge']), str(s['flips']), f"{s['walk_per_attempt']:7.2f}",
            f"{s['time_avg'] * 1000.0:8.3f}", f"{s['time_max'] * 1000.0:8.3f}"
        ])
    col_w = [len(h) for h in header]
    for r in rows:
        for i, v in enumerate(r):
            if len(v) > col_w[i]: col_w[i] = len(v)
    def fmt(r):
        return " ".join(r[i].rjust(col_w[i]) for i in range(len(r)))
    lines = [fmt(header), "-" * (sum(col_w) + len(col_w) - 1)] + [fmt(r) for r in rows]
    return "\n".join(lines)


__all__ = ["InsertionStats", "format_stats_table"]
