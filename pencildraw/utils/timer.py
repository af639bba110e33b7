# pencildraw/utils/timer.py
import contextlib
import time
from collections import OrderedDict
from typing import Dict


class RenderTimer:
    """
    Wall-clock breakdown of a render, kept per pyramid level.

    Each level records the seconds spent in every stage and the number of
    pixels the convolution produced, so the summary can report throughput
    alongside the stage split. A single-scale render is level 1.
    """

    def __init__(self):
        self.levels: Dict[int, Dict] = OrderedDict()

    def reset(self):
        self.levels.clear()

    def _level(self, level: int) -> Dict:
        if level not in self.levels:
            self.levels[level] = {"stages": OrderedDict(), "pixels": 0}
        return self.levels[level]

    @contextlib.contextmanager
    def stage(self, name: str, level: int = 1):
        entry = self._level(level)
        start = time.perf_counter()
        try:
            yield
        finally:
            stages = entry["stages"]
            stages[name] = stages.get(name, 0.0) + time.perf_counter() - start

    def add_pixels(self, level: int, count: int):
        self._level(level)["pixels"] += count

    def level_time(self, level: int) -> float:
        return sum(self.levels[level]["stages"].values())

    def throughput(self, level: int) -> float:
        """Convolved pixels per second of LIC time at `level` (0 when unknown)."""
        entry = self.levels[level]
        lic_time = entry["stages"].get("lic", 0.0)
        return entry["pixels"] / lic_time if lic_time > 0 else 0.0

    def total_time(self) -> float:
        return sum(self.level_time(level) for level in self.levels)

    def print_summary(self, title: str = "Pencil Drawing Timing Summary"):
        print(f"\n{title}")
        print("=" * len(title))
        total = self.total_time()
        for level, entry in self.levels.items():
            level_time = self.level_time(level)
            share = level_time / total * 100 if total > 0 else 0.0
            print(
                f"  level {level}: {level_time:.4f}s ({share:.1f}%), "
                f"{entry['pixels']} px, {self.throughput(level) / 1e6:.3f} Mpx/s"
            )
            for name, seconds in entry["stages"].items():
                print(f"    {name:<22} {seconds:.4f}s")
        print(f"  {'TOTAL':<28} {total:.4f}s")
