import os
import sys
import time
from statistics import mean, pstdev

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from mazegen.dungeon import Dungeon, GeneratorConfig  # noqa: E402

SEEDS = [11, 222, 3333, 4444, 55555, 67890, 72223, 88888, 99999, 123456]
CONFIG = GeneratorConfig(width=160, height=90)


def run():
    runtimes = []
    for s in SEEDS:
        t0 = time.perf_counter()
        d = Dungeon(config=CONFIG, seed=s)
        rt = (time.perf_counter() - t0) * 1000
        phases = d.metrics.get("phase_ms", {}) if d.enable_metrics else {}
        print(f"seed={s} ms={rt:.1f} rooms={len(d.rooms)} phases={phases}")
        runtimes.append(rt)
    print("\nSummary:")
    print(
        f"count={len(runtimes)} avg_ms={mean(runtimes):.1f} sd_ms={pstdev(runtimes):.1f} min_ms={min(runtimes):.1f} max_ms={max(runtimes):.1f}"
    )


if __name__ == "__main__":
    run()
