from __future__ import annotations

import csv
import os
import random
import sys
from pathlib import Path

import psutil

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from fastapi.testclient import TestClient

from taskie.main import create_app

ITERATIONS = 1000
TASKS_PER_RUN = 40
OUTPUT = Path("benchmarks_greedy.csv")


def random_tasks(count: int) -> list[dict]:
    return [
        {
            "title": f"Benchmark task {index + 1:02d}",
            "duration_minutes": random.choice([15, 30, 45, 60, 90, 120, 180]),
            "importance": random.randint(1, 5),
        }
        for index in range(count)
    ]


def run_benchmark(*, iterations: int, filename: Path, client: TestClient) -> None:
    process = psutil.Process(os.getpid())
    rows: list[tuple[int, float, float, float, int]] = []
    for run_id in range(1, iterations + 1):
        cpu_before = process.cpu_times()

        response = client.post(
            "/api/v1/scheduler/run",
            json={"tasks": random_tasks(TASKS_PER_RUN), "days_to_schedule": 7, "persist": False},
        )
        response.raise_for_status()
        data = response.json()

        cpu_after = process.cpu_times()
        mem_info = process.memory_info()

        runtime_ms = float(data.get("runtime_ms", 0.0))
        cpu_time_ms = (
            (cpu_after.user + cpu_after.system)
            - (cpu_before.user + cpu_before.system)
        ) * 1000.0
        rss_mb = mem_info.rss / (1024 * 1024)

        rows.append((run_id, runtime_ms, cpu_time_ms, rss_mb, data["metrics"]["unscheduled_count"]))

    with filename.open("w", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(["run_id", "runtime_ms", "cpu_time_ms", "rss_mb", "unscheduled_count"])
        writer.writerows(rows)


def main() -> None:
    app = create_app()
    with TestClient(app) as client:
        run_benchmark(iterations=ITERATIONS, filename=OUTPUT, client=client)

    print(f"Greedy scheduler benchmark written to {OUTPUT}")


if __name__ == "__main__":
    main()
