#!/usr/bin/env python3
"""
Explanation service client.

After a path run the viewer can ask an external text service to explain
the run. The request is fire-and-forget: it runs on a daemon thread, the
answer is queued, and the frame loop picks it up with poll(). Whatever
goes wrong (bad URL, no network, HTTP error, bad JSON) becomes an "unavailable"
explanation; nothing here touches the grid or the algorithms.
"""

import queue
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from mazeviz.core.types import RunStats

UNAVAILABLE_TEXT = "Explanation unavailable."


@dataclass(frozen=True)
class Explanation:
    algorithm: str
    what_algorithm_does: str = ""
    what_happened_this_run: str = ""
    comparison: str = ""
    unavailable: bool = False
    run_id: int = 0


def build_payload(algorithm: str, maze: Optional[str], stats: RunStats,
                  extra_context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {
        "algorithm": algorithm,
        "maze": maze,
        "stats": {
            "visitedCount": stats.visited_count,
            "pathLength": stats.path_length,
            "runtimeMs": stats.runtime_ms,
        },
        "extraContext": extra_context or {},
    }


def parse_response(algorithm: str, data: Any, run_id: int = 0) -> Explanation:
    if not isinstance(data, dict):
        raise ValueError("explanation response is not a JSON object")
    return Explanation(
        algorithm=algorithm,
        what_algorithm_does=str(data.get("whatAlgorithmDoes", "")),
        what_happened_this_run=str(data.get("whatHappenedThisRun", "")),
        comparison=str(data.get("comparison", "")),
        run_id=run_id,
    )


class Explainer:
    def __init__(self, url: Optional[str], timeout: float = 10.0):
        self.url = url
        self.timeout = timeout
        self.results: "queue.Queue[Explanation]" = queue.Queue()

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    def request(self, algorithm: str, maze: Optional[str], stats: RunStats,
                extra_context: Optional[Dict[str, Any]] = None,
                run_id: int = 0) -> Optional[threading.Thread]:
        """Start a background request; returns the worker thread, or None when disabled.

        `run_id` is copied onto the queued Explanation so the caller can tell
        a late answer for an older run from the answer it is waiting for.
        """
        if not self.enabled:
            return None
        payload = build_payload(algorithm, maze, stats, extra_context)
        worker = threading.Thread(target=self._worker_run, args=(algorithm, payload, run_id), daemon=True)
        worker.start()
        return worker

    def _worker_run(self, algorithm: str, payload: Dict[str, Any], run_id: int) -> None:
        try:
            resp = requests.post(self.url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            result = parse_response(algorithm, resp.json(), run_id)
        except (requests.exceptions.RequestException, ValueError) as ex:
            print(f"Explanation request failed: {ex}")
            result = Explanation(algorithm=algorithm, unavailable=True, run_id=run_id)
        self.results.put(result)

    def poll(self) -> Optional[Explanation]:
        try:
            return self.results.get_nowait()
        except queue.Empty:
            return None
