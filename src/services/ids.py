# src/services/ids.py
import threading
import time
from typing import Callable, Container

PROJECT_ID_PREFIX = "project-"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class ProjectIdGenerator:
    """
    Gera ids `project-<n>` estritamente crescentes.

    `n` segue o relógio em milissegundos; se o relógio não avançou (ou voltou)
    desde o último id emitido, usa o último valor + 1.
    """

    def __init__(self, clock: Callable[[], int] = _now_ms) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self, taken: Container[str] = ()) -> str:
        with self._lock:
            candidate = max(self._clock(), self._last + 1)
            while f"{PROJECT_ID_PREFIX}{candidate}" in taken:
                candidate += 1
            self._last = candidate
            return f"{PROJECT_ID_PREFIX}{candidate}"
