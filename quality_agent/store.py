"""Result store: TTL key-value store for finished analyses.

Owned by the caller (web app, CLI session) and passed in explicitly:

    store = ResultStore(ttl=3600)
    run_id = store.put(result)
    store.get(run_id)      # raises ReportNotFoundError once expired
"""
from __future__ import annotations

import threading
import time
import uuid
from typing import Optional

from .errors import ReportNotFoundError
from .models import AnalysisResult

DEFAULT_TTL = 3600  # seconds


class ResultStore:
    def __init__(self, ttl: int = DEFAULT_TTL):
        self.ttl = ttl
        self._lock = threading.Lock()
        self._store: dict[str, tuple[float, AnalysisResult]] = {}  # id → (expires_at, result)

    @staticmethod
    def new_id() -> str:
        return f"report-{uuid.uuid4().hex[:12]}"

    def put(self, result: AnalysisResult, run_id: Optional[str] = None, ttl: Optional[int] = None) -> str:
        """Store ``result`` and return its run id."""
        run_id = run_id or self.new_id()
        expires = time.monotonic() + (self.ttl if ttl is None else ttl)
        with self._lock:
            self._purge()
            self._store[run_id] = (expires, result)
        return run_id

    def get(self, run_id: str) -> AnalysisResult:
        entry = self._store.get(run_id)
        if entry and entry[0] > time.monotonic():
            return entry[1]
        raise ReportNotFoundError(run_id)

    def __contains__(self, run_id: str) -> bool:
        entry = self._store.get(run_id)
        return bool(entry and entry[0] > time.monotonic())

    def __len__(self) -> int:
        now = time.monotonic()
        return sum(1 for expires, _ in self._store.values() if expires > now)

    def invalidate(self, *run_ids: str):
        """Drop the given runs. Pass no args to clear all."""
        with self._lock:
            if not run_ids:
                self._store.clear()
            else:
                for k in run_ids:
                    self._store.pop(k, None)

    def _purge(self):
        now = time.monotonic()
        for k in [k for k, (expires, _) in self._store.items() if expires <= now]:
            del self._store[k]
