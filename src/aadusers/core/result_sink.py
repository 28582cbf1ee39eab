# src/aadusers/core/result_sink.py
from __future__ import annotations
import pathlib, sys, time
from typing import Any, Dict, Optional, Protocol

from aadusers.core.cache import read_json, write_json_atomic


class ResultSink(Protocol):
    def write(self, identity: str, data: Dict[str, Any]) -> None: ...


class MemorySink:
    """Keeps the last committed result in memory."""
    def __init__(self):
        self.id: Optional[str] = None
        self.data: Dict[str, Any] = {}
        self.writes = 0

    def write(self, identity: str, data: Dict[str, Any]) -> None:
        self.id = identity
        self.data = dict(data)
        self.writes += 1


class JsonFileSink:
    """Persists the result as {"id", "fetched_at", ...state} via an atomic replace."""
    def __init__(self, path: str | pathlib.Path):
        self.path = pathlib.Path(path)

    def write(self, identity: str, data: Dict[str, Any]) -> None:
        out: Dict[str, Any] = {
            "id": identity,
            "fetched_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        }
        out.update(data)
        write_json_atomic(self.path, out)
        print(f"[result_sink] wrote {self.path}", file=sys.stderr)

    def read(self) -> Optional[Dict[str, Any]]:
        return read_json(self.path)
