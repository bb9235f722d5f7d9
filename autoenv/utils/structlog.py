from __future__ import annotations

import json
import time
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Optional


def _ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class BaseEvent:
    ts: int
    run_id: str
    step: str  # e.g., scan | file | render | write | error
    path: Optional[str] = None
    meta: Optional[dict[str, Any]] = None

    def to_jsonl(self) -> str:
        d = asdict(self)
        return json.dumps(d, ensure_ascii=False)


class StructLogger:
    def __init__(self, events_fp: Path, run_id: str) -> None:
        self.events_fp = events_fp
        self.run_id = run_id
        _ensure_dir(events_fp.parent)

    def _write(self, event: BaseEvent) -> None:
        with self.events_fp.open("a", encoding="utf-8") as f:
            f.write(event.to_jsonl() + "\n")

    # Scan started/finished for a root directory
    def log_scan(
        self, *, ts: int, root: Path, files: int, variables: Optional[int] = None
    ) -> None:
        self._write(
            BaseEvent(
                ts=ts,
                run_id=self.run_id,
                step="scan",
                path=str(root),
                meta={"files": files, "variables": variables},
            )
        )

    # Names contributed by one source file (first occurrences only)
    def log_file(self, *, ts: int, path: Path, names: list[str]) -> None:
        self._write(
            BaseEvent(
                ts=ts,
                run_id=self.run_id,
                step="file",
                path=str(path),
                meta={"names": names},
            )
        )

    # Merge outcome against the existing output file
    def log_render(
        self,
        *,
        ts: int,
        output: Path,
        merged: bool,
        keys: int,
        preserved: int,
        added: int,
    ) -> None:
        self._write(
            BaseEvent(
                ts=ts,
                run_id=self.run_id,
                step="render",
                path=str(output),
                meta={"merged": merged, "keys": keys, "preserved": preserved, "added": added},
            )
        )

    def log_write(self, *, ts: int, output: Path, nbytes: int) -> None:
        self._write(
            BaseEvent(ts=ts, run_id=self.run_id, step="write", path=str(output), meta={"bytes": nbytes})
        )

    def log_error(self, *, ts: int, path: Optional[Path], reason: str) -> None:
        self._write(
            BaseEvent(
                ts=ts,
                run_id=self.run_id,
                step="error",
                path=str(path) if path is not None else None,
                meta={"reason": reason},
            )
        )
