"""Structured JSONL event logging for scrape runs."""
import json
import logging
import os
import re
import time

log = logging.getLogger(__name__)


def _safe_name(text: str) -> str:
    return re.sub(r"[^A-Za-z0-9._-]+", "_", text)[:80] or "run"


class RunEventLogger:
    """Writes one JSON line per event to a per-run JSONL file.

    All logging is best-effort — methods never raise exceptions.
    Supports context-manager protocol for automatic close.
    """

    def __init__(self, run_id: str, target_url: str, log_dir: str = "data/logs/scrape_events",
                 kind: str | None = None):
        self._run_id = run_id
        self._target_url = target_url
        self._kind = kind
        self._f = None
        self.path = ""
        try:
            os.makedirs(log_dir, exist_ok=True)
            self.path = os.path.join(log_dir, f"{_safe_name(run_id)}.jsonl")
            self._f = open(self.path, "a", encoding="utf-8")
        except Exception as e:
            log.warning(f"RunEventLogger: failed to open log file: {e}")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _write(self, event: dict):
        if self._f is None:
            return
        try:
            event["ts"] = time.time()
            event["run_id"] = self._run_id
            event["target_url"] = self._target_url
            if self._kind is not None:
                event["kind"] = self._kind
            self._f.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._f.flush()
        except Exception as e:
            log.warning(f"RunEventLogger: write failed: {e}")

    def log_run_start(self, cookie_count: int, config: dict):
        self._write({
            "event": "run_start",
            "cookie_count": cookie_count,
            "config": config,
        })

    def log_navigation_attempt(self, attempt: int, ok: bool, error: str | None = None):
        self._write({
            "event": "navigation_attempt",
            "attempt": attempt,
            "ok": ok,
            "error": error,
        })

    def log_reveal_step(self, step: int, delta: int, item_count: int | None = None):
        self._write({
            "event": "reveal_step",
            "step": step,
            "delta": delta,
            "item_count": item_count,
        })

    def log_extraction(self, record_count: int):
        self._write({
            "event": "extraction",
            "record_count": record_count,
        })

    def log_run_end(self, state: str, record_count: int, duration: float,
                    error: str | None = None):
        self._write({
            "event": "run_end",
            "state": state,
            "record_count": record_count,
            "duration": duration,
            "error": error,
        })

    def close(self):
        if self._f is not None:
            try:
                self._f.flush()
                self._f.close()
            except Exception:
                pass
            self._f = None
