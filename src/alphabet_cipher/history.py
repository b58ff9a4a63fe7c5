import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

HISTORY_PATH = Path.home() / ".alphabet_cipher_history.jsonl"


def log_event(action: str, payload: Dict[str, Any], path: Path = HISTORY_PATH) -> None:
    """
    Append a simple JSON line to history for traceability.
    """
    record = {"action": action, "time": time.strftime("%Y-%m-%dT%H:%M:%S"), **payload}
    try:
        with path.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(record, ensure_ascii=False) + "\n")
    except OSError:
        # History failures should not break core functionality.
        pass


def read_history(path: Path = HISTORY_PATH, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """Return recorded events, oldest first; `limit` keeps only the newest ones."""
    if not path.exists():
        return []
    records: List[Dict[str, Any]] = []
    with path.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            try:
                item = json.loads(line)
            except ValueError:
                continue
            if isinstance(item, dict):
                records.append(item)
    if limit is not None:
        records = records[-limit:] if limit > 0 else []
    return records
