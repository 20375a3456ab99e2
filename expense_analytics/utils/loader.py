import csv
import json
import logging
from pathlib import Path
from typing import List, Union

from expense_analytics.core.exceptions import InvalidArgument
from expense_analytics.models.expense import ExpenseRecord
from expense_analytics.utils.records import ensure_records

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> List[dict]:
    try:
        with path.open(encoding="utf-8") as fp:
            data = json.load(fp)
    except UnicodeDecodeError as exc:
        raise InvalidArgument(f"{path} is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise InvalidArgument(f"Malformed JSON in {path}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("expenses")
    if not isinstance(data, list):
        raise InvalidArgument(f"{path} must contain a list of expenses or an 'expenses' key")
    return data


def _read_csv(path: Path) -> List[dict]:
    try:
        with path.open(encoding="utf-8", newline="") as fp:
            # Blank cells fall back to the model defaults.
            return [{k: v for k, v in row.items() if v not in ("", None)} for row in csv.DictReader(fp)]
    except UnicodeDecodeError as exc:
        raise InvalidArgument(f"{path} is not valid UTF-8: {exc}") from exc


def load_records(path: Union[str, Path]) -> List[ExpenseRecord]:
    source = Path(path)
    if not source.exists():
        raise InvalidArgument(f"Records file not found: {source}")

    suffix = source.suffix.lower()
    if suffix == ".json":
        rows = _read_json(source)
    elif suffix == ".csv":
        rows = _read_csv(source)
    else:
        raise InvalidArgument(f"Unsupported records file type: {suffix or source.name}")

    records = ensure_records(rows)
    logger.info(f"Loaded {len(records)} expense records from {source}")
    return records
