# Path: bom_pivot/loaders/record_reader.py
"""
Record Reader for bom_pivot

Reads dimension and fact records from files into lists of dicts.
Format is taken from the file suffix:
- .json: a list of records, or an object with a 'records' (or 'data') list
- .ndjson / .jsonl: one JSON record per line
- .csv: header row plus one record per row

The engine itself never touches files; this reader only materializes
records for the CLI and for callers that keep data on disk.
"""

import csv
import json
from pathlib import Path
from typing import Any, Optional, Union

from constants import RecordFormat, RECORD_FILE_SUFFIXES
from core.logger import get_input_logger

logger = get_input_logger('record_reader')

JSON_RECORD_KEYS = ('records', 'data')


class RecordReadError(ValueError):
    """Raised when a record file cannot be interpreted."""


def detect_format(file_path: Path) -> RecordFormat:
    """
    Record format from the file suffix.

    Raises:
        RecordReadError: If the suffix is not supported
    """
    record_format = RECORD_FILE_SUFFIXES.get(file_path.suffix.lower())
    if record_format is None:
        raise RecordReadError(f"Unsupported record file type: {file_path.name}")
    return record_format


def read_records(
    file_path: Union[str, Path],
    record_format: Optional[RecordFormat] = None,
) -> list[dict[str, Any]]:
    """
    Read all records of a file.

    Args:
        file_path: Path to the record file
        record_format: Override the suffix-based format

    Returns:
        List of record dicts

    Raises:
        FileNotFoundError: If the file does not exist
        RecordReadError: If the content does not hold records
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Record file not found: {file_path}")

    record_format = record_format or detect_format(file_path)

    if record_format is RecordFormat.CSV:
        records = _read_csv(file_path)
    elif record_format is RecordFormat.NDJSON:
        records = _read_ndjson(file_path)
    else:
        records = _read_json(file_path)

    logger.info(f"Read {len(records)} records from {file_path.name}")
    return records


def _read_json(file_path: Path) -> list[dict[str, Any]]:
    with open(file_path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise RecordReadError(f"JSON decode error in {file_path}: {e}") from e

    if isinstance(data, dict):
        for key in JSON_RECORD_KEYS:
            if isinstance(data.get(key), list):
                data = data[key]
                break

    if not isinstance(data, list):
        raise RecordReadError(f"No record list in {file_path}")

    return [record for record in data if isinstance(record, dict)]


def _read_ndjson(file_path: Path) -> list[dict[str, Any]]:
    records = []
    with open(file_path, 'r', encoding='utf-8') as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                logger.warning(f"Skipping malformed line {line_number} in {file_path.name}")
                continue
            if isinstance(record, dict):
                records.append(record)
    return records


def _read_csv(file_path: Path) -> list[dict[str, Any]]:
    with open(file_path, 'r', encoding='utf-8', newline='') as f:
        reader = csv.DictReader(f)
        return [
            {key: (value if value != '' else None) for key, value in row.items()}
            for row in reader
        ]


__all__ = [
    'RecordReadError',
    'detect_format',
    'read_records',
]
