"""Load local datasets from JSON or CSV files."""

from __future__ import annotations

import csv
import json
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Any

from ifbsync.contracts.dataset import LocalDataset
from ifbsync.contracts.exceptions import DatasetLoadError


class DatasetLoader:
    """Read a file into a :class:`LocalDataset`.

    JSON files hold either an array of objects or an object with ``columns``
    and ``rows`` (rows as arrays or objects). CSV files keep every value as
    text, with empty cells read as ``None``. Columns listed in
    *datetime_columns* are parsed from ISO-8601 strings.
    """

    def load(self, path: str | Path, *, datetime_columns: Iterable[str] = ()) -> LocalDataset:
        path = Path(path)
        if not path.is_file():
            raise DatasetLoadError(f"dataset file not found: {path}")

        if path.suffix.lower() == ".csv":
            dataset = self._load_csv(path)
        else:
            dataset = self._load_json(path)
        return self._parse_datetimes(dataset, list(datetime_columns), path)

    def _load_json(self, path: Path) -> LocalDataset:
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise DatasetLoadError(f"failed reading dataset file: {path}") from exc
        except json.JSONDecodeError as exc:
            raise DatasetLoadError(f"invalid JSON in dataset file: {path}") from exc

        if isinstance(payload, list):
            return self._build([self._expect_object(item, path) for item in payload], None, path)
        if isinstance(payload, dict) and isinstance(payload.get("columns"), list):
            columns = [str(column) for column in payload["columns"]]
            rows = payload.get("rows", [])
            if not isinstance(rows, list):
                raise DatasetLoadError(f"'rows' must be an array: {path}")
            records = [self._row_to_record(row, columns, path) for row in rows]
            return self._build(records, columns, path)
        raise DatasetLoadError(f"dataset must be an array of objects or have 'columns' and 'rows': {path}")

    def _load_csv(self, path: Path) -> LocalDataset:
        try:
            with path.open(newline="", encoding="utf-8-sig") as handle:
                reader = csv.DictReader(handle)
                columns = list(reader.fieldnames or [])
                records = [{key: (value if value != "" else None) for key, value in row.items()} for row in reader]
        except OSError as exc:
            raise DatasetLoadError(f"failed reading dataset file: {path}") from exc
        except csv.Error as exc:
            raise DatasetLoadError(f"invalid CSV in dataset file: {path}: {exc}") from exc
        return self._build(records, columns, path)

    @staticmethod
    def _build(records: list[dict[str, Any]], columns: list[str] | None, path: Path) -> LocalDataset:
        try:
            return LocalDataset.from_records(records, columns=columns)
        except ValueError as exc:
            raise DatasetLoadError(f"{exc}: {path}") from exc

    @staticmethod
    def _row_to_record(row: Any, columns: list[str], path: Path) -> dict[str, Any]:
        if isinstance(row, dict):
            return row
        if isinstance(row, list) and len(row) == len(columns):
            return dict(zip(columns, row, strict=True))
        raise DatasetLoadError(f"each row must be an object or an array of {len(columns)} values: {path}")

    @staticmethod
    def _expect_object(value: Any, path: Path) -> dict[str, Any]:
        if not isinstance(value, dict):
            raise DatasetLoadError(f"dataset rows must be JSON objects: {path}")
        return value

    @staticmethod
    def _parse_datetimes(dataset: LocalDataset, columns: list[str], path: Path) -> LocalDataset:
        if not columns:
            return dataset
        resolved = []
        for name in columns:
            column = dataset.find_column(name)
            if column is None:
                raise DatasetLoadError(f"datetime column {name!r} not found in {path}")
            resolved.append(column)

        rows = []
        for row in dataset.rows:
            parsed = dict(row)
            for column in resolved:
                value = parsed.get(column)
                if value is None or isinstance(value, datetime):
                    continue
                try:
                    parsed[column] = datetime.fromisoformat(str(value))
                except ValueError as exc:
                    raise DatasetLoadError(f"invalid datetime {value!r} in column {column!r}: {path}") from exc
            rows.append(parsed)
        return LocalDataset(columns=dataset.columns, rows=tuple(rows), kinds=dataset.kinds)
