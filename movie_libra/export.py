"""
Export module.
Writes movie collections in the two formats DataLoader reads back.
"""

import csv  # pipe-delimited output
import json  # structured-text output
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Union

from loguru import logger

from .models import FIELDS, Movie

Record = Union[Movie, Mapping[str, Any]]


def _as_dict(record: Record) -> Dict[str, Any]:
	"""Symbolic-key mapping for either a Movie or a raw fetcher mapping."""
	if isinstance(record, Movie):
		return record.to_dict()
	data = {key: record.get(key) for key in FIELDS}
	if isinstance(data['date'], date):
		data['date'] = data['date'].isoformat()
	return data


def export_json(records: Iterable[Record], path) -> Path:
	"""Write an indented JSON array of objects and return the path written."""
	path = Path(path)
	rows: List[Dict[str, Any]] = [_as_dict(r) for r in records]
	path.parent.mkdir(parents=True, exist_ok=True)
	with open(path, 'w', encoding='utf-8') as f:
		json.dump(rows, f, ensure_ascii=False, indent=2)
	logger.info(f"[Export] Wrote {len(rows)} movies to {path}")
	return path


def export_csv(records: Iterable[Record], path) -> Path:
	"""
	Write a '|'-delimited file with a header row.
	Sequences are joined with ',' and None becomes an empty cell.
	"""
	path = Path(path)
	rows = [_as_dict(r) for r in records]
	path.parent.mkdir(parents=True, exist_ok=True)
	with open(path, 'w', encoding='utf-8', newline='') as f:
		writer = csv.writer(f, delimiter='|')
		writer.writerow(FIELDS)
		for row in rows:
			writer.writerow([_cell(row[key]) for key in FIELDS])
	logger.info(f"[Export] Wrote {len(rows)} movies to {path}")
	return path


def _cell(value) -> str:
	if value is None:
		return ''
	if isinstance(value, (list, tuple)):
		return ','.join(str(v) for v in value)
	return str(value)
