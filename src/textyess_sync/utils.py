import json
import math
from datetime import datetime, timezone
from dateutil import parser as dtparser
from typing import Any, Optional


# two different fill-in dates expose input that lacks a full calendar date
_DEFAULT_A = datetime(1970, 1, 1)
_DEFAULT_B = datetime(1971, 2, 2)


def parse_iso_datetime(value: str) -> datetime:
	dt = dtparser.parse(value, default=_DEFAULT_A)
	if dt.date() != dtparser.parse(value, default=_DEFAULT_B).date():
		raise ValueError(f"incomplete date: {value!r}")
	return dt


def to_json(obj: Any) -> str:
	# unicode and "/" stay unescaped on the wire
	return json.dumps(obj, ensure_ascii=False, separators=(",", ":"), allow_nan=False)


def coerce_datetime_like(value: Any) -> Optional[datetime]:
	"""Accepts a datetime or a date string and returns datetime or None."""
	if value is None:
		return None
	if isinstance(value, datetime):
		return value
	if isinstance(value, str):
		if not value.strip():
			return None
		try:
			return parse_iso_datetime(value)
		except (ValueError, OverflowError):
			return None
	return None


def format_iso8601(value: Any) -> str:
	dt = coerce_datetime_like(value)
	if dt is None:
		return ""
	# Magento stores timestamps in UTC without an offset
	if dt.tzinfo is None:
		dt = dt.replace(tzinfo=timezone.utc)
	return dt.isoformat()


def to_float(value: Any) -> float:
	if value is None or value == "":
		return 0.0
	try:
		result = float(value)
	except (TypeError, ValueError):
		return 0.0
	# NaN and infinities never reach the payload
	if not math.isfinite(result):
		return 0.0
	return result


def to_int(value: Any) -> int:
	return int(to_float(value))


def to_str(value: Any) -> str:
	return "" if value is None else str(value)
