import logging
import math
import pandas as pd
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional
from ..models.post import FLOAT_FIELDS, INTEGER_FIELDS, REQUIRED_FIELDS, STRING_FIELDS, Post
from ..utils.exceptions import CSVParseError

logger = logging.getLogger(__name__)


@dataclass
class ColumnCheck:
    """Outcome of checking a CSV header for the required columns."""
    missing: List[str] = field(default_factory=list)
    available: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.missing


class DataService:
    @staticmethod
    def safe_int(value, default=0):
        """Safely convert value to int, handling NaN, None and junk strings"""
        if value is None:
            return default
        if isinstance(value, str) and value.strip() == '':
            return default
        try:
            if pd.isna(value):
                return default
        except (TypeError, ValueError):
            pass
        try:
            # Go through float first so "12.0" and "1e3" are accepted
            float_val = float(value)
            if math.isnan(float_val) or math.isinf(float_val):
                return default
            return int(float_val)
        except (ValueError, TypeError, OverflowError):
            return default

    @staticmethod
    def safe_float(value, default=0.0):
        """Safely convert value to float, handling NaN, None and junk strings"""
        if value is None:
            return default
        if isinstance(value, str) and value.strip() == '':
            return default
        try:
            if pd.isna(value):
                return default
        except (TypeError, ValueError):
            pass
        try:
            result = float(value)
            if math.isnan(result) or math.isinf(result):
                return default
            return result
        except (ValueError, TypeError, OverflowError):
            return default

    @staticmethod
    def normalize_field_name(name: Any) -> str:
        return str(name).strip().lower()

    @staticmethod
    def parse_csv_file(file_path: str) -> List[Dict[str, str]]:
        """Read a CSV file into a list of raw string records, one per data row.

        Every cell is kept as text; short rows are padded with empty strings
        and fields past the last header column are dropped.
        A zero-byte file yields no records, like a header-only file.
        """
        try:
            df = pd.read_csv(
                file_path,
                engine='python',
                dtype=str,
                keep_default_na=False,
                index_col=False,
                # select every header column so longer rows are cut to the header width
                usecols=lambda column: True,
                encoding='utf-8-sig',
            )
        except pd.errors.EmptyDataError:
            logger.info("[DataService] CSV has no content: %s", file_path)
            return []
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise CSVParseError(f"Could not parse CSV file: {e}") from e

        df = df.fillna('')
        logger.info("[DataService] CSV loaded: %d rows, columns: %s", len(df), list(df.columns))
        return df.to_dict(orient='records')

    @staticmethod
    def build_column_map(columns: Iterable[str]) -> Dict[str, str]:
        """Map normalized column names to the raw header names.

        An exact header match is preferred; otherwise the first header whose
        trimmed, lower-cased form matches wins.
        """
        column_map: Dict[str, str] = {}
        raw_columns = [str(c) for c in columns]
        for raw in raw_columns:
            column_map.setdefault(DataService.normalize_field_name(raw), raw)
        for raw in raw_columns:
            if DataService.normalize_field_name(raw) == raw:
                column_map[raw] = raw
        return column_map

    @staticmethod
    def validate_columns(columns: Iterable[str]) -> ColumnCheck:
        """Check that every required field is present among the given columns."""
        available = [str(c) for c in columns]
        column_map = DataService.build_column_map(available)
        missing = [f for f in REQUIRED_FIELDS if f not in column_map]
        if missing:
            logger.warning("[DataService] Missing required fields %s. Available: %s", missing, available)
        return ColumnCheck(missing=missing, available=available)

    @staticmethod
    def normalize_record(
        raw: Mapping[str, Any],
        index: int,
        column_map: Optional[Dict[str, str]] = None,
    ) -> Post:
        """Turn one raw CSV record into a Post.

        ``index`` is the 1-based row position, used as the id when the row
        has no ``post_id``.
        """
        if column_map is None:
            column_map = DataService.build_column_map(raw.keys())

        def get_field(name: str):
            key = column_map.get(name)
            if key is None:
                return None
            return raw.get(key)

        values: Dict[str, Any] = {}
        for name in INTEGER_FIELDS:
            values[name] = DataService.safe_int(get_field(name), 0)
        for name in FLOAT_FIELDS:
            values[name] = DataService.safe_float(get_field(name), 0.0)
        for name in STRING_FIELDS:
            value = get_field(name)
            values[name] = '' if value is None else str(value)

        post_id = get_field('post_id')
        if post_id is None or str(post_id).strip() == '':
            post_id = index
        else:
            post_id = str(post_id)

        return Post(id=post_id, post_id=post_id, **values)

    @staticmethod
    def normalize_records(records: List[Mapping[str, Any]]) -> List[Post]:
        if not records:
            return []
        column_map = DataService.build_column_map(records[0].keys())
        return [
            DataService.normalize_record(raw, idx, column_map)
            for idx, raw in enumerate(records, start=1)
        ]
