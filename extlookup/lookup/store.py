"""Data file parsing with per-path memoization."""

import csv
import logging
import os
from enum import Enum
from typing import Any, Dict, MutableMapping, Optional

import yaml

from ..exceptions import DataFileParseError
from ..values import shape_row

logger = logging.getLogger(__name__)


class DataFormat(Enum):
    """Supported data file formats, keyed by file extension."""
    YAML = "yaml"
    CSV = "csv"

    @classmethod
    def from_path(cls, path: str) -> Optional["DataFormat"]:
        """Infer the format from the last extension of path, or None."""
        extension = os.path.basename(path).rsplit('.', 1)[-1].lower()
        for data_format in cls:
            if data_format.value == extension:
                return data_format
        return None


# Probe order for a precedence entry: structured wins over tabular
SEARCH_ORDER = (DataFormat.YAML, DataFormat.CSV)


class DataFileStore:
    """
    Parses data files into key/value mappings.

    Parsed content is memoized by absolute path in ``file_cache``, which
    the caller owns (normally a session LookupCache's ``files`` tier).
    Values are kept raw: tabular rows are already shaped, structured
    values are as parsed, and nothing is interpolated.
    """

    def __init__(self, file_cache: Optional[MutableMapping[str, Dict[str, Any]]] = None):
        self.file_cache = file_cache if file_cache is not None else {}

    def load(self, path: str) -> Dict[str, Any]:
        """
        Load a data file, reusing the cached parse when present.

        Args:
            path: Path to a .yaml or .csv data file

        Returns:
            Mapping from key to raw value

        Raises:
            DataFileParseError: If the file is malformed or has an
                unsupported extension
        """
        abs_path = os.path.abspath(path)
        if abs_path in self.file_cache:
            return self.file_cache[abs_path]

        data_format = DataFormat.from_path(abs_path)
        if data_format is DataFormat.CSV:
            content = self._parse_csv(abs_path)
        elif data_format is DataFormat.YAML:
            content = self._parse_yaml(abs_path)
        else:
            raise DataFileParseError(abs_path, "unsupported data file extension")

        self.file_cache[abs_path] = content
        logger.debug(f"Parsed {data_format.value} data file {abs_path} ({len(content)} keys)")
        return content

    def _parse_csv(self, path: str) -> Dict[str, Any]:
        """First row for a key wins; later duplicates are ignored."""
        content: Dict[str, Any] = {}
        try:
            with open(path, 'r', newline='', encoding='utf-8') as f:
                for row in csv.reader(f, strict=True):
                    if not row or row[0] in content:
                        continue
                    content[row[0]] = shape_row(row)
        except (csv.Error, UnicodeDecodeError) as e:
            raise DataFileParseError(path, str(e)) from e
        return content

    def _parse_yaml(self, path: str) -> Dict[str, Any]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                document = yaml.load(f, Loader=yaml.SafeLoader)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise DataFileParseError(path, str(e)) from e

        if document is None:
            return {}
        if not isinstance(document, dict):
            raise DataFileParseError(
                path, f"top level must be a mapping, got {type(document).__name__}"
            )
        # A string key wins over a non-string key with the same text
        content = {k: v for k, v in document.items() if isinstance(k, str)}
        for k, v in document.items():
            if not isinstance(k, str):
                content.setdefault(_key_text(k), v)
        return content


def _key_text(key: Any) -> str:
    if isinstance(key, bool):
        return 'true' if key else 'false'
    if key is None:
        return ''
    return str(key)
