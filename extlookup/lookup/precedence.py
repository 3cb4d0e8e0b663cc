"""Precedence expansion: templates to ordered, existing data files."""

import logging
import os
from typing import List, Optional, Sequence

from ..variables.substitution import VariableSubstitutor
from .store import SEARCH_ORDER

logger = logging.getLogger(__name__)


class PrecedenceResolver:
    """Expands precedence templates into the data files to search."""

    def __init__(self, datadir: str, templates: Sequence[str], substitutor: VariableSubstitutor):
        """Initialize resolver.

        Args:
            datadir: Directory holding the data files
            templates: Path templates relative to datadir, without
                extension, possibly containing %{name} placeholders
            substitutor: Substitutor used to interpolate the templates
        """
        self.datadir = datadir
        self.templates = templates
        self.substitutor = substitutor

    def expand(self) -> List[str]:
        """Interpolate every template into a new list; templates are untouched."""
        return [self.substitutor.substitute(template) for template in self.templates]

    def resolve(self, extra_file: Optional[str] = None) -> List[str]:
        """Resolve the ordered list of data files to search.

        For each expanded entry the structured file is chosen over the
        tabular one; entries with neither are skipped. An existing
        extra_file is used verbatim and searched first.

        Args:
            extra_file: Optional literal data file path

        Returns:
            Existing data file paths, highest priority first

        Raises:
            UnresolvedVariableError: If a template names an unknown variable
        """
        datafiles = []

        for segment in self.expand():
            location = f"{self.datadir}/{segment}"
            for data_format in SEARCH_ORDER:
                candidate = f"{location}.{data_format.value}"
                if os.path.isfile(candidate):
                    datafiles.append(candidate)
                    break
            else:
                logger.debug(f"No data file for precedence entry: {location}")

        if extra_file:
            if os.path.isfile(extra_file):
                datafiles.insert(0, extra_file)
            else:
                logger.debug(f"Extra data file does not exist: {extra_file}")

        return datafiles
