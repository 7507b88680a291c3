"""Load a local candidate collection from a JSON file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import jmespath
from jmespath.exceptions import JMESPathError

from typeahead.domain.errors import ConfigurationError
from typeahead.logger import get_logger

logger = get_logger("sources.files")


def load_candidates(path: str | Path, items_path: Optional[str] = None) -> list[Any]:
    """
    Read a JSON document and return its candidate list.

    Args:
        path: JSON file holding either a list or a document containing one
        items_path: JMESPath expression selecting the list inside the document

    Raises:
        ConfigurationError: If the file cannot be read, the path is invalid
            or no list is found
    """
    path = Path(path)
    logger.info(f"Loading candidates from {path}")
    try:
        with path.open(encoding="utf-8") as fh:
            document = json.load(fh)
    except OSError as e:
        raise ConfigurationError(f"Cannot read candidates file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

    try:
        items = jmespath.search(items_path, document) if items_path else document
    except JMESPathError as e:
        raise ConfigurationError(f"Invalid items path {items_path!r}: {e}") from e
    if not isinstance(items, list):
        raise ConfigurationError(f"Expected a list of candidates in {path}, got {type(items).__name__}")

    logger.info(f"Loaded {len(items)} candidates from {path}")
    return items
