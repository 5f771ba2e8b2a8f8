"""Utility functions for file I/O and name handling."""

import json
import logging
import re
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('fplpairs.utils')

_PUNCTUATION_RE = re.compile(r'[^\w\s]', re.UNICODE)
_WHITESPACE_RE = re.compile(r'\s+')


def load_json(
    path: Path | str,
    schema: type[T] | None = None,
) -> Any | T:
    """
    Load JSON file with optional schema validation.

    Args:
        path: Path to JSON file (str or Path object)
        schema: Optional Pydantic model to validate against

    Returns:
        Parsed JSON (validated if schema provided)

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        ValueError: If schema validation fails

    Example:
        from fplpairs.schemas import CaptainsFile
        captains = load_json('data/captains.json', schema=CaptainsFile)
    """
    path = Path(path)

    logger.debug(f'Loading JSON from: {path}')

    if not path.exists():
        logger.debug(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} at position {e.pos}')
        raise json.JSONDecodeError(f'Invalid JSON in {path}: {e.msg}', e.doc, e.pos) from e

    if schema:
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            logger.error(f'Schema validation failed for {path}: {e}')
            raise ValueError(f'Schema validation failed for {path}:\n{e}') from e

    return data


def save_json(
    path: Path | str,
    data: Any,
    indent: int = 2,
    create_dirs: bool = True,
) -> None:
    """
    Save data as JSON file.

    The file is written to a temporary sibling and then moved into place.

    Args:
        path: Path to write to (str or Path object)
        data: Data to serialize (must be JSON-serializable or Pydantic model)
        indent: Indentation level (default: 2 spaces)
        create_dirs: Create parent directories if they don't exist (default: True)

    Raises:
        TypeError: If data is not JSON-serializable
        OSError: If file cannot be written
    """
    path = Path(path)

    logger.debug(f'Saving JSON to: {path}')

    if create_dirs:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f'Failed to create directory {path.parent}: {e}')
            raise

    # Pydantic models keep their field aliases on disk
    json_data = data.model_dump(by_alias=True) if isinstance(data, BaseModel) else data

    try:
        text = json.dumps(json_data, indent=indent, ensure_ascii=False)
    except TypeError as e:
        logger.error(f'Data is not JSON-serializable: {e}')
        raise TypeError(f'Data is not JSON-serializable: {e}') from e

    tmp_path = path.with_name(f'.{path.name}.tmp')
    try:
        with open(tmp_path, 'w', encoding='utf-8') as f:
            f.write(text)
            f.write('\n')
        tmp_path.replace(path)
        logger.debug(f'Successfully saved JSON to: {path}')
    except OSError as e:
        logger.error(f'Failed to write file {path}: {e}')
        raise


def load_json_safe(
    path: Path | str,
    default: Any = None,
    schema: type[T] | None = None,
) -> Any | T:
    """
    Load JSON file with safe fallback to default value.

    Like load_json, but returns default value instead of raising
    exceptions for missing or invalid files.

    Example:
        # Returns empty dict if file doesn't exist
        data = load_json_safe('data/optional.json', default={})
    """
    try:
        return load_json(path, schema=schema)
    except FileNotFoundError:
        return default
    except (json.JSONDecodeError, ValueError) as e:
        logger.warning(f'Ignoring unreadable file {path}: {e}')
        return default


def normalize_name(name: str | None) -> str:
    """
    Normalize a manager or squad name for tolerant comparison.

    Lowercases, strips punctuation and collapses whitespace, so that
    ``"  O'Neil,  Sam "`` and ``"oneil sam"`` compare equal.
    """
    if not name:
        return ''
    cleaned = _PUNCTUATION_RE.sub('', name.casefold())
    return _WHITESPACE_RE.sub(' ', cleaned).strip()
