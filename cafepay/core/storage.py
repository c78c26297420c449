# cafepay/core/storage.py
"""
Data loading for pay rules, deduction tables and holiday calendars.

The packaged defaults live in cafepay/data/. Every loader also accepts an
explicit path so a deployment can supply its own tables.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from cafepay.core.exceptions import StorageError
from cafepay.core.models import DeductionBracket, Holiday, PayRules

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

PAY_RULES_FILE = DATA_DIR / "pay_rules.json"
DEDUCTION_BRACKETS_FILE = DATA_DIR / "deduction_brackets.json"


def _load_json(file_path: Path) -> list[Any] | dict[str, Any]:
    """
    Read and parse JSON with robust error handling.
    Args:
        file_path: Path to the JSON file
    Returns:
        Parsed JSON data as list or dict
    Raises:
        StorageError: If file cannot be read or JSON is invalid
    """
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.exception("Failed to read JSON file %s", file_path)
        raise StorageError(f"Could not read JSON file {file_path}: {e}") from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.exception("Invalid JSON in file %s", file_path)
        raise StorageError(f"Invalid JSON in file {file_path}: {e}") from e


def load_pay_rules(file_path: Path = PAY_RULES_FILE) -> PayRules:
    """
    Load the holiday rate matrix and night-differential window.
    Returns:
        Pay rules
    Raises:
        StorageError: If file cannot be loaded or parsed
    """
    data = _load_json(file_path)
    try:
        if not isinstance(data, dict):
            raise TypeError("Expected pay rules dict")
        rules = PayRules(**data)
    except (TypeError, ValidationError) as e:
        logger.exception("Failed to parse pay rules from %s", file_path)
        raise StorageError(f"Could not parse pay rules from {file_path}: {e}") from e
    return rules


def load_deduction_brackets(file_path: Path = DEDUCTION_BRACKETS_FILE) -> list[DeductionBracket]:
    """
    Load SSS, PhilHealth, Pag-IBIG and tax brackets from one table.
    Returns:
        List of deduction brackets, in file order
    Raises:
        StorageError: If file cannot be loaded or parsed
    """
    data = _load_json(file_path)
    try:
        if not isinstance(data, list):
            raise TypeError("Expected list of deduction brackets")
        brackets = [DeductionBracket(**item) for item in data]
    except (TypeError, ValidationError) as e:
        logger.exception("Failed to parse deduction brackets from %s", file_path)
        raise StorageError(f"Could not parse deduction brackets from {file_path}: {e}") from e
    return brackets


def load_holidays(file_path: Path) -> list[Holiday]:
    """
    Load a holiday calendar.
    Returns:
        List of holidays
    Raises:
        StorageError: If file cannot be loaded or parsed
    """
    data = _load_json(file_path)
    try:
        if not isinstance(data, list):
            raise TypeError("Expected list of holidays")
        holidays = [Holiday(**item) for item in data]
    except (TypeError, ValidationError) as e:
        logger.exception("Failed to parse holidays from %s", file_path)
        raise StorageError(f"Could not parse holidays from {file_path}: {e}") from e
    return holidays


def holidays_file_for_year(year: int) -> Path:
    return DATA_DIR / f"holidays_{year}.json"


@lru_cache(maxsize=1)
def get_default_pay_rules() -> PayRules:
    """Cached packaged pay rules. PayRules is frozen, so sharing it is safe."""
    return load_pay_rules()


@lru_cache(maxsize=1)
def get_default_deduction_brackets() -> tuple[DeductionBracket, ...]:
    """Cached packaged deduction table (2024 contribution tables, TRAIN tax)."""
    brackets = tuple(load_deduction_brackets())
    logger.info("Loaded %d deduction brackets", len(brackets))
    return brackets


def clear_storage_cache() -> None:
    get_default_pay_rules.cache_clear()
    get_default_deduction_brackets.cache_clear()
