"""Persist the final contract as a text file."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from loguru import logger

from maik.errors import ContractNotReadyError

CONTRACT_FILE_PREFIX = "german_freelance_contract_"


def default_contract_path(now: datetime | None = None) -> Path:
    """Timestamped file name in the current directory."""
    moment = now or datetime.now()
    return Path(f"{CONTRACT_FILE_PREFIX}{int(moment.timestamp() * 1000)}.txt")


def write_contract(text: str | None, output_path: Path | None = None) -> Path:
    """Write the contract verbatim, replacing any existing file."""
    if not text:
        raise ContractNotReadyError("No contract to save. Run the contract generation first.")

    path = Path(output_path) if output_path else default_contract_path()
    path.write_text(text, encoding="utf-8")
    logger.info("contract.saved path={} chars={}", path, len(text))
    return path
