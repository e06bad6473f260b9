"""External transaction sources. A source yields one FileBatch per unprocessed file."""

import asyncio
import csv
import logging
from pathlib import Path
from typing import AsyncIterator, Protocol

from pydantic import ValidationError

from bridgeagg.domain.models.bridge import ExternalTransaction, FileBatch

logger = logging.getLogger(__name__)


class TransactionSource(Protocol):
    def iter_batches(self, processed: set[str]) -> AsyncIterator[FileBatch]:
        """Yield batches for files not in `processed`, in a stable order."""


class CsvDirectorySource:
    """Reads transaction dumps from CSV files in a local directory."""

    def __init__(self, directory: str | Path, pattern: str = "*.csv") -> None:
        self._directory = Path(directory)
        self._pattern = pattern

    async def iter_batches(self, processed: set[str]) -> AsyncIterator[FileBatch]:
        paths = sorted(self._directory.glob(self._pattern))
        pending = [p for p in paths if p.name not in processed]
        logger.info("Source %s: %d files, %d pending", self._directory, len(paths), len(pending))

        for path in pending:
            transactions = await asyncio.to_thread(self._read_file, path)
            yield FileBatch(file_name=path.name, transactions=transactions)

    def _read_file(self, path: Path) -> list[ExternalTransaction]:
        transactions: list[ExternalTransaction] = []
        skipped = 0
        with path.open(newline="", encoding="utf-8") as f:
            for line_no, row in enumerate(csv.DictReader(f), start=2):
                try:
                    transactions.append(ExternalTransaction.model_validate(row))
                except ValidationError as e:
                    skipped += 1
                    logger.warning("%s:%d skipped, %d invalid fields", path.name, line_no, e.error_count())
        if skipped:
            logger.warning("%s: skipped %d malformed rows", path.name, skipped)
        return transactions
