from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.orm import Session, sessionmaker

from vendas.db import session_scope
from vendas.excel_import import SpreadsheetError, XlsxSource, read_rows
from vendas.normalizer import SaleRecord, normalize
from vendas.repos import SalesRepo, to_record

logger = logging.getLogger(__name__)

EMPTY_SHEET_ERROR = "Planilha vazia"

# One replace-all at a time per process; the transaction covers the database side.
_IMPORT_LOCK = threading.Lock()


@dataclass(frozen=True)
class ImportResult:
    ok: bool
    error: str | None = None
    count: int = 0


class SalesImportService:
    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    def import_xlsx(self, source: XlsxSource) -> ImportResult:
        """Replace every stored sale with the rows of the uploaded sheet.

        An empty sheet is rejected before anything is deleted. Read and write
        failures propagate to the caller.
        """
        rows = read_rows(source)
        if not rows:
            logger.info("Importação rejeitada: planilha sem linhas")
            return ImportResult(ok=False, error=EMPTY_SHEET_ERROR)

        records = normalize(rows)
        with _IMPORT_LOCK:
            with session_scope(self._session_factory) as session:
                count = SalesRepo(session).replace_all(records)

        logger.info("Importados %s registros de venda", count)
        return ImportResult(ok=True, count=count)

    def seed_from_xlsx(self, xlsx_path: Path) -> int:
        p = Path(xlsx_path)
        if not p.exists():
            raise SpreadsheetError(f"Planilha não encontrada: {p}")

        rows = read_rows(p)
        logger.info("Encontradas %s linhas em %s", len(rows), p.name)
        if rows:
            logger.debug("Cabeçalhos encontrados: %s", list(rows[0].keys()))

        records = normalize(rows)
        with _IMPORT_LOCK:
            with session_scope(self._session_factory) as session:
                repo = SalesRepo(session)
                cleared = repo.clear()
                logger.info("Removidos %s registros existentes", cleared)
                count = repo.add_many(records)

        logger.info("Semeados %s registros no banco", count)
        return count

    def records(self) -> list[SaleRecord]:
        with session_scope(self._session_factory) as session:
            return [to_record(s) for s in SalesRepo(session).list_all()]
