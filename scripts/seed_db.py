from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from vendas.db import create_engine_from_url, init_db, make_session_factory
from vendas.excel_import import SpreadsheetError
from vendas.services import SalesImportService
from vendas.settings import Settings

logger = logging.getLogger("vendas.seed")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Carrega a planilha de vendas no banco")
    parser.add_argument("xlsx", nargs="?", default=None, help="Planilha (padrão: SEED_XLSX_PATH)")
    args = parser.parse_args(argv)

    settings = Settings()
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO), format="%(message)s")
    settings.ensure_instance()

    engine = create_engine_from_url(settings.DATABASE_URL)
    init_db(engine)
    sf = make_session_factory(engine)

    xlsx = Path(args.xlsx).resolve() if args.xlsx else settings.seed_path()
    try:
        count = SalesImportService(sf).seed_from_xlsx(xlsx)
    except SpreadsheetError as e:
        logger.error("%s", e)
        return 1
    finally:
        engine.dispose()

    print("seeded", count)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
