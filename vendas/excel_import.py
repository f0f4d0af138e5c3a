from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO, Union

from openpyxl import load_workbook

from vendas.normalizer import SaleRecord, normalize

XlsxSource = Union[str, Path, bytes, BinaryIO]


class SpreadsheetError(RuntimeError):
    pass


def _open(source: XlsxSource):
    if isinstance(source, (bytes, bytearray)):
        source = BytesIO(bytes(source))
    elif isinstance(source, (str, Path)):
        p = Path(source)
        if not p.exists():
            raise SpreadsheetError(f"Planilha não encontrada: {p}")
        source = p

    try:
        # read_only=True is much faster; values_only iteration avoids building cell objects.
        return load_workbook(filename=source, data_only=True, read_only=True)
    except Exception as e:
        raise SpreadsheetError(f"Não foi possível ler a planilha: {e}") from e


def _blank(v: Any) -> bool:
    return v is None or (isinstance(v, str) and v == "")


def read_rows(source: XlsxSource) -> list[dict[str, Any]]:
    """Read the first worksheet as a list of ``{header: value}`` mappings.

    The first row is the header. Empty cells are left out of each mapping and
    rows with no values at all are skipped.
    """
    wb = _open(source)
    try:
        if not wb.worksheets:
            return []
        ws = wb.worksheets[0]

        rows = ws.iter_rows(values_only=True)
        header_vals = next(rows, None)
        if header_vals is None:
            return []

        columns: list[tuple[int, str]] = []
        seen: set[str] = set()
        for idx, h in enumerate(header_vals):
            if _blank(h):
                continue
            name = str(h)
            if name in seen:
                continue
            seen.add(name)
            columns.append((idx, name))

        out: list[dict[str, Any]] = []
        for row_vals in rows:
            row: dict[str, Any] = {}
            for idx, name in columns:
                v = row_vals[idx] if idx < len(row_vals) else None
                if not _blank(v):
                    row[name] = v
            if row:
                out.append(row)
        return out
    finally:
        wb.close()


def read_records(source: XlsxSource) -> list[SaleRecord]:
    return normalize(read_rows(source))
