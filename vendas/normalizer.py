from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable, Mapping

# Spreadsheet headers (exact match, accents included).
COL_DATA = "Data"
COL_PRODUTO = "Produto"
COL_CATEGORIA = "Categoria"
COL_QUANTIDADE = "Quantidade"
COL_PRECO_UNITARIO = "Preço Unitário"
COL_CUSTO_UNITARIO = "Custo Unitário"
COL_TOTAL_VENDA = "Total Venda"
COL_VENDEDOR = "Vendedor"

HEADERS = [
    COL_DATA,
    COL_PRODUTO,
    COL_CATEGORIA,
    COL_QUANTIDADE,
    COL_PRECO_UNITARIO,
    COL_CUSTO_UNITARIO,
    COL_TOTAL_VENDA,
    COL_VENDEDOR,
]

DEFAULT_SALESPERSON = "Vendedor Padrão"

# Serial 25569 is 1970-01-01 in the 1900 date system.
EXCEL_EPOCH_OFFSET = 25569
MS_PER_DAY = 86400 * 1000

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_DIGITS_RE = re.compile(r"[0-9]+")
_CURRENCY_PREFIX_RE = re.compile(r"R\$\s?")
_FLOAT_PREFIX_RE = re.compile(r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")

RawRow = Mapping[str, Any]


@dataclass(frozen=True)
class SaleRecord:
    date: str
    product: str
    category: str
    quantity: int | float
    unit_price: float
    unit_cost: float
    total: float
    salesperson: str

    @property
    def net(self) -> float:
        # Derived on demand; "total" is never recomputed from price x quantity.
        return self.total - self.unit_cost * self.quantity


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _serial_to_iso(serial: float) -> str:
    ms = math.floor((serial - EXCEL_EPOCH_OFFSET) * MS_PER_DAY + 0.5)
    return (_UNIX_EPOCH + timedelta(milliseconds=ms)).date().isoformat()


def parse_date(value: Any) -> str:
    """Resolve a date cell to ``YYYY-MM-DD``.

    Accepts spreadsheet serials (numeric or all-digit strings), ``DD/MM/YYYY``
    strings and date objects. Anything else is returned as text, unchanged.
    An absent cell yields ``""``.
    """
    if value is None or value == "" or value is False:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    if _is_number(value) or (isinstance(value, str) and _DIGITS_RE.fullmatch(value)):
        if value == 0:
            return ""
        try:
            # very long digit strings exceed int() limits; they fall through as text
            serial = int(value) if isinstance(value, str) else value
            return _serial_to_iso(serial)
        except (OverflowError, ValueError):
            return str(value)

    if isinstance(value, str) and "/" in value:
        parts = value.split("/")
        if len(parts) == 3:
            # DD/MM/YYYY, reordered as-is
            return f"{parts[2]}-{parts[1]}-{parts[0]}"

    return _as_text(value)


def parse_currency(value: Any) -> float:
    """Parse a BRL amount such as ``"R$ 1.234,56"``; unparseable input is 0."""
    if value is None:
        return 0
    if _is_number(value):
        if isinstance(value, float) and math.isnan(value):
            return 0
        return value

    s = _CURRENCY_PREFIX_RE.sub("", str(value), count=1)
    s = s.replace(".", "").replace(",", ".", 1).strip()
    m = _FLOAT_PREFIX_RE.match(s)
    if not m:
        return 0
    return float(m.group(0))


def parse_quantity(value: Any) -> int | float:
    if value is None:
        return 0
    if _is_number(value):
        if isinstance(value, float):
            if math.isnan(value):
                return 0
            if value.is_integer():
                return int(value)
        return value

    s = str(value).strip()
    if not s:
        return 0
    try:
        n = float(s)
    except ValueError:
        return 0
    if math.isnan(n):
        return 0
    return int(n) if n.is_integer() else n


def _as_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_row(row: RawRow) -> SaleRecord:
    return SaleRecord(
        date=parse_date(row.get(COL_DATA)),
        product=_as_text(row.get(COL_PRODUTO)),
        category=_as_text(row.get(COL_CATEGORIA)),
        quantity=parse_quantity(row.get(COL_QUANTIDADE)),
        unit_price=parse_currency(row.get(COL_PRECO_UNITARIO)),
        unit_cost=parse_currency(row.get(COL_CUSTO_UNITARIO)),
        total=parse_currency(row.get(COL_TOTAL_VENDA)),
        salesperson=_as_text(row.get(COL_VENDEDOR), DEFAULT_SALESPERSON),
    )


def normalize(rows: Iterable[RawRow]) -> list[SaleRecord]:
    return [normalize_row(row) for row in rows]
