from __future__ import annotations

from io import BytesIO

from openpyxl import Workbook

from vendas.formatting import date_br
from vendas.normalizer import (
    COL_CATEGORIA,
    COL_CUSTO_UNITARIO,
    COL_DATA,
    COL_PRECO_UNITARIO,
    COL_PRODUTO,
    COL_QUANTIDADE,
    COL_TOTAL_VENDA,
    COL_VENDEDOR,
    SaleRecord,
)
from vendas.stats import net_total

# Shared columns reuse the import headers so an exported sheet can be imported again.
HEADERS = [
    COL_DATA,
    COL_PRODUTO,
    COL_CATEGORIA,
    COL_VENDEDOR,
    COL_QUANTIDADE,
    COL_PRECO_UNITARIO,
    COL_CUSTO_UNITARIO,
    COL_TOTAL_VENDA,
    "Total Líquido",
]

SHEET_NAME = "Vendas"


def export_sales_to_xlsx(records: list[SaleRecord]) -> bytes:
    """Write the given sales to a fresh workbook and return its bytes.

    Dates are written as DD/MM/YYYY text; amounts stay numeric so the sheet
    can be summed. Nothing is renormalized.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_NAME
    ws.append(HEADERS)

    for r in records:
        ws.append(
            [
                date_br(r.date),
                r.product,
                r.category,
                r.salesperson,
                r.quantity,
                r.unit_price,
                r.unit_cost,
                r.total,
                net_total(r),
            ]
        )

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()
