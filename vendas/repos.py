from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from vendas.models import Sale
from vendas.normalizer import SaleRecord


def _to_row(r: SaleRecord) -> dict:
    return {
        "data": r.date,
        "produto": r.product,
        "categoria": r.category,
        "quantidade": r.quantity,
        "preco_unitario": r.unit_price,
        "custo": r.unit_cost,
        "total": r.total,
        "vendedor": r.salesperson,
    }


def to_record(s: Sale) -> SaleRecord:
    qty = s.quantidade or 0
    if isinstance(qty, float) and qty.is_integer():
        qty = int(qty)
    return SaleRecord(
        date=str(s.data or ""),
        product=str(s.produto or ""),
        category=str(s.categoria or ""),
        quantity=qty,
        unit_price=float(s.preco_unitario or 0),
        unit_cost=float(s.custo or 0),
        total=float(s.total or 0),
        salesperson=str(s.vendedor or ""),
    )


def to_api(s: Sale) -> dict:
    """Shape used by the records API (Portuguese field names)."""
    r = to_record(s)
    return {
        "id": int(s.id),
        "Data": r.date,
        "Produto": r.product,
        "Categoria": r.category,
        "Quantidade": r.quantity,
        "PreçoUnitário": r.unit_price,
        "Custo": r.unit_cost,
        "Total": r.total,
        "Vendedor": r.salesperson,
    }


class SalesRepo:
    def __init__(self, session: Session):
        self.session = session

    def replace_all(self, records: list[SaleRecord]) -> int:
        # Runs inside the caller's transaction: either the old set or the new one survives.
        self.session.execute(delete(Sale))
        if records:
            self.session.execute(Sale.__table__.insert(), [_to_row(r) for r in records])
        self.session.flush()
        return len(records)

    def add_many(self, records: list[SaleRecord]) -> int:
        n = 0
        for r in records:
            self.session.add(Sale(**_to_row(r)))
            n += 1
        self.session.flush()
        return n

    def clear(self) -> int:
        res = self.session.execute(delete(Sale))
        return int(res.rowcount or 0)

    def list_all(self) -> list[Sale]:
        stmt = select(Sale).order_by(Sale.data.desc(), Sale.id.asc())
        return list(self.session.execute(stmt).scalars().all())

    def count(self) -> int:
        return int(self.session.execute(select(func.count(Sale.id))).scalar_one())
