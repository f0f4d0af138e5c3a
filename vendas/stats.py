from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from vendas.normalizer import SaleRecord


@dataclass(frozen=True)
class SalesSummary:
    count: int
    gross: float
    cost: float
    net: float
    average_ticket: float
    products: int

    def as_dict(self) -> dict:
        return {
            "registros": self.count,
            "total_bruto": self.gross,
            "custo_total": self.cost,
            "total_liquido": self.net,
            "ticket_medio": self.average_ticket,
            "produtos": self.products,
        }


@dataclass(frozen=True)
class ReportFilter:
    salesperson: str = ""
    category: str = ""
    min_total: float | None = None
    max_total: float | None = None

    @property
    def active(self) -> bool:
        return bool(self.salesperson or self.category or self.min_total is not None or self.max_total is not None)


def net_total(r: SaleRecord) -> float:
    return r.total - (r.unit_cost or 0) * r.quantity


def summarize(records: Iterable[SaleRecord]) -> SalesSummary:
    records = list(records)
    gross = sum(r.total for r in records)
    cost = sum((r.unit_cost or 0) * r.quantity for r in records)
    return SalesSummary(
        count=len(records),
        gross=gross,
        cost=cost,
        net=gross - cost,
        average_ticket=gross / (len(records) or 1),
        products=len({r.product for r in records}),
    )


def sales_by_date(records: Iterable[SaleRecord]) -> list[tuple[str, float]]:
    """Totals per date string, oldest first (trend chart)."""
    totals: dict[str, float] = {}
    for r in records:
        totals[r.date] = totals.get(r.date, 0) + r.total
    return sorted(totals.items(), key=lambda kv: kv[0])


def totals_by_category(records: Iterable[SaleRecord]) -> list[tuple[str, float]]:
    # first-seen order, as the pie chart draws it
    totals: dict[str, float] = {}
    for r in records:
        totals[r.category] = totals.get(r.category, 0) + r.total
    return list(totals.items())


def distinct_categories(records: Iterable[SaleRecord]) -> list[str]:
    return sorted({r.category for r in records})


def distinct_salespeople(records: Iterable[SaleRecord]) -> list[str]:
    return sorted({r.salesperson for r in records})


def filter_records(records: Iterable[SaleRecord], flt: ReportFilter) -> list[SaleRecord]:
    out: list[SaleRecord] = []
    for r in records:
        if flt.salesperson and r.salesperson != flt.salesperson:
            continue
        if flt.category and r.category != flt.category:
            continue
        if flt.min_total is not None and r.total < flt.min_total:
            continue
        if flt.max_total is not None and r.total > flt.max_total:
            continue
        out.append(r)
    return out
