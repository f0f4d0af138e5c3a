from __future__ import annotations

import pytest

from vendas.formatting import date_br, money_br
from vendas.normalizer import SaleRecord
from vendas.stats import (
    ReportFilter,
    distinct_categories,
    distinct_salespeople,
    filter_records,
    net_total,
    sales_by_date,
    summarize,
    totals_by_category,
)


def _rec(date="2024-01-01", product="P", category="C", qty=1, price=10.0, cost=4.0, total=10.0, who="Ana"):
    return SaleRecord(date, product, category, qty, price, cost, total, who)


RECORDS = [
    _rec(date="2024-01-02", product="Mouse", category="Periféricos", qty=2, cost=30.0, total=100.0, who="Bruno"),
    _rec(date="2024-01-01", product="Mouse", category="Periféricos", qty=1, cost=30.0, total=50.0, who="Ana"),
    _rec(date="2024-01-02", product="Monitor", category="Telas", qty=1, cost=600.0, total=900.0, who="Ana"),
]


def test_summarize():
    s = summarize(RECORDS)
    assert s.count == 3
    assert s.gross == pytest.approx(1050.0)
    assert s.cost == pytest.approx(60.0 + 30.0 + 600.0)
    assert s.net == pytest.approx(1050.0 - 690.0)
    assert s.average_ticket == pytest.approx(350.0)
    assert s.products == 2


def test_summarize_empty():
    s = summarize([])
    assert s.count == 0
    assert s.gross == 0
    assert s.average_ticket == 0


def test_net_total():
    assert net_total(RECORDS[0]) == pytest.approx(100.0 - 30.0 * 2)


def test_sales_by_date_sorted_ascending():
    assert sales_by_date(RECORDS) == [("2024-01-01", 50.0), ("2024-01-02", 1000.0)]


def test_totals_by_category_first_seen_order():
    assert totals_by_category(RECORDS) == [("Periféricos", 150.0), ("Telas", 900.0)]


def test_distinct_lists():
    assert distinct_categories(RECORDS) == ["Periféricos", "Telas"]
    assert distinct_salespeople(RECORDS) == ["Ana", "Bruno"]


def test_filter_records():
    assert len(filter_records(RECORDS, ReportFilter())) == 3
    assert [r.product for r in filter_records(RECORDS, ReportFilter(salesperson="Ana"))] == ["Mouse", "Monitor"]
    assert len(filter_records(RECORDS, ReportFilter(category="Telas"))) == 1
    # bounds are inclusive
    assert len(filter_records(RECORDS, ReportFilter(min_total=100.0))) == 2
    assert len(filter_records(RECORDS, ReportFilter(max_total=100.0))) == 2
    assert not ReportFilter().active
    assert ReportFilter(min_total=0).active


def test_money_br():
    assert money_br(1234.56) == "R$ 1.234,56"
    assert money_br(0) == "R$ 0,00"
    assert money_br(-5) == "-R$ 5,00"


def test_date_br():
    assert date_br("2024-02-01") == "01/02/2024"
    assert date_br("") == "-"
    assert date_br("texto") == "texto"
