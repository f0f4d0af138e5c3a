from __future__ import annotations

from io import BytesIO

import pytest
from openpyxl import load_workbook


def _upload(client, content: bytes, filename: str = "vendas.xlsx"):
    return client.post(
        "/api/import",
        data={"file": (BytesIO(content), filename)},
        content_type="multipart/form-data",
    )


ROWS = [
    ["01/03/2024", "Notebook", "Eletrônicos", 1, "R$ 3.500,00", "R$ 2.800,00", "R$ 3.500,00", "Ana"],
    [45292, "Mouse", "Periféricos", 2, "R$ 50,00", "R$ 30,00", "R$ 100,00", "Bruno"],
    ["15/02/2024", "Cabo", "Periféricos", 3, "R$ 10,00", "R$ 4,00", "R$ 30,00", None],
]


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.get_json()["ok"] is True


def test_sales_empty(client):
    res = client.get("/api/sales")
    assert res.status_code == 200
    assert res.get_json() == []


def test_import_and_list(client, make_xlsx):
    res = _upload(client, make_xlsx(ROWS))
    assert res.status_code == 200
    assert res.get_json() == {"success": True, "count": 3}

    sales = client.get("/api/sales").get_json()
    assert [s["Data"] for s in sales] == ["2024-03-01", "2024-02-15", "2024-01-01"]
    assert sales[0]["PreçoUnitário"] == 3500.0
    assert sales[0]["Custo"] == 2800.0
    assert sales[1]["Vendedor"] == "Vendedor Padrão"
    assert all("id" in s for s in sales)


def test_import_without_file(client):
    res = client.post("/api/import", data={}, content_type="multipart/form-data")
    assert res.status_code == 400


def test_import_empty_sheet_is_rejected_without_deleting(client, make_xlsx):
    _upload(client, make_xlsx(ROWS))
    res = _upload(client, make_xlsx([]))
    assert res.status_code == 400
    assert "error" in res.get_json()
    assert len(client.get("/api/sales").get_json()) == 3


def test_import_broken_file_is_server_error(client, make_xlsx):
    _upload(client, make_xlsx(ROWS))
    res = _upload(client, b"garbage")
    assert res.status_code == 500
    assert res.get_json() == {"error": "Falha ao importar planilha"}
    assert len(client.get("/api/sales").get_json()) == 3


def test_import_replaces_previous_set(client, make_xlsx):
    _upload(client, make_xlsx(ROWS))
    _upload(client, make_xlsx(ROWS[:1]))
    sales = client.get("/api/sales").get_json()
    assert [s["Produto"] for s in sales] == ["Notebook"]


def test_stats(client, make_xlsx):
    _upload(client, make_xlsx(ROWS))
    body = client.get("/api/stats").get_json()
    resumo = body["resumo"]
    assert resumo["registros"] == 3
    assert resumo["total_bruto"] == 3630.0
    assert resumo["custo_total"] == 2800.0 + 60.0 + 12.0
    assert resumo["produtos"] == 3
    assert [p["Data"] for p in body["tendencia"]] == ["2024-01-01", "2024-02-15", "2024-03-01"]
    assert {c["name"] for c in body["categorias"]} == {"Eletrônicos", "Periféricos"}


def test_report_filters(client, make_xlsx):
    _upload(client, make_xlsx(ROWS))
    body = client.get("/api/report", query_string={"categoria": "Periféricos", "min_total": "50"}).get_json()
    assert body["registros"] == 1
    assert body["vendas"][0]["Produto"] == "Mouse"
    assert body["lucro"] == 100.0 - 60.0
    assert body["filtros_ativos"] is True
    assert body["categorias"] == ["Eletrônicos", "Periféricos"]


def test_report_invalid_bound(client):
    res = client.get("/api/report", query_string={"min_total": "muito"})
    assert res.status_code == 400



@pytest.mark.parametrize("bound", ["nan", "inf", "-Infinity", "1e400"])
def test_report_non_finite_bound_is_rejected(client, bound):
    assert client.get("/api/report", query_string={"min_total": bound}).status_code == 400
    assert client.get("/api/report/export.xlsx", query_string={"max_total": bound}).status_code == 400


def test_report_export_xlsx(client, make_xlsx):
    _upload(client, make_xlsx(ROWS))
    res = client.get("/api/report/export.xlsx", query_string={"vendedor": "Ana"})
    assert res.status_code == 200
    assert "relatorio-vendas-" in res.headers["Content-Disposition"]
    ws = load_workbook(BytesIO(res.data)).active
    rows = list(ws.iter_rows(values_only=True))
    assert len(rows) == 2
    assert rows[1][0] == "01/03/2024"
