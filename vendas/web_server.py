from __future__ import annotations

import logging
import math
from datetime import date
from io import BytesIO

from flask import Flask, Response, jsonify, request, send_file

from vendas.db import session_scope
from vendas.excel_export import export_sales_to_xlsx
from vendas.repos import SalesRepo, to_api
from vendas.services import SalesImportService
from vendas.settings import Settings
from vendas.stats import (
    ReportFilter,
    distinct_categories,
    distinct_salespeople,
    filter_records,
    sales_by_date,
    summarize,
    totals_by_category,
)

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _parse_bound(raw: str | None) -> float | None:
    s = (raw or "").strip()
    if not s:
        return None
    # accept "1500,50" as typed in a pt-BR form
    n = float(s.replace(",", "."))
    if not math.isfinite(n):
        raise ValueError(f"non-finite bound: {raw}")
    return n


def _report_filter() -> ReportFilter:
    args = request.args
    return ReportFilter(
        salesperson=(args.get("vendedor") or "").strip(),
        category=(args.get("categoria") or "").strip(),
        min_total=_parse_bound(args.get("min_total")),
        max_total=_parse_bound(args.get("max_total")),
    )


def create_app(session_factory, settings: Settings) -> Flask:
    service = SalesImportService(session_factory)

    app = Flask(__name__, static_folder=None)
    app.config["MAX_CONTENT_LENGTH"] = settings.max_upload_bytes

    def _error(message: str, status: int):
        return jsonify({"error": message}), status

    @app.get("/health")
    def health() -> Response:
        return jsonify({"ok": True, "app": settings.APP_NAME})

    # --- Records API ---
    @app.get("/api/sales")
    def api_sales():
        try:
            with session_scope(session_factory) as session:
                rows = [to_api(s) for s in SalesRepo(session).list_all()]
        except Exception:
            logger.exception("Falha ao listar vendas")
            return _error("Falha ao buscar dados de vendas", 500)
        return jsonify(rows)

    @app.post("/api/import")
    def api_import():
        f = request.files.get("file")
        if f is None or not f.filename:
            return _error("Nenhum arquivo enviado", 400)

        try:
            result = service.import_xlsx(f.read())
        except Exception:
            logger.exception("Falha ao importar planilha %s", f.filename)
            return _error("Falha ao importar planilha", 500)

        if not result.ok:
            return _error(result.error or "Planilha inválida", 400)
        return jsonify({"success": True, "count": result.count})

    # --- Dashboard ---
    @app.get("/api/stats")
    def api_stats():
        try:
            records = service.records()
        except Exception:
            logger.exception("Falha ao calcular estatísticas")
            return _error("Falha ao calcular estatísticas", 500)

        return jsonify(
            {
                "resumo": summarize(records).as_dict(),
                "tendencia": [{"Data": d, "Total": t} for d, t in sales_by_date(records)],
                "categorias": [{"name": c, "value": t} for c, t in totals_by_category(records)],
                "previa": [
                    {
                        "Data": r.date,
                        "Produto": r.product,
                        "Categoria": r.category,
                        "Quantidade": r.quantity,
                        "Total": r.total,
                        "Vendedor": r.salesperson,
                    }
                    for r in records[:10]
                ],
            }
        )

    # --- Report ---
    @app.get("/api/report")
    def api_report():
        try:
            flt = _report_filter()
        except ValueError:
            return _error("Filtro de total inválido", 400)

        try:
            records = service.records()
        except Exception:
            logger.exception("Falha ao gerar relatório")
            return _error("Falha ao gerar relatório", 500)

        filtered = filter_records(records, flt)
        s = summarize(filtered)
        return jsonify(
            {
                "vendedores": distinct_salespeople(records),
                "categorias": distinct_categories(records),
                "filtros_ativos": flt.active,
                "registros": s.count,
                "faturamento": s.gross,
                "custo": s.cost,
                "lucro": s.net,
                "vendas": [
                    {
                        "Data": r.date,
                        "Produto": r.product,
                        "Categoria": r.category,
                        "Vendedor": r.salesperson,
                        "Quantidade": r.quantity,
                        "PreçoUnitário": r.unit_price,
                        "Custo": r.unit_cost,
                        "Total": r.total,
                        "Líquido": r.net,
                    }
                    for r in filtered
                ],
            }
        )

    @app.get("/api/report/export.xlsx")
    def api_report_export_xlsx():
        try:
            flt = _report_filter()
        except ValueError:
            return _error("Filtro de total inválido", 400)

        try:
            content = export_sales_to_xlsx(filter_records(service.records(), flt))
        except Exception:
            logger.exception("Falha ao exportar relatório")
            return _error("Falha ao exportar relatório", 500)

        return send_file(
            BytesIO(content),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=f"relatorio-vendas-{date.today().isoformat()}.xlsx",
        )

    @app.errorhandler(413)
    def too_large(_e):
        return _error("Arquivo muito grande", 413)

    return app
