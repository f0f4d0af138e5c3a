from __future__ import annotations

from io import BytesIO

import pytest
from openpyxl import Workbook

from vendas.db import create_engine_from_url, init_db, make_session_factory
from vendas.normalizer import HEADERS
from vendas.settings import Settings
from vendas.web_server import create_app


def build_xlsx(rows: list[list], headers: list[str] | None = None) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.append(HEADERS if headers is None else headers)
    for r in rows:
        ws.append(r)
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine_from_url(f"sqlite:///{(tmp_path / 'test.sqlite').as_posix()}")
    init_db(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def settings(tmp_path):
    return Settings(INSTANCE_DIR=tmp_path, DATABASE_URL=f"sqlite:///{(tmp_path / 'test.sqlite').as_posix()}")


@pytest.fixture
def client(session_factory, settings):
    app = create_app(session_factory, settings)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def make_xlsx():
    return build_xlsx
