from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    # App
    APP_NAME: str = os.environ.get("APP_NAME", "Painel de Vendas")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # Storage
    INSTANCE_DIR: Path = Path(os.environ.get("INSTANCE_DIR", "instance"))
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "")

    # Seed spreadsheet (scripts/seed_db.py)
    SEED_XLSX_PATH: str = os.environ.get("SEED_XLSX_PATH", "sales_data.xlsx")

    # Uploads
    MAX_UPLOAD_MB: int = int(os.environ.get("MAX_UPLOAD_MB", "16"))

    def __post_init__(self) -> None:
        # Always resolve INSTANCE_DIR; the default database lives inside it.
        object.__setattr__(self, "INSTANCE_DIR", Path(self.INSTANCE_DIR).resolve())

        db = str(self.DATABASE_URL or "").strip()
        if not db:
            abs_db = (self.INSTANCE_DIR / "vendas.sqlite").resolve()
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{abs_db.as_posix()}")
            return

        # Relative SQLite paths are anchored at the project root, not the process cwd.
        # Example: sqlite:///instance/vendas.sqlite -> sqlite:////srv/painel/instance/vendas.sqlite
        if db.startswith("sqlite:///") and not db.startswith("sqlite:////"):
            path_part = db[len("sqlite:///") :]
            if "?" in path_part:
                path_part = path_part.split("?", 1)[0]
            if path_part and path_part != ":memory:":
                p = Path(path_part)
                if not p.is_absolute():
                    project_root = Path(__file__).resolve().parents[1]
                    abs_path = (project_root / p).resolve()
                    object.__setattr__(self, "DATABASE_URL", f"sqlite:///{abs_path.as_posix()}")

    @property
    def max_upload_bytes(self) -> int:
        return max(1, int(self.MAX_UPLOAD_MB)) * 1024 * 1024

    def seed_path(self) -> Path:
        p = Path(self.SEED_XLSX_PATH)
        if not p.is_absolute():
            p = Path.cwd() / p
        return p.resolve()

    def ensure_instance(self) -> None:
        self.INSTANCE_DIR.mkdir(parents=True, exist_ok=True)
