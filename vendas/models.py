from __future__ import annotations

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Sale(Base):
    __tablename__ = "sales"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # ISO date string (YYYY-MM-DD); "" when the source cell was unreadable.
    data: Mapped[str] = mapped_column(String(32), nullable=False, default="", index=True)

    produto: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    categoria: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    quantidade: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    # BRL amounts, kept exactly as parsed from the sheet
    preco_unitario: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    custo: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    total: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    vendedor: Mapped[str] = mapped_column(String(120), nullable=False, default="")
