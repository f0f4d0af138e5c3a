from __future__ import annotations


def money_br(n: float) -> str:
    # R$ 12.345,67 format
    s = f"{abs(n):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"-R$ {s}" if n < 0 else f"R$ {s}"


def date_br(iso: str) -> str:
    if not iso:
        return "-"
    parts = iso.split("-")
    if len(parts) == 3 and len(parts[0]) == 4:
        return f"{parts[2]}/{parts[1]}/{parts[0]}"
    return iso
