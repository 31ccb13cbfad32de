from datetime import date, datetime

MONTHS_ID = (
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
)


def format_currency(amount: int | float | None) -> str:
    """IDR without minor units, id-ID grouping: 135000 -> 'Rp 135.000'."""
    value = int(round(amount or 0))
    sign = "-" if value < 0 else ""
    return f"{sign}Rp {abs(value):,}".replace(",", ".")


def format_date(value: str | date | datetime | None) -> str:
    """Long id-ID date: '2026-10-17' -> '17 Oktober 2026'. Unparseable input is returned as-is."""
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return f"{value.day} {MONTHS_ID[value.month - 1]} {value.year}"
