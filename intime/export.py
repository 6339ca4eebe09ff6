"""CSV export of purchase history."""

from pathlib import Path

import pandas as pd

from intime.domain.models import to_reais
from intime.domain.purchases import DEFAULT_DESCRIPTIONS, Purchase

EXPORT_COLUMNS = ["Data", "Descrição", "Valor", "Tempo de Trabalho", "Tipo"]


def purchases_to_frame(purchases: list[Purchase]) -> pd.DataFrame:
    """Build the export table for a list of purchases.

    Args:
        purchases: Purchases to export.

    Returns:
        DataFrame with one row per purchase, in the given order.
    """
    rows = [
        {
            "Data": p.created_at.strftime("%d/%m/%Y") if p.created_at else "",
            "Descrição": p.description or "",
            "Valor": str(to_reais(p.value)),
            "Tempo de Trabalho": f"{p.time_hours}h {p.time_minutes}m",
            "Tipo": DEFAULT_DESCRIPTIONS[p.type],
        }
        for p in purchases
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_purchases_csv(purchases: list[Purchase], output_path: Path) -> int:
    """Write purchases to a CSV file.

    Args:
        purchases: Purchases to export.
        output_path: Destination CSV file.

    Returns:
        Number of rows written.

    Raises:
        ValueError: If there are no purchases to export.
    """
    if not purchases:
        raise ValueError("No purchases to export")

    frame = purchases_to_frame(purchases)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output_path, index=False)
    return len(frame)
