"""Tests for intime.export."""

from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest

from intime.domain.models import Description, Money
from intime.domain.purchases import DEFAULT_DESCRIPTIONS, Purchase, display_description
from intime.export import EXPORT_COLUMNS, export_purchases_csv, purchases_to_frame

PURCHASES = [
    Purchase(
        id=1,
        user_id=1,
        value=Money(4590),
        time_hours=2,
        time_minutes=16,
        type="ocr",
        description=None,
        created_at=datetime(2025, 3, 7, 9, 5),
    ),
    Purchase(
        id=2,
        user_id=1,
        value=Money(10000),
        time_hours=4,
        time_minutes=57,
        type="manual",
        description=Description("Tênis"),
        created_at=None,
    ),
]


class TestPurchasesToFrame:
    """Tests for purchases_to_frame."""

    def test_columns_and_rows(self) -> None:
        """Should build one row per purchase with Portuguese headings."""
        frame = purchases_to_frame(PURCHASES)

        assert list(frame.columns) == EXPORT_COLUMNS
        assert frame.iloc[0].to_dict() == {
            "Data": "07/03/2025",
            "Descrição": "",
            "Valor": "45.90",
            "Tempo de Trabalho": "2h 16m",
            "Tipo": "Cupom Fiscal",
        }
        assert frame.iloc[1]["Data"] == ""
        assert frame.iloc[1]["Descrição"] == "Tênis"
        assert frame.iloc[1]["Tipo"] == "Cálculo Manual"

    def test_type_matches_history_label(self) -> None:
        """Should label the type the same way history labels undescribed purchases."""
        frame = purchases_to_frame(PURCHASES)

        assert frame.iloc[0]["Tipo"] == display_description(PURCHASES[0])
        assert list(frame["Tipo"]) == [DEFAULT_DESCRIPTIONS[p.type] for p in PURCHASES]

    def test_empty(self) -> None:
        """Should keep the headings with no rows."""
        frame = purchases_to_frame([])

        assert list(frame.columns) == EXPORT_COLUMNS
        assert frame.empty


class TestExportPurchasesCsv:
    """Tests for export_purchases_csv."""

    def test_writes_csv(self, tmp_path: Path) -> None:
        """Should write a CSV that reads back the same."""
        output = tmp_path / "out" / "historico.csv"

        count = export_purchases_csv(PURCHASES, output)

        assert count == 2
        lines = output.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "Data,Descrição,Valor,Tempo de Trabalho,Tipo"
        frame = pd.read_csv(output, dtype=str, keep_default_na=False)
        assert frame["Valor"].tolist() == ["45.90", "100.00"]

    def test_nothing_to_export(self, tmp_path: Path) -> None:
        """Should refuse to write an empty export."""
        with pytest.raises(ValueError, match="No purchases"):
            export_purchases_csv([], tmp_path / "out.csv")
