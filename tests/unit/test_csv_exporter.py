"""
Unit tests for CsvExporter.

Tests cover:
- UTF-8 BOM and header row
- Position rows and the trailing summary block
- Writing to a file
"""

import csv
import io
from decimal import Decimal

from turtletrace.csv import CSV_COLUMNS

from tests.conftest import make_position, sell


def parse(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text.lstrip("\ufeff"))))


class TestRender:

    def test_starts_with_bom_and_header(self, csv_exporter, default_account):
        text = csv_exporter.render()

        assert text.startswith("\ufeff")
        assert parse(text)[0] == CSV_COLUMNS
        assert len(CSV_COLUMNS) == 8

    def test_position_rows_and_summary(self, csv_exporter, position_repo, default_account):
        """
        GIVEN one open position of 100 shares at 1680.50 now priced 1700.00
        WHEN the CSV is rendered
        THEN it has one data row and a summary block with matching totals
        """
        position_repo.save_all([
            make_position(current_price=Decimal("1700.00"), account_id=default_account.account_id)
        ])

        rows = parse(csv_exporter.render())

        assert rows[1] == [
            "600519.SH",
            "贵州茅台",
            "100",
            "1680.50",
            "1700.00",
            "170000.00",
            "1950.00",
            "1.16",
        ]
        assert rows[2] == []
        assert rows[3] == ["汇总"]
        assert rows[5] == ["168050.00", "170000.00", "1950.00", "1.16"]

    def test_cleared_positions_are_not_listed(self, csv_exporter, position_repo, default_account):
        cleared = sell(make_position(account_id=default_account.account_id), "1700", "100")
        position_repo.save_all([cleared])

        rows = parse(csv_exporter.render())

        assert rows[1] == []
        assert rows[2] == ["汇总"]

    def test_account_view(self, csv_exporter, position_repo, default_account, second_account):
        position_repo.save_all([
            make_position(account_id=default_account.account_id),
            make_position(symbol="000858.SZ", name="五粮液", account_id=second_account.account_id),
        ])

        rows = parse(csv_exporter.render(second_account.account_id))

        assert rows[1][0] == "000858.SZ"
        assert rows[2] == []


class TestExportCsv:

    def test_writes_file(self, csv_exporter, default_account, tmp_path):
        path = csv_exporter.export_csv(str(tmp_path / "out" / "positions.csv"))

        content = path.read_text(encoding="utf-8")
        assert content.startswith("\ufeff")
        assert "股票代码" in content
