"""CSV export of positions with a profit summary block."""

import csv
import io
from pathlib import Path
from typing import Optional

from turtletrace.services.analysis_service import AnalysisService

CSV_COLUMNS = [
    "股票代码",
    "股票名称",
    "持仓数量",
    "成本价",
    "当前价格",
    "市值",
    "盈亏",
    "盈亏比例(%)",
]

SUMMARY_TITLE = "汇总"
SUMMARY_COLUMNS = ["总成本", "总市值", "总盈亏", "总收益率(%)"]

# Byte-order mark so spreadsheet apps detect UTF-8
BOM = "\ufeff"


def _money(value) -> str:
    return f"{value:.2f}"


class CsvExporter:
    """
    CSV exporter for the open positions in an account view.

    One row per open position, then a blank line and a summary block with
    portfolio totals.
    """

    def __init__(self, analysis_service: AnalysisService):
        self._analysis = analysis_service

    def render(self, account_id: Optional[str] = None) -> str:
        """Return the CSV document, including the leading BOM."""
        summary = self._analysis.summary(account_id)

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_COLUMNS)
        for item in summary.positions:
            writer.writerow([
                item.symbol,
                item.name,
                str(item.quantity),
                _money(item.cost_price),
                _money(item.current_price),
                _money(item.value),
                _money(item.profit),
                _money(item.profit_percent),
            ])

        writer.writerow([])
        writer.writerow([SUMMARY_TITLE])
        writer.writerow(SUMMARY_COLUMNS)
        writer.writerow([
            _money(summary.total_cost),
            _money(summary.total_value),
            _money(summary.total_profit),
            _money(summary.total_profit_percent),
        ])
        return BOM + buffer.getvalue()

    def export_csv(self, path: str, account_id: Optional[str] = None) -> Path:
        """
        Write the CSV document to a file.

        Args:
            path: Output file path
            account_id: Account view to export (None = all accounts)
        """
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w", newline="", encoding="utf-8") as csvfile:
            csvfile.write(self.render(account_id))
        return file_path
