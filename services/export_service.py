from typing import List
from io import BytesIO
import logging

import pandas as pd
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from domain.schemas.attendance_schemas import AttendanceRow

logger = logging.getLogger("mealtrack.export")

EXPORT_COLUMNS = [
    "uniqueId",
    "name",
    "rollNo",
    "date",
    "Breakfast",
    "Lunch",
    "Snacks",
    "Dinner",
]


class ExportService:
    @staticmethod
    def rows_to_dataframe(rows: List[AttendanceRow]) -> pd.DataFrame:
        """One spreadsheet line per presence row, using the stored column names."""
        records = [row.model_dump(mode="json", by_alias=True) for row in rows]
        return pd.DataFrame(records, columns=EXPORT_COLUMNS)

    @staticmethod
    def build_workbook(rows: List[AttendanceRow], sheet_name: str = "Attendance") -> bytes:
        """
        Serialize presence rows to an .xlsx workbook.

        Rows are written verbatim, without sorting or recomputation. An empty
        row list still yields a sheet with the header line.

        Args:
            rows: Presence rows as produced by the aggregator
            sheet_name: Worksheet title

        Returns:
            The workbook as bytes
        """
        df = ExportService.rows_to_dataframe(rows)
        buffer = BytesIO()

        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
            ws = writer.sheets[sheet_name]

            # openpyxl turns strings starting with "=" into formulas; keep them as text
            for row in ws.iter_rows(min_row=2):
                for cell in row:
                    if isinstance(cell.value, str):
                        cell.data_type = "s"

            header_font = Font(bold=True)
            header_fill = PatternFill("solid", start_color="D3D3D3")
            for cell in ws[1]:
                cell.font = header_font
                cell.fill = header_fill
                cell.alignment = Alignment(horizontal="center", vertical="center")

            for col_idx, column in enumerate(EXPORT_COLUMNS, start=1):
                longest = max([len(column)] + [len(str(v)) for v in df[column]])
                ws.column_dimensions[get_column_letter(col_idx)].width = longest + 2

        logger.info("Exported %d attendance rows", len(rows))
        return buffer.getvalue()
