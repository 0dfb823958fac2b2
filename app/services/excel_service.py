"""
Excel processing service for guest list import/export
"""

import io
from typing import Any, Dict, List, Optional

import pandas as pd

from app.core.errors import ValidationError
from app.schemas.guest import GuestRecord

class ExcelService:
    """Service for handling Excel operations"""

    # Accepted headers per field, compared lower-cased and stripped
    COLUMN_ALIASES = {
        'name': ['name', 'guest name', 'الاسم'],
        'phone': ['phone', 'mobile', 'الجوال'],
        'category': ['category', 'الفئة'],
        'companions': ['companions', 'عدد المرافقين'],
        'notes': ['notes', 'ملاحظات'],
    }
    TEMPLATE_COLUMNS = ['Name', 'Phone', 'Category', 'Companions', 'Notes']

    @staticmethod
    def create_template() -> bytes:
        """Create Excel template with the recognised columns"""
        df = pd.DataFrame(columns=ExcelService.TEMPLATE_COLUMNS)

        # Add sample data for guidance
        sample_data = [
            ['Sample Guest 1', '0500000001', 'regular', 0, ''],
            ['Sample Guest 2', '0500000002', 'vip', 2, 'Front row'],
            ['Sample Guest 3', '0500000003', 'media', 1, ''],
        ]

        for row in sample_data:
            df.loc[len(df)] = row

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='Guest List')

        return buffer.getvalue()

    @staticmethod
    def map_columns(columns) -> Dict[str, str]:
        """Map field names to the sheet's actual column headers"""
        column_mapping = {}
        for col in columns:
            col_lower = str(col).lower().strip()
            for field, aliases in ExcelService.COLUMN_ALIASES.items():
                if field not in column_mapping and col_lower in aliases:
                    column_mapping[field] = col
        return column_mapping

    @staticmethod
    def _cell(value: Any) -> Optional[Any]:
        if pd.isna(value):
            return None
        if isinstance(value, str):
            return value.strip()
        return value

    @staticmethod
    def rows_from_dataframe(df: pd.DataFrame) -> List[Dict[str, Any]]:
        """Turn a sheet into upload rows; unmapped fields are left missing"""
        column_mapping = ExcelService.map_columns(df.columns)

        rows = []
        for _, record in df.iterrows():
            row = {
                field: ExcelService._cell(record[col])
                for field, col in column_mapping.items()
            }
            # Skip empty rows
            if all(value is None or str(value).strip() == '' for value in row.values()):
                continue
            rows.append(row)
        return rows

    @staticmethod
    def parse_guest_rows(file_content: bytes) -> List[Dict[str, Any]]:
        """Read the first sheet of an uploaded workbook"""
        try:
            # Read every cell as text; phone numbers keep their leading zeros
            df = pd.read_excel(io.BytesIO(file_content), sheet_name=0, dtype=str)
        except Exception as e:
            raise ValidationError(f"Error reading Excel file: {str(e)}")
        return ExcelService.rows_from_dataframe(df)

    @staticmethod
    def export_guests(guests: List[GuestRecord], include_checkin: bool = True) -> bytes:
        """Export guest data to Excel"""
        data = []
        for guest in guests:
            row = {
                'Name': guest.name,
                'Phone': guest.phone,
                'Category': guest.category.value,
                'Companions': guest.companions,
                'Notes': guest.notes,
                'Check-in Code': guest.qr_code,
            }
            if include_checkin:
                row['Checked In'] = 'Yes' if guest.is_checked_in else 'No'
                row['Checked In At'] = guest.checked_in_at.isoformat() if guest.checked_in_at else ''

            data.append(row)

        df = pd.DataFrame(data, columns=ExcelService.TEMPLATE_COLUMNS + ['Check-in Code'] + (
            ['Checked In', 'Checked In At'] if include_checkin else []
        ))

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='Guest List')

        return buffer.getvalue()
