import logging
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Union

import pandas as pd
from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches

logger = logging.getLogger(__name__)

FS_COLUMNS = ['FS ID', 'Reference URS ID', 'Feature/Function', 'Description', 'Comments', 'Requirement Active?']
FS_SHEET_NAME = 'Functional Specification'
FS_COLUMN_WIDTHS = [12, 15, 25, 50, 30, 15]

EXCEL_EXTENSIONS = {'.xlsx'}
CSV_EXTENSIONS = {'.csv'}

XLSX_MEDIA_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
DOCX_MEDIA_TYPE = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'


def read_urs_file(source: Union[str, Path, bytes], filename: str = '') -> List[Dict[str, Any]]:
    """Read the first sheet of a URS workbook (or a CSV) into row dicts.

    ``source`` is a path, or raw bytes together with the original
    ``filename`` so the format can be told from its extension.
    """
    if isinstance(source, (str, Path)):
        filename = filename or str(source)
    suffix = Path(filename).suffix.lower()

    if suffix not in EXCEL_EXTENSIONS | CSV_EXTENSIONS:
        raise ValueError(f"Unsupported file type: {filename or '<unnamed>'}")

    handle = BytesIO(source) if isinstance(source, bytes) else source
    try:
        if suffix in CSV_EXTENSIONS:
            df = pd.read_csv(handle, dtype=str, keep_default_na=False, na_values=[''])
        else:
            df = pd.read_excel(handle, sheet_name=0, dtype=str)
    except Exception as e:
        raise ValueError(f"Could not read {filename}: {str(e)}") from e

    df = df.dropna(how='all')
    if df.empty:
        raise ValueError(f"No requirement rows found in {filename}")

    df.columns = [str(column).strip() for column in df.columns]
    df = df.fillna('')
    logger.info(f"Read {len(df)} rows from {filename}")
    return df.to_dict(orient='records')


def fs_dataframe(rows: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
    return pd.DataFrame([{column: row.get(column, '') for column in FS_COLUMNS} for row in rows],
                        columns=FS_COLUMNS)


def generate_fs_workbook(rows: Sequence[Mapping[str, Any]]) -> BytesIO:
    """Write FS rows to an xlsx workbook held in memory."""
    df = fs_dataframe(rows)

    excel_io = BytesIO()
    with pd.ExcelWriter(excel_io, engine='xlsxwriter') as writer:
        df.to_excel(writer, sheet_name=FS_SHEET_NAME, index=False)

        workbook = writer.book
        worksheet = writer.sheets[FS_SHEET_NAME]

        header_format = workbook.add_format({
            'bold': True,
            'bg_color': '#D8E4BC',
            'border': 1
        })
        cell_format = workbook.add_format({
            'text_wrap': True,
            'valign': 'top'
        })

        for col_num, value in enumerate(df.columns.values):
            worksheet.write(0, col_num, value, header_format)

        for col_num, width in enumerate(FS_COLUMN_WIDTHS):
            worksheet.set_column(col_num, col_num, width, cell_format)

    excel_io.seek(0)
    return excel_io


def generate_fs_document(rows: Sequence[Mapping[str, Any]]) -> BytesIO:
    """Build a Word document with one detail table per FS row."""
    doc = Document()

    title = doc.add_heading('Functional Specification', 0)
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER

    doc.add_paragraph(f'Generated Date: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}')
    doc.add_paragraph(f'Total Functional Specifications: {len(rows)}')

    for row in rows:
        heading = doc.add_heading(level=2)
        heading.add_run(f"{row.get('FS ID', '')} - {row.get('Feature/Function', '')}")

        table = doc.add_table(rows=0, cols=2)
        table.style = 'Table Grid'
        table.autofit = True
        table.columns[0].width = Inches(2)
        table.columns[1].width = Inches(4)

        for label in FS_COLUMNS:
            row_cells = table.add_row().cells
            row_cells[0].text = label
            row_cells[1].text = str(row.get(label, ''))

        doc.add_paragraph()

    doc_io = BytesIO()
    doc.save(doc_io)
    doc_io.seek(0)
    return doc_io


def save_stream(stream: BytesIO, path: Union[str, Path]) -> Path:
    path = Path(path)
    with open(path, 'wb') as f:
        f.write(stream.getvalue())
    logger.info(f"Saved {path}")
    return path
