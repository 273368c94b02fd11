"""
Tests for reading URS sheets and writing the FS workbook and document.
"""
from io import BytesIO

import pandas as pd
import pytest
from docx import Document

from documents import FS_COLUMNS, FS_SHEET_NAME, generate_fs_document, generate_fs_workbook, read_urs_file, save_stream

FS_ROWS = [
    {
        'FS ID': 'FS-001',
        'Reference URS ID': 'URS-001',
        'Feature/Function': 'Access',
        'Description': 'Strategic user login capability with username and password',
        'Comments': 'Critical security requirement',
        'Requirement Active?': 'Yes',
    },
    {
        'FS ID': 'FS-002',
        'Reference URS ID': 'URS-002',
        'Feature/Function': 'Export',
        'Description': 'Reports export capability with integrated business functionality',
        'Comments': 'N/A',
        'Requirement Active?': 'No',
    },
]

CSV_TEXT = (
    'Requirement ID,Requirement Description,Comment\n'
    'URS-001,Users can export data,\n'
    ',,\n'
    'URS-002,Users can import data,Check\n'
)


def test_workbook_round_trips_through_pandas():
    stream = generate_fs_workbook(FS_ROWS)
    df = pd.read_excel(stream, sheet_name=FS_SHEET_NAME, dtype=str)

    assert list(df.columns) == FS_COLUMNS
    assert list(df['FS ID']) == ['FS-001', 'FS-002']
    assert df.loc[1, 'Requirement Active?'] == 'No'


def test_workbook_with_no_rows_has_header_only():
    df = pd.read_excel(generate_fs_workbook([]), sheet_name=FS_SHEET_NAME)
    assert list(df.columns) == FS_COLUMNS
    assert df.empty


def test_document_has_title_and_one_table_per_row():
    doc = Document(generate_fs_document(FS_ROWS))

    assert doc.paragraphs[0].text == 'Functional Specification'
    assert 'Total Functional Specifications: 2' in [p.text for p in doc.paragraphs]
    assert len(doc.tables) == 2
    first = doc.tables[0]
    assert [row.cells[0].text for row in first.rows] == FS_COLUMNS
    assert first.rows[2].cells[1].text == 'Access'
    headings = [p.text for p in doc.paragraphs if p.style.name == 'Heading 2']
    assert headings == ['FS-001 - Access', 'FS-002 - Export']


def test_read_csv_bytes_drops_blank_rows():
    rows = read_urs_file(CSV_TEXT.encode(), filename='urs.csv')

    assert [row['Requirement ID'] for row in rows] == ['URS-001', 'URS-002']
    assert rows[0]['Comment'] == ''
    assert rows[1]['Comment'] == 'Check'


def test_read_xlsx_bytes_and_path(tmp_path):
    buffer = BytesIO()
    pd.DataFrame([
        {'Requirement ID': 'URS-001', 'Requirement Description': 'Users can export data', 'Comment': None},
    ]).to_excel(buffer, index=False, engine='xlsxwriter')

    rows = read_urs_file(buffer.getvalue(), filename='URS.XLSX')
    assert rows == [{'Requirement ID': 'URS-001', 'Requirement Description': 'Users can export data', 'Comment': ''}]

    path = tmp_path / 'urs.xlsx'
    path.write_bytes(buffer.getvalue())
    assert read_urs_file(path) == rows


@pytest.mark.parametrize('content, filename, message', [
    (b'anything', 'urs.txt', 'Unsupported file type'),
    (b'anything', '', 'Unsupported file type'),
    (b'Requirement ID,Requirement Description\n', 'urs.csv', 'No requirement rows found'),
    (b'not a workbook', 'urs.xlsx', 'Could not read'),
])
def test_read_errors(content, filename, message):
    with pytest.raises(ValueError, match=message):
        read_urs_file(content, filename=filename)


def test_save_stream(tmp_path):
    path = save_stream(generate_fs_workbook(FS_ROWS), tmp_path / 'out.xlsx')
    assert path.exists()
    assert path.stat().st_size > 0
