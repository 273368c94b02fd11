"""
Tests for the FastAPI endpoints.
"""
import io
import zipfile

import pytest
from docx import Document
from fastapi.testclient import TestClient

from main import app

CSV_BYTES = (
    'Requirement ID,Requirement Type,Link to process,Requirement Description,Comment,Requirement Active?\n'
    'URS-001,Functional,User Login,The system shall allow users to login with username and password.,'
    'Critical security requirement,Yes\n'
    'URS-002,Functional,Reporting,Users can export reports to Excel.,,Yes\n'
).encode()


@pytest.fixture
def client():
    return TestClient(app)


def upload(name='urs.csv', content=CSV_BYTES):
    return {'file': (name, content, 'text/csv')}


def test_root(client):
    response = client.get('/')
    assert response.status_code == 200
    body = response.json()
    assert body['required_columns'][0] == 'Requirement ID'
    assert '/transform' in body['endpoints']


def test_map_columns(client):
    response = client.post('/map_columns', json={'columns': ['ID', 'Details', 'Notes']})
    assert response.status_code == 200
    body = response.json()
    assert body['mapping']['Requirement Description'] == 'Details'
    assert body['needs_mapping'] is True
    assert 'Requirement Type' in body['unmapped_required']


def test_transform_with_analysis(client, login_row):
    response = client.post('/transform', json={'records': [login_row], 'include_analysis': True})
    assert response.status_code == 200
    body = response.json()
    assert body['success'] is True
    assert body['count'] == 1
    record = body['fs_records'][0]
    assert record['FS ID'] == 'FS-001'
    assert record['Reference URS ID'] == 'URS-001'
    assert record['analysis']['primaryIntent'] == 'authentication'
    assert record['used_fallback'] is False
    assert 'mapping' not in body


def test_transform_maps_columns(client):
    response = client.post('/transform', json={
        'records': [{'ID': 'A-7', 'Details': 'Users can search orders', 'Status': 'Yes'}],
        'map_columns': True,
    })
    assert response.status_code == 200
    body = response.json()
    assert body['fs_records'][0]['Reference URS ID'] == 'A-7'
    assert body['mapping']['mapping']['Requirement ID'] == 'ID'
    assert 'analysis' not in body['fs_records'][0]


def test_upload_csv(client):
    response = client.post('/upload-urs/', files=upload())
    assert response.status_code == 200
    body = response.json()
    assert body['filename'] == 'urs.csv'
    assert body['count'] == 2
    assert [r['FS ID'] for r in body['fs_records']] == ['FS-001', 'FS-002']
    assert body['fs_records'][1]['Comments'] == 'N/A'
    assert body['mapping']['needs_mapping'] is False


def test_upload_rejects_unsupported_file(client):
    response = client.post('/upload-urs/', files=upload('urs.txt', b'hello'))
    assert response.status_code == 400
    assert 'Unsupported file type' in response.json()['detail']


def test_generate_excel(client):
    response = client.post('/generate-documents', files=upload())
    assert response.status_code == 200
    assert response.headers['content-type'].startswith('application/vnd.openxmlformats')
    assert 'functional_specification.xlsx' in response.headers['content-disposition']


def test_generate_word(client):
    response = client.post('/generate-documents?format=word', files=upload())
    assert response.status_code == 200
    doc = Document(io.BytesIO(response.content))
    assert len(doc.tables) == 2


def test_generate_both_returns_zip(client):
    response = client.post('/generate-documents?format=both', files=upload())
    assert response.status_code == 200
    with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
        assert sorted(archive.namelist()) == ['functional_specification.docx', 'functional_specification.xlsx']


def test_generate_rejects_unknown_format(client):
    response = client.post('/generate-documents?format=pdf', files=upload())
    assert response.status_code == 422
