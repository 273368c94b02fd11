"""
Tests for the record-level URS to FS transformation and the CLI.
"""
import json
import random
import sys

import pandas as pd
import pytest

from fallback_generator import EMPTY_DESCRIPTION, INACTIVE_NOTE
from fs_generator import FSGenerator, main, normalize_comment, prepare_rows
from requirement_analyzer import RequirementRecord


@pytest.fixture
def generator(catalog):
    return FSGenerator(catalog)


def urs_row(req_id, description, comment='', active='Yes', req_type='Functional'):
    return {
        'Requirement ID': req_id,
        'Requirement Type': req_type,
        'Link to process': 'Process',
        'Requirement Description': description,
        'Comment': comment,
        'Requirement Active?': active,
    }


@pytest.fixture
def rows(login_row):
    return [
        login_row,
        urs_row('URS-002', 'Users can export reports to Excel.'),
        urs_row('URS-003', 'Managers can approve leave requests.', comment='n/a', active='No'),
    ]


@pytest.mark.parametrize('comment, expected', [
    (None, 'N/A'),
    ('', 'N/A'),
    ('   ', 'N/A'),
    ('n/a', 'N/A'),
    ('NA', 'N/A'),
    ('-', 'N/A'),
    ('Check with QA', 'Check with QA'),
    (' padded ', ' padded '),
])
def test_normalize_comment(comment, expected):
    assert normalize_comment(comment) == expected


def test_normalize_comment_is_idempotent():
    for comment in (None, 'na', 'Keep me'):
        once = normalize_comment(comment)
        assert normalize_comment(once) == once


def test_login_requirement(generator, login_row):
    outcome = generator.transform_record(login_row, 1)

    assert outcome.used_fallback is False
    assert outcome.error is None
    assert outcome.analysis.primary_intent == 'authentication'
    assert outcome.record.to_row() == {
        'FS ID': 'FS-001',
        'Reference URS ID': 'URS-001',
        'Feature/Function': 'Access',
        'Description': 'Strategic user login capability with username and password',
        'Comments': 'Critical security requirement',
        'Requirement Active?': 'Yes',
    }


def test_ids_follow_input_order(generator, rows):
    records = generator.generate(rows)
    assert [r.fs_id for r in records] == ['FS-001', 'FS-002', 'FS-003']
    assert [r.reference_urs_id for r in records] == ['URS-001', 'URS-002', 'URS-003']
    assert records[2].comments == 'N/A'
    assert records[2].requirement_active == 'No'
    for record in records:
        assert 40 <= len(record.description) <= 180


def test_fs_id_widens_past_padding(generator):
    assert generator.format_fs_id(7) == 'FS-007'
    assert generator.format_fs_id(1000) == 'FS-1000'
    assert FSGenerator(id_prefix='FUN', id_width=4).format_fs_id(12) == 'FUN-0012'


def test_failure_downgrades_only_that_record(generator, rows, monkeypatch):
    original = generator.synthesizer.synthesize

    def flaky(record, analysis):
        if record.requirement_id == 'URS-001':
            raise RuntimeError('boom')
        return original(record, analysis)

    monkeypatch.setattr(generator.synthesizer, 'synthesize', flaky)
    outcomes = generator.transform(rows)

    first = outcomes[0]
    assert first.used_fallback is True
    assert first.error == 'boom'
    assert first.analysis is None
    assert first.record.fs_id == 'FS-001'
    assert first.record.feature == 'User Authentication Module'
    assert first.record.comments == (
        'Original: Critical security requirement; '
        'Implementation: Requires UI components and business logic validation; '
        'Priority: High - Active requirement'
    )
    assert not any(outcome.used_fallback for outcome in outcomes[1:])


def test_malformed_row_still_produces_a_record(generator):
    outcome = generator.transform_record(42, 1)

    assert outcome.used_fallback is True
    assert outcome.record.reference_urs_id == ''
    assert outcome.record.feature == 'System Component'
    assert outcome.record.description == EMPTY_DESCRIPTION
    assert outcome.record.comments == INACTIVE_NOTE


def test_record_with_non_string_fields_does_not_abort_the_run(generator):
    outcomes = generator.transform([
        RequirementRecord(requirement_id='URS-1', requirement_description=None),
        RequirementRecord(requirement_id='URS-2', requirement_description='Export data'),
    ])

    assert len(outcomes) == 2
    broken, healthy = outcomes
    assert broken.used_fallback is True
    assert broken.error
    assert broken.record.fs_id == 'FS-001'
    assert broken.record.reference_urs_id == 'URS-1'
    assert broken.record.feature == 'System Component'
    assert broken.record.description == EMPTY_DESCRIPTION
    assert broken.record.comments == INACTIVE_NOTE
    assert healthy.used_fallback is False
    assert healthy.record.fs_id == 'FS-002'


def test_accepts_requirement_records(generator, login_record, login_row):
    assert generator.transform_record(login_record, 1) == generator.transform_record(login_row, 1)


def test_to_dict_with_analysis(generator, login_row):
    data = generator.transform_record(login_row, 1).to_dict(include_analysis=True)
    assert data['FS ID'] == 'FS-001'
    assert data['analysis']['primaryIntent'] == 'authentication'
    assert data['used_fallback'] is False
    assert data['error'] is None
    assert 'analysis' not in generator.transform_record(login_row, 1).to_dict()


def test_seeded_runs_repeat(catalog, rows):
    blank = urs_row('URS-004', '')
    first = FSGenerator(catalog, rng=random.Random(7)).generate(rows + [blank])
    second = FSGenerator(catalog, rng=random.Random(7)).generate(rows + [blank])
    assert first == second


def test_from_settings_reads_environment(monkeypatch):
    monkeypatch.setenv('FS_ID_PREFIX', 'FUN')
    monkeypatch.setenv('FS_ID_WIDTH', '4')
    assert FSGenerator.from_settings().format_fs_id(1) == 'FUN-0001'


def test_prepare_rows_maps_headers():
    prepared = prepare_rows([{'ID': 'A-1', 'Details': 'Export data', 'Status': 'Yes'}])
    assert prepared[0]['Requirement ID'] == 'A-1'
    assert prepared[0]['Requirement Description'] == 'Export data'
    assert prepared[0]['Requirement Type'] == 'Functional'
    assert prepare_rows([]) == []


def test_cli_writes_workbook_and_docx(tmp_path, rows, monkeypatch, capsys):
    source = tmp_path / 'urs.csv'
    pd.DataFrame(rows).to_csv(source, index=False)
    output = tmp_path / 'fs.xlsx'
    docx_path = tmp_path / 'fs.docx'

    monkeypatch.setenv('FS_LOG_FILE', '')
    monkeypatch.setattr(sys, 'argv', [
        'urs-to-fs', '-i', str(source), '-o', str(output), '--docx', str(docx_path), '--json', '--seed', '1'
    ])
    main()

    df = pd.read_excel(output, sheet_name='Functional Specification', dtype=str)
    assert list(df['FS ID']) == ['FS-001', 'FS-002', 'FS-003']
    assert list(df['Reference URS ID']) == ['URS-001', 'URS-002', 'URS-003']
    assert docx_path.exists()

    printed = json.loads(capsys.readouterr().out)
    assert len(printed) == 3
    assert printed[0]['analysis']['primaryIntent'] == 'authentication'


def test_cli_exits_on_unreadable_input(tmp_path, monkeypatch):
    monkeypatch.setenv('FS_LOG_FILE', '')
    monkeypatch.setattr(sys, 'argv', ['urs-to-fs', '-i', str(tmp_path / 'missing.csv')])
    with pytest.raises(SystemExit) as exc_info:
        main()
    assert exc_info.value.code == 1
