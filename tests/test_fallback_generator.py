"""
Tests for the reduced rule-based generator used when synthesis fails.
"""
import pytest

from fallback_generator import EMPTY_DESCRIPTION, FallbackGenerator
from requirement_analyzer import RequirementRecord


@pytest.fixture
def fallback():
    return FallbackGenerator()


def rec(description='', req_type='', comment='', active=''):
    return RequirementRecord(
        requirement_id='URS-200',
        requirement_type=req_type,
        requirement_description=description,
        comment=comment,
        requirement_active=active,
    )


def test_keyword_feature(fallback):
    assert fallback.feature(rec('Generate a monthly report'), 1) == 'Reporting and Analytics Dashboard'
    assert fallback.feature(rec('Users login via SSO'), 1) == 'User Authentication Module'


def test_type_template_is_picked_by_position(fallback):
    assert fallback.feature(rec('zzz', 'Security'), 1) == 'Authentication Module'
    assert fallback.feature(rec('zzz', 'Security'), 7) == 'Authorization Framework'
    assert fallback.feature(rec('zzz', 'Unknown'), 1) == 'System Component'


def test_empty_description(fallback):
    assert fallback.description(rec('   ')) == EMPTY_DESCRIPTION


def test_typed_description_template(fallback):
    result = fallback.description(rec('Users can export data.', 'Functional'))
    assert result == (
        'This functional requirement specifies that users can export data. The implementation shall '
        'include proper error handling, data validation, and user feedback mechanisms.'
    )


def test_untyped_description_enhances_first_modal(fallback):
    result = fallback.description(rec('The system shall store audit logs', 'Data'))
    assert result == 'The system shall implement store audit logs'


def test_description_is_truncated(fallback):
    result = fallback.description(rec('x' * 600, 'Other'))
    assert len(result) == 500
    assert result.endswith('...')


def test_comments_combine_original_note_and_status(fallback):
    result = fallback.comments(rec(comment='Check with QA', req_type='Interface', active='Yes'))
    assert result == (
        'Original: Check with QA; Implementation: Requires API design and integration testing; '
        'Priority: High - Active requirement'
    )


def test_comments_for_inactive_untyped_record(fallback):
    assert fallback.comments(rec(active='No')) == 'Priority: Low - Inactive requirement'


def test_generate_returns_all_parts(fallback):
    generated = fallback.generate(RequirementRecord(), 3)
    assert generated == {
        'feature': 'Processing Unit',
        'description': EMPTY_DESCRIPTION,
        'comments': 'Priority: Low - Inactive requirement',
    }
