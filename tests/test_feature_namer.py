"""
Tests for Feature/Function label selection.
"""
import pytest

from feature_namer import FeatureNamer
from requirement_analyzer import Analysis


@pytest.fixture
def namer(catalog):
    return FeatureNamer(catalog)


def analysis(complexity='moderate', intent='dataProcessing'):
    return Analysis(primary_intent=intent, complexity=complexity)


@pytest.mark.parametrize('complexity, expected', [
    ('simple', 'Login'),
    ('moderate', 'Access'),
    ('complex', 'Entry'),
])
def test_login_names_follow_complexity(namer, complexity, expected):
    description = 'Users shall login with their username'
    assert namer.name(description, analysis(complexity)) == expected


def test_password_group(namer):
    assert namer.name('Reset a forgotten password', analysis()) == 'Verification'


def test_first_matching_rule_wins(namer):
    # "save" is listed before "search"
    assert namer.name('Save the search criteria', analysis()) == 'Storage'


def test_three_name_groups_pick_middle(namer):
    assert namer.name('Delete stale records', analysis()) == 'Removal'


def test_intent_default_when_no_pattern_matches(namer):
    assert namer.name('qwerty zzz', analysis(intent='reporting')) == 'Reports'
    assert namer.name('qwerty zzz', analysis(intent='performance')) == 'Optimizer'


def test_unknown_intent_gets_generic_name(namer):
    assert namer.name('', analysis(intent='telepathy')) == 'Feature'
