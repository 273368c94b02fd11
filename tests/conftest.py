import os

import pytest

# Keep test runs from writing a log file into the working directory
os.environ.setdefault('FS_LOG_FILE', '')

from patterns import load_default_catalog
from requirement_analyzer import RequirementAnalyzer, RequirementRecord


LOGIN_ROW = {
    'Requirement ID': 'URS-001',
    'Requirement Type': 'Functional',
    'Link to process': 'User Login',
    'Requirement Description': 'The system shall allow users to login with username and password.',
    'Comment': 'Critical security requirement',
    'Requirement Active?': 'Yes',
}


@pytest.fixture
def catalog():
    return load_default_catalog()


@pytest.fixture
def analyzer(catalog):
    return RequirementAnalyzer(catalog)


@pytest.fixture
def login_row():
    return dict(LOGIN_ROW)


@pytest.fixture
def login_record():
    return RequirementRecord.from_row(LOGIN_ROW)
