import re
from typing import Dict, List

from requirement_analyzer import RequirementRecord

FEATURE_TEMPLATES = {
    'functional': [
        'User Interface Module',
        'Data Processing Engine',
        'Business Logic Controller',
        'Validation Framework',
        'Workflow Management System'
    ],
    'non-functional': [
        'Performance Optimization',
        'Security Framework',
        'Scalability Module',
        'Reliability System',
        'Usability Enhancement'
    ],
    'interface': [
        'API Integration Layer',
        'External System Interface',
        'Data Exchange Module',
        'Communication Protocol',
        'Integration Gateway'
    ],
    'data': [
        'Data Management System',
        'Database Interface',
        'Data Validation Module',
        'Information Repository',
        'Data Processing Pipeline'
    ],
    'security': [
        'Authentication Module',
        'Authorization Framework',
        'Security Validation System',
        'Access Control Module',
        'Data Protection System'
    ],
    'default': [
        'System Component',
        'Application Module',
        'Processing Unit',
        'Control System',
        'Management Interface'
    ]
}

KEYWORD_FEATURES = [
    (('login', 'authentication'), 'User Authentication Module'),
    (('report', 'dashboard'), 'Reporting and Analytics Dashboard'),
    (('search', 'filter'), 'Advanced Search and Filter System'),
    (('notification', 'alert'), 'Notification Management System'),
    (('backup', 'restore'), 'Data Backup and Recovery Module'),
    (('export', 'import'), 'Data Import/Export Functionality'),
    (('validation', 'verify'), 'Data Validation Framework'),
    (('configuration', 'setting'), 'System Configuration Interface'),
]

DESCRIPTION_TEMPLATES = {
    'functional': (
        "This functional requirement specifies that {text}. The implementation shall include proper "
        "error handling, data validation, and user feedback mechanisms."
    ),
    'non-functional': (
        "This non-functional requirement defines performance criteria where {text}. The system must meet "
        "specified benchmarks for response time, throughput, and resource utilization."
    ),
    'interface': (
        "This interface requirement establishes that {text}. The implementation shall ensure secure data "
        "exchange, proper protocol adherence, and error recovery procedures."
    ),
    'security': (
        "This security requirement mandates that {text}. The implementation must incorporate encryption, "
        "access controls, and audit logging capabilities."
    ),
}

# A leading subject is absorbed so the phrase does not repeat it
MODAL_ENHANCEMENTS = [
    ('shall', 'The system shall implement'),
    ('must', 'The application must provide'),
    ('should', 'The platform should include'),
    ('will', 'The solution will feature'),
    ('can', 'The system can support'),
    ('may', 'The application may offer'),
]
_SUBJECT = r'(?:\bthe\s+(?:system|application|platform|solution)\s+)?'
COMPILED_MODAL_ENHANCEMENTS = [
    (re.compile(r'\b' + modal + r'\b', re.IGNORECASE),
     re.compile(_SUBJECT + r'\b' + modal + r'\b', re.IGNORECASE),
     phrase)
    for modal, phrase in MODAL_ENHANCEMENTS
]

IMPLEMENTATION_NOTES = {
    'functional': 'Implementation: Requires UI components and business logic validation',
    'non-functional': 'Implementation: Requires performance monitoring and optimization',
    'interface': 'Implementation: Requires API design and integration testing',
    'security': 'Implementation: Requires security testing and compliance validation',
}

EMPTY_DESCRIPTION = 'Functional specification to be defined'
MAX_FALLBACK_DESCRIPTION = 500
ACTIVE_NOTE = 'Priority: High - Active requirement'
INACTIVE_NOTE = 'Priority: Low - Inactive requirement'


class FallbackGenerator:
    """Reduced rule-based generator used when the full pipeline fails.

    Every branch here works on plain strings with fixed tables, so it has
    nothing that can raise for unusual record contents.
    """

    def feature(self, record: RequirementRecord, fs_index: int) -> str:
        text = record.requirement_description.lower()
        for keywords, feature in KEYWORD_FEATURES:
            if any(keyword in text for keyword in keywords):
                return feature

        templates = FEATURE_TEMPLATES.get(record.requirement_type.strip().lower(), FEATURE_TEMPLATES['default'])
        return templates[(max(fs_index, 1) - 1) % len(templates)]

    def description(self, record: RequirementRecord) -> str:
        original = record.requirement_description.strip()
        if not original:
            return EMPTY_DESCRIPTION

        req_type = record.requirement_type.strip().lower()
        template = DESCRIPTION_TEMPLATES.get(req_type)
        if template:
            enhanced = template.format(text=original.rstrip('.').lower())
        else:
            enhanced = original
            for trigger, replacer, phrase in COMPILED_MODAL_ENHANCEMENTS:
                if trigger.search(enhanced):
                    enhanced = replacer.sub(phrase, enhanced)
                    break

        if len(enhanced) > MAX_FALLBACK_DESCRIPTION:
            enhanced = enhanced[:MAX_FALLBACK_DESCRIPTION - 3] + '...'
        return enhanced

    def comments(self, record: RequirementRecord) -> str:
        comments: List[str] = []

        if record.comment.strip():
            comments.append(f"Original: {record.comment}")

        note = IMPLEMENTATION_NOTES.get(record.requirement_type.strip().lower())
        if note:
            comments.append(note)

        if record.requirement_active.strip().lower() == 'yes':
            comments.append(ACTIVE_NOTE)
        else:
            comments.append(INACTIVE_NOTE)

        return '; '.join(comments)

    def generate(self, record: RequirementRecord, fs_index: int) -> Dict[str, str]:
        """Feature, description and comments for one record."""
        return {
            'feature': self.feature(record, fs_index),
            'description': self.description(record),
            'comments': self.comments(record),
        }
