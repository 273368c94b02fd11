import re
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from re import Pattern
from typing import Mapping, Tuple

FLAGS = re.IGNORECASE

# Declared order is the tie-break order for intent scoring
INTENT_PATTERNS = (
    ('authentication', r'\b(login|authenticate|sign[- ]?in|credentials|password|username|access control)\b'),
    ('authorization', r'\b(permission|role|access level|privilege|rights|authorize)\b'),
    ('dataProcessing', r'\b(process|calculate|compute|transform|convert|validate|parse)\b'),
    ('reporting', r'\b(report|dashboard|analytics|chart|graph|export|print)\b'),
    ('search', r'\b(search|filter|find|query|lookup|retrieve)\b'),
    ('notification', r'\b(notify|alert|email|message|notification|inform)\b'),
    ('integration', r'\b(integrate|API|interface|connect|external|third[- ]?party)\b'),
    ('storage', r'\b(store|save|database|persist|backup|archive)\b'),
    ('security', r'\b(encrypt|secure|protect|firewall|SSL|TLS|hash)\b'),
    ('performance', r'\b(fast|quick|speed|response time|performance|optimize)\b'),
    ('userInterface', r'\b(UI|interface|screen|form|button|menu|display)\b'),
    ('workflow', r'\b(workflow|process|step|approval|review|routing)\b'),
)

INTENTS = tuple(name for name, _ in INTENT_PATTERNS)
DEFAULT_INTENT = 'dataProcessing'

ACTION_VERBS = r'\b(shall|must|should|will|can|may|need to|required to|able to)\b'
SIMPLE_INDICATORS = r'\b(simple|basic|straightforward|easy)\b'
COMPLEX_INDICATORS = r'\b(complex|advanced|sophisticated|multi[- ]?step)\b'
REAL_TIME_INDICATORS = r'\b(real[- ]?time|instant|immediate|live)\b'
BATCH_INDICATORS = r'\b(batch|scheduled|periodic|bulk)\b'

HIGH_VALUE_INDICATORS = r'\b(critical|essential|core|primary|key|strategic|important)\b'
LOW_VALUE_INDICATORS = r'\b(nice to have|optional|minor|secondary|convenience)\b'
HIGH_IMPACT_INDICATORS = r'\b(user experience|efficiency|productivity|workflow|daily|frequent)\b'
LOW_IMPACT_INDICATORS = r'\b(admin|administrative|backend|internal|system)\b'

PRIORITY_HIGH_TERMS = ('high', 'critical', 'urgent')
PRIORITY_LOW_TERMS = ('low',)
OPTIONAL_PHRASES = ('nice to have', 'optional')

# Tag order is the emission order of technical requirements
TECHNICAL_TAGS = (
    ('Security compliance', 'security'),
    ('Performance optimization', 'performance'),
    ('System integration', 'integration'),
    ('Real-time processing', 'realTime'),
)

FEATURE_NAME_RULES = (
    # Login/Authentication
    (r'login|log in|sign in|authenticate', ('Login', 'SignIn', 'Access', 'Entry')),
    (r'password|credential|verification', ('Password', 'Credentials', 'Verification', 'Security')),
    # User management
    (r'user.*creat|add.*user|register', ('Registration', 'Enrollment', 'Signup')),
    (r'user.*manag|edit.*user|update.*user', ('UserManagement', 'Profile', 'Account')),
    # Data operations
    (r'save|store|persist', ('Save', 'Storage', 'Persistence')),
    (r'search|find|lookup', ('Search', 'Finder', 'Lookup')),
    (r'filter|sort|order', ('Filter', 'Sorting', 'Organization')),
    (r'export|download|extract', ('Export', 'Download', 'Extraction')),
    (r'import|upload|load', ('Import', 'Upload', 'Loading')),
    (r'delete|remove|purge', ('Delete', 'Removal', 'Cleanup')),
    (r'edit|modify|update|change', ('Edit', 'Update', 'Modification')),
    (r'view|display|show|present', ('View', 'Display', 'Presentation')),
    # Business processes
    (r'calculat|comput|process', ('Calculator', 'Processor', 'Engine')),
    (r'validat|check|verify', ('Validator', 'Checker', 'Verification')),
    (r'generat.*report|report.*generat', ('ReportGenerator', 'Reports', 'Analytics')),
    (r'approv|review|confirm', ('Approval', 'Review', 'Confirmation')),
    (r'assign|allocat|distribut', ('Assignment', 'Allocation', 'Distribution')),
    (r'track|monitor|watch', ('Tracker', 'Monitor', 'Surveillance')),
    # Communication
    (r'notif|alert|inform', ('Notifications', 'Alerts', 'Messaging')),
    (r'email|mail|send.*message', ('Email', 'Messaging', 'Communication')),
    (r'remind|schedul.*notif', ('Reminders', 'Scheduler', 'Alerts')),
    # Integration
    (r'integrat|connect|link', ('Integration', 'Connector', 'Bridge')),
    (r'sync|synchroniz', ('Sync', 'Synchronizer', 'Harmony')),
    (r'api|interface|endpoint', ('API', 'Interface', 'Gateway')),
    # Dashboard/UI
    (r'dashboard|summary|overview', ('Dashboard', 'Overview', 'Summary')),
    (r'menu|navigat|browse', ('Navigation', 'Menu', 'Browser')),
    (r'form|input|entry', ('Forms', 'Input', 'DataEntry')),
    (r'chart|graph|visual', ('Charts', 'Visualization', 'Graphics')),
    # Workflow
    (r'workflow|process|flow', ('Workflow', 'Process', 'Pipeline')),
    (r'automat|schedul', ('Automation', 'Scheduler', 'Robot')),
    (r'queue|batch|bulk', ('Queue', 'BatchProcessor', 'BulkHandler')),
)

INTENT_FEATURE_NAMES = {
    'authentication': 'Login',
    'authorization': 'Permissions',
    'dataProcessing': 'Processor',
    'reporting': 'Reports',
    'search': 'Search',
    'notification': 'Notifications',
    'integration': 'Integration',
    'storage': 'Storage',
    'security': 'Security',
    'userInterface': 'Interface',
    'workflow': 'Workflow',
    'performance': 'Optimizer',
}
DEFAULT_FEATURE_NAME = 'Feature'

MODALS = r'(?:shall|must|should|will|needs? to|has to|is required to)'

CLEANING_RULES = (
    (r'\b(?:the\s+)?(?:system|application|app|software|platform)\s+' + MODALS + r'\s+', ''),
    (r'\b(?:user|users)\s+(?:shall|must|should|will|can|may)\s+', 'User '),
    (r'\b' + MODALS + r'\s+', ''),
    (r'\b(?:be\s+)?able\s+to\s+', ''),
)

SENTENCE_SPLIT = r'[.!;]'
MIN_FRAGMENT_LENGTH = 5

# Subject-specific rules come before the generic verb/object rules
SENTENCE_RULES = (
    (r'\blogin\s+(process|procedure|functionality)', 'User authentication and access control'),
    (r'\bpassword\s+(management|handling|processing)', 'Password security and credential management'),
    (r'\bdata\s+(entry|input|capture)', 'Information capture and data entry system'),
    (r'\bfile\s+(upload|download|transfer)', 'File transfer and document management'),
    (r'\breport\s+(generation|creation|production)', 'Dynamic report generation and analytics'),
    (r'\bemail\s+(sending|delivery|transmission)', 'Email communication and message delivery'),
    (r'\bnotification\s+(system|service|mechanism)', 'Alert notification and communication system'),
    (r'\bsearch\s+(functionality|capability|feature)', 'Advanced search and information discovery'),
    (r'\bdashboard\s+(display|presentation|interface)', 'Interactive dashboard and data visualization'),
    (r'\bworkflow\s+(management|control|processing)', 'Business workflow orchestration and automation'),
    (r'\buser\s+(interface|experience|interaction)', 'User interface design and interaction management'),
    (r'\bdatabase\s+(operations|management|handling)', 'Database operations and data persistence'),
    (r'\bapi\s+(integration|connectivity|interface)', 'API integration and external system connectivity'),
    (r'\bsecurity\s+(measures|controls|protocols)', 'Security framework and protection protocols'),
    (r'\bvalidation\s+(rules|logic|processing)', 'Data validation and integrity assurance'),
    (r'\baudit\s+(trail|logging|tracking)', 'Audit trail and activity monitoring system'),
    (r'\bbackup\s+(procedures|processes|operations)', 'Data backup and recovery management'),
    (r'\bperformance\s+(optimization|monitoring|management)', 'System performance optimization and monitoring'),
    (r'\berror\s+(handling|management|processing)', 'Error handling and exception management'),
    (r'\bconfiguration\s+(management|settings|options)', 'System configuration and settings management'),
    (r'\b(?:allow|enable|permit)\s+(?:users?)\s+to\s+(\w+)', r'User \1 capability'),
    (r'\b(?:users?)\s+(?:can|may|shall be able to|should be able to)\s+(\w+)', r'User \1 functionality'),
    (r'\b(?:system|application)\s+(?:shall|must|should|will)\s+(\w+)', r'System \1 processing'),
    (r'\b(?:provide|offer|deliver)\s+(\w+)', r'\1 delivery service'),
    (r'\b(?:ensure|guarantee)\s+(\w+)', r'\1 assurance mechanism'),
    (r'\b(?:maintain|preserve)\s+(\w+)', r'\1 maintenance system'),
    (r'\b(?:support|facilitate)\s+(\w+)', r'\1 support framework'),
    (r'\b(?:manage|control)\s+(\w+)', r'\1 management system'),
    (r'\b(?:monitor|track)\s+(\w+)', r'\1 monitoring capability'),
    (r'\b(?:validate|verify|check)\s+(\w+)', r'\1 validation system'),
    (r'\b(?:process|handle)\s+(\w+)', r'\1 processing engine'),
    (r'\b(?:store|save|persist)\s+(\w+)', r'\1 storage mechanism'),
    (r'\b(?:retrieve|fetch|get)\s+(\w+)', r'\1 retrieval system'),
    (r'\b(?:display|show|present)\s+(\w+)', r'\1 presentation interface'),
    (r'\b(?:calculate|compute)\s+(\w+)', r'\1 calculation engine'),
    (r'\b(?:generate|create|produce)\s+(\w+)', r'\1 generation system'),
    (r'\b(?:send|transmit|deliver)\s+(\w+)', r'\1 transmission service'),
    (r'\b(?:receive|accept)\s+(\w+)', r'\1 reception mechanism'),
    (r'\b(?:update|modify|change)\s+(\w+)', r'\1 modification system'),
    (r'\b(?:delete|remove)\s+(\w+)', r'\1 removal capability'),
    (r'\b(?:search|find|lookup)\s+(\w+)', r'\1 search functionality'),
    (r'\b(?:filter|sort)\s+(\w+)', r'\1 filtering system'),
    (r'\b(?:export|extract)\s+(\w+)', r'\1 export capability'),
    (r'\b(?:import|load)\s+(\w+)', r'\1 import mechanism'),
    (r'\b(?:backup|archive)\s+(\w+)', r'\1 backup system'),
    (r'\b(?:restore|recover)\s+(\w+)', r'\1 recovery mechanism'),
    (r'\b(?:configure|setup)\s+(\w+)', r'\1 configuration system'),
    (r'\b(?:integrate|connect)\s+(\w+)', r'\1 integration capability'),
    (r'\b(?:synchronize|sync)\s+(\w+)', r'\1 synchronization system'),
    (r'\b(?:notify|alert|inform)\s+(\w+)', r'\1 notification service'),
    (r'\b(?:approve|authorize)\s+(\w+)', r'\1 approval workflow'),
    (r'\b(?:assign|allocate)\s+(\w+)', r'\1 assignment system'),
    (r'\b(?:schedule|plan)\s+(\w+)', r'\1 scheduling capability'),
    (r'\b(?:report|summarize)\s+(\w+)', r'\1 reporting system'),
    (r'\b(?:analyze|evaluate)\s+(\w+)', r'\1 analysis engine'),
)

COMPLEMENTARY_OVERLAP = 0.7
COMBINE_PREFIXES = ('with ', 'including ', 'featuring ')
MIN_RECOMBINED_LENGTH = 20

PARAPHRASE_RULES = (
    (r'\b(?:shall|must|should|will|can|may|needs? to|has to|is required to)\s+', ''),
    (r'\b(?:user|users|end user|end users)\s+', 'User '),
    (r'\b(?:system|application|software)\s+', 'System '),
)
CAPABILITY_NOUNS = (
    r'\b(system|capability|functionality|service|mechanism|engine|framework|interface|management'
    r'|processing|delivery|generation|creation|handling|control)\b'
)
CAPABILITY_LEADING_WORDS = (
    'User', 'System', 'Data', 'Information', 'Business', 'Application', 'Service', 'Interface',
    'Processing', 'Management', 'Security', 'Performance', 'Integration', 'Communication',
    'Workflow', 'Report', 'Analytics', 'Dashboard', 'Search', 'Validation', 'Authentication',
    'Authorization', 'Notification', 'Configuration', 'Monitoring', 'Backup', 'Recovery',
    'Export', 'Import', 'Storage', 'Retrieval', 'Calculation', 'Generation', 'Transmission',
    'Reception', 'Modification', 'Display', 'Presentation',
)
CAPABILITY_PREFIXES = {
    'authentication': 'User authentication',
    'authorization': 'Access control',
    'dataProcessing': 'Data processing',
    'reporting': 'Report generation',
    'search': 'Search capability',
    'notification': 'Notification service',
    'integration': 'System integration',
    'storage': 'Data storage',
    'security': 'Security framework',
    'userInterface': 'User interface',
    'workflow': 'Workflow management',
    'performance': 'Performance optimization',
}
DEFAULT_CAPABILITY_PREFIX = 'System capability'

TECHNICAL_DETAILS = (
    (r'\b(encryption|encrypted|secure|ssl|https)\b', 'with security encryption'),
    (r'\b(real[- ]time|immediate|instant)\b', 'with real-time processing'),
    (r'\b(validation|verify|check)\b', 'including data validation'),
    (r'\b(api|external|third party)\b', 'with external system integration'),
    (r'\b(email|sms|notifications?)\b', 'with automated notifications'),
    (r'\b(audit|log|logs|logging|track|tracking)\b', 'including audit trail capabilities'),
    (r'\b(backup|recovery|restore)\b', 'with backup and recovery features'),
    (r'\b(excel|pdf|csv)\b', 'supporting multiple export formats'),
)
MAX_TECHNICAL_DETAILS = 2

SPECIFIC_TERM_PATTERNS = (
    # Business
    r'\b(invoice|receipt|purchase\s*order|contract|agreement|policy|procedure)\w*',
    r'\b(customer\s*service|help\s*desk|support\s*ticket|incident|request)\w*',
    r'\b(inventory|stock|warehouse|shipping|delivery|logistics)\w*',
    r'\b(payroll|salary|benefits|vacation|leave|attendance)\w*',
    r'\b(budget|forecast|revenue|expense|cost\s*center|profit)\w*',
    r'\b(project|milestone|deadline|timeline|gantt|schedule)\w*',
    r'\b(quality\s*assurance|testing|validation|verification|compliance)\w*',
    r'\b(marketing|campaign|promotion|advertisement|lead|prospect)\w*',
    # Technical
    r'\b(database|table|schema|query|index|trigger)\w*',
    r'\b(api|endpoint|json|xml|rest|soap|http|https)\w*',
    r'\b(encryption|certificate|token|session|cookie|cache)\w*',
    r'\b(workflow|pipeline|queue|batch|scheduler|cron)\w*',
    r'\b(mobile|tablet|responsive|android|ios|app)\w*',
    r'\b(excel|csv|pdf|word|powerpoint|format)\w*',
    # Industry
    r'\b(patient|medical|healthcare|hospital|clinic|doctor)\w*',
    r'\b(student|teacher|course|curriculum|grade|academic)\w*',
    r'\b(loan|mortgage|credit|debit|banking|financial)\w*',
    r'\b(manufacturing|production|assembly|quality|defect)\w*',
    r'\b(retail|sales|pos|checkout|payment|transaction)\w*',
    r'\b(legal|court|case|attorney|law|regulation)\w*',
)
MAX_SPECIFIC_TERMS = 3
MIN_SPECIFIC_TERM_LENGTH = 4

QUANTITY_PATTERNS = (
    r'\b\d+\s*(?:percent|%|percentage|hours?|minutes?|seconds?|days?|weeks?|months?|years?)',
    r'\b(?:within|after|before|up\s*to|at\s*least|maximum|minimum)\s+\d+\s*\w*',
    r'\b\d+\s*(?:users?|records?|items?|files?|documents?|entries?)',
    r'\b(?:first|second|third|last|\d+(?:st|nd|rd|th))\s+\w*',
    r'\b(?:daily|weekly|monthly|quarterly|annually|hourly)\b',
    r'\b(?:real[\s-]?time|immediate|instant|batch|scheduled)\b',
)
MAX_QUANTITIES = 2

DOMAIN_PATTERNS = (
    ('finance', r'\b(accounting|ledger|journal|balance|asset|liability|equity|revenue|expense|depreciation'
                r'|amortization|accrual|cash\s*flow|roi|npv|irr)\b'),
    ('hr', r'\b(employee|staff|personnel|recruitment|hiring|onboarding|performance\s*review|appraisal'
           r'|benefits|compensation|termination)\b'),
    ('healthcare', r'\b(patient|diagnosis|treatment|prescription|medical\s*record|insurance|claim|provider'
                   r'|physician|nurse)\b'),
    ('education', r'\b(student|enrollment|curriculum|syllabus|assignment|grade|transcript|diploma'
                  r'|certificate|academic)\b'),
    ('manufacturing', r'\b(production|assembly|quality\s*control|inspection|defect|batch|lot|inventory'
                      r'|bom|work\s*order)\b'),
    ('legal', r'\b(contract|agreement|compliance|regulation|policy|procedure|audit|risk|liability'
              r'|intellectual\s*property)\b'),
)
MAX_DOMAIN_TAGS = 2

DOMAIN_CONTEXT = {
    'finance': 'for financial operations and accounting processes',
    'hr': 'for human resources and employee management',
    'healthcare': 'for healthcare operations and patient management',
    'education': 'for educational administration and student services',
    'manufacturing': 'for production management and quality control',
    'legal': 'for legal compliance and regulatory management',
}

# Keyed by the last character of the requirement identifier
TIER_PHRASES = {
    '1': 'with primary operational focus',
    '2': 'with secondary workflow support',
    '3': 'with tertiary process integration',
    '4': 'with fourth-tier functionality',
    '5': 'with fifth-level capabilities',
    '6': 'with sixth-generation features',
    '7': 'with seventh-tier processing',
    '8': 'with eighth-level automation',
    '9': 'with ninth-tier optimization',
    '0': 'with foundational system support',
}
TIER_MAX_LENGTH = 100

_COLON_VERBS = r'(?:provides?|enables?|allows?|supports?|delivers?|manages?)\b'
_COLON_CLAUSE = r'(?:that|which|to)\b'
_COLON_PROCESS = r'(?:includes?|involves?|encompasses?)\b'

COLON_RULES = (
    # Component nouns
    (r'^(.*interface.*?)(\s+' + _COLON_VERBS + r'.*)', r'\1: \2'),
    (r'^(.*system.*?)(\s+' + _COLON_VERBS + r'.*)', r'\1: \2'),
    (r'^(.*application.*?)(\s+' + _COLON_VERBS + r'.*)', r'\1: \2'),
    (r'^(.*platform.*?)(\s+' + _COLON_VERBS + r'.*)', r'\1: \2'),
    (r'^(.*service.*?)(\s+' + _COLON_VERBS + r'.*)', r'\1: \2'),
    (r'^(.*functionality.*?)(\s+' + _COLON_CLAUSE + r'.*)', r'\1: \2'),
    (r'^(.*capability.*?)(\s+' + _COLON_CLAUSE + r'.*)', r'\1: \2'),
    (r'^(.*mechanism.*?)(\s+' + _COLON_CLAUSE + r'.*)', r'\1: \2'),
    (r'^(.*framework.*?)(\s+' + _COLON_CLAUSE + r'.*)', r'\1: \2'),
    (r'^(.*engine.*?)(\s+' + _COLON_CLAUSE + r'.*)', r'\1: \2'),
    # User/Business subjects
    (r'^(User.*?)(\s+(?:can|may|will|shall|must)\b.*)', r'\1: \2'),
    (r'^(Business.*?)(\s+(?:requires?|needs?|enables?)\b.*)', r'\1: \2'),
    (r'^(Data.*?)(\s+(?:processing|management|handling)\b.*)', r'\1: \2'),
    (r'^(Report.*?)(\s+(?:generation|creation|delivery)\b.*)', r'\1: \2'),
    (r'^(Security.*?)(\s+(?:framework|protocol|measures?)\b.*)', r'\1: \2'),
    # Processes
    (r'^(.*processing.*?)(\s+' + _COLON_PROCESS + r'.*)', r'\1: \2'),
    (r'^(.*management.*?)(\s+' + _COLON_PROCESS + r'.*)', r'\1: \2'),
    (r'^(.*workflow.*?)(\s+' + _COLON_PROCESS + r'.*)', r'\1: \2'),
    # Any leading phrase without structure
    (r'^([A-Z][^:]*?)(\s+(?:must|should|will|shall|can|may|enables?|provides?|allows?|supports?|delivers?'
     r'|manages?|includes?|involves?|encompasses?|that|which|to)\b.*)', r'\1: \2'),
)

COLON_CLEANUP = (
    (r':\s*:', ':'),
    (r'\s+:', ':'),
    (r':\s+', ': '),
)

GRAMMAR_RULES = (
    (r'\s+(functionality|capability|system|mechanism|service)\s+(?:functionality|capability|system|mechanism|service)\b', r' \1'),
    (r'\b(be)(?:\s+be\b)+', r'\1'),
    (r'\bmust provide be\b', 'must be'),
    (r'\bshould provide be\b', 'should be'),
    (r'\bprovides will be\b', 'will be'),
    (r'\bprovides should be\b', 'should be'),
    (r'\bprovides must be\b', 'must be'),
    (r'\bprovides can be\b', 'can be'),
    (r'\bprovides may be\b', 'may be'),
    (r'\bprovides be\b', 'provides'),
    (r'\bprovides(?:\s+provides\b)+', 'provides'),
    (r'\bprovides must\b', 'must provide'),
    (r'\bprovides should\b', 'should provide'),
    (r'\bprovides will\b', 'will provide'),
    (r'\bprovides can\b', 'can provide'),
    (r'\bprovides may\b', 'may provide'),
    (r'\bprovides (is|are|was|were|has|have|had)\b', r'\1'),
    (r'\bwith\s+for\s+', 'for '),
    (r'\bfor\s+with\s+', 'with '),
    (r'\band\s+with\s+and\s+', 'with '),
    (r'\s+with(?:\s+with)+\s+', ' with '),
    (r'\s+and(?:\s+and)+\s+', ' and '),
    (r'\s+for(?:\s+for)+\s+', ' for '),
    (r'\s+featuring\s+with\s+', ' featuring '),
    (r'\s+supporting\s+for\s+', ' supporting '),
    (r'\s+including\s+with\s+', ' including '),
    (r'\b(system|management)(?:\s+\1\b)+', r'\1'),
    (r'\b(\w+)(?:\s+\1\b)+', r'\1'),
)

CRITICAL_PREFIX = 'Critical'
STRATEGIC_PREFIX = 'Strategic'

MIN_DESCRIPTION_LENGTH = 40
MAX_DESCRIPTION_LENGTH = 180
ELLIPSIS = '...'
LENGTH_ENHANCEMENTS = {
    'high': 'with comprehensive enterprise-grade capabilities',
    'medium': 'with integrated business functionality',
    'low': 'with essential operational features',
}

FILLER_DESCRIPTIONS = (
    'Business process functionality',
    'System operation and management',
    'User workflow support',
    'Data handling and processing',
    'Application feature set',
    'Service delivery mechanism',
    'Information management tool',
    'Operational capability',
)


def _compile(pattern: str) -> Pattern:
    return re.compile(pattern, FLAGS)


def _compile_rules(rules) -> Tuple[Tuple[Pattern, str], ...]:
    return tuple((_compile(pattern), replacement) for pattern, replacement in rules)


@dataclass(frozen=True)
class PatternCatalog:
    """Read-only lookup tables shared by the analyzer, namer and synthesizer."""
    intent_patterns: Tuple[Tuple[str, Pattern], ...]
    # Catalog-only meta-categories, excluded from intent scoring
    action_verbs: Pattern
    batch_indicators: Pattern
    simple_indicators: Pattern
    complex_indicators: Pattern
    real_time_indicators: Pattern
    high_value_indicators: Pattern
    low_value_indicators: Pattern
    high_impact_indicators: Pattern
    low_impact_indicators: Pattern
    priority_high_terms: Tuple[str, ...]
    priority_low_terms: Tuple[str, ...]
    optional_phrases: Tuple[str, ...]
    technical_tags: Tuple[Tuple[str, Pattern], ...]
    feature_name_rules: Tuple[Tuple[Pattern, Tuple[str, ...]], ...]
    intent_feature_names: Mapping[str, str]
    cleaning_rules: Tuple[Tuple[Pattern, str], ...]
    sentence_split: Pattern
    sentence_rules: Tuple[Tuple[Pattern, str], ...]
    paraphrase_rules: Tuple[Tuple[Pattern, str], ...]
    capability_nouns: Pattern
    capability_leading: Pattern
    capability_prefixes: Mapping[str, str]
    technical_details: Tuple[Tuple[Pattern, str], ...]
    specific_term_patterns: Tuple[Pattern, ...]
    quantity_patterns: Tuple[Pattern, ...]
    domain_patterns: Tuple[Tuple[str, Pattern], ...]
    domain_context: Mapping[str, str]
    tier_phrases: Mapping[str, str]
    colon_rules: Tuple[Tuple[Pattern, str], ...]
    colon_cleanup: Tuple[Tuple[Pattern, str], ...]
    grammar_rules: Tuple[Tuple[Pattern, str], ...]
    length_enhancements: Mapping[str, str]
    filler_descriptions: Tuple[str, ...]


def build_catalog() -> PatternCatalog:
    """Compile every table into a fresh PatternCatalog."""
    intent_patterns = tuple((name, _compile(pattern)) for name, pattern in INTENT_PATTERNS)
    real_time = _compile(REAL_TIME_INDICATORS)
    by_name = dict(intent_patterns)
    by_name['realTime'] = real_time

    return PatternCatalog(
        intent_patterns=intent_patterns,
        action_verbs=_compile(ACTION_VERBS),
        simple_indicators=_compile(SIMPLE_INDICATORS),
        complex_indicators=_compile(COMPLEX_INDICATORS),
        real_time_indicators=real_time,
        batch_indicators=_compile(BATCH_INDICATORS),
        high_value_indicators=_compile(HIGH_VALUE_INDICATORS),
        low_value_indicators=_compile(LOW_VALUE_INDICATORS),
        high_impact_indicators=_compile(HIGH_IMPACT_INDICATORS),
        low_impact_indicators=_compile(LOW_IMPACT_INDICATORS),
        priority_high_terms=PRIORITY_HIGH_TERMS,
        priority_low_terms=PRIORITY_LOW_TERMS,
        optional_phrases=OPTIONAL_PHRASES,
        technical_tags=tuple((tag, by_name[source]) for tag, source in TECHNICAL_TAGS),
        feature_name_rules=tuple((_compile(pattern), names) for pattern, names in FEATURE_NAME_RULES),
        intent_feature_names=MappingProxyType(dict(INTENT_FEATURE_NAMES)),
        cleaning_rules=_compile_rules(CLEANING_RULES),
        sentence_split=re.compile(SENTENCE_SPLIT),
        sentence_rules=_compile_rules(SENTENCE_RULES),
        paraphrase_rules=_compile_rules(PARAPHRASE_RULES),
        capability_nouns=_compile(CAPABILITY_NOUNS),
        capability_leading=_compile('^(' + '|'.join(CAPABILITY_LEADING_WORDS) + ')'),
        capability_prefixes=MappingProxyType(dict(CAPABILITY_PREFIXES)),
        technical_details=_compile_rules(TECHNICAL_DETAILS),
        specific_term_patterns=tuple(_compile(pattern) for pattern in SPECIFIC_TERM_PATTERNS),
        quantity_patterns=tuple(_compile(pattern) for pattern in QUANTITY_PATTERNS),
        domain_patterns=tuple((domain, _compile(pattern)) for domain, pattern in DOMAIN_PATTERNS),
        domain_context=MappingProxyType(dict(DOMAIN_CONTEXT)),
        tier_phrases=MappingProxyType(dict(TIER_PHRASES)),
        colon_rules=_compile_rules(COLON_RULES),
        colon_cleanup=_compile_rules(COLON_CLEANUP),
        grammar_rules=_compile_rules(GRAMMAR_RULES),
        length_enhancements=MappingProxyType(dict(LENGTH_ENHANCEMENTS)),
        filler_descriptions=FILLER_DESCRIPTIONS,
    )


@lru_cache(maxsize=1)
def load_default_catalog() -> PatternCatalog:
    """Return the shared catalog, compiling it on first use."""
    return build_catalog()
