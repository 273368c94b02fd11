import math
import logging
from dataclasses import dataclass, fields
from re import Pattern
from typing import Any, Dict, List, Mapping, Optional, Tuple

from patterns import DEFAULT_INTENT, PatternCatalog, load_default_catalog

logger = logging.getLogger(__name__)

# Logical field -> header names accepted in an input row
FIELD_ALIASES = {
    'requirement_id': ('Requirement ID', 'RequirementID'),
    'requirement_type': ('Requirement Type', 'RequirementType'),
    'link_to_process': ('Link to process', 'LinkToProcess'),
    'requirement_description': ('Requirement Description', 'RequirementDescription'),
    'comment': ('Comment', 'Comments'),
    'requirement_active': ('Requirement Active?', 'RequirementActive'),
    'priority': ('Priority',),
}


def _as_text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, float) and math.isnan(value):
        return ''
    return str(value)


@dataclass(frozen=True)
class RequirementRecord:
    """One URS row with every field normalized to a string."""
    requirement_id: str = ''
    requirement_type: str = ''
    link_to_process: str = ''
    requirement_description: str = ''
    comment: str = ''
    requirement_active: str = ''
    priority: str = ''

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'RequirementRecord':
        """Build a record from a sheet row keyed by header or logical name."""
        values = {}
        for name, aliases in FIELD_ALIASES.items():
            value = None
            for alias in aliases:
                if alias in row:
                    value = row[alias]
                    break
            values[name] = _as_text(value)
        return cls(**values)

    def normalized(self) -> 'RequirementRecord':
        """Copy with every field coerced to a string."""
        return RequirementRecord(**{f.name: _as_text(getattr(self, f.name)) for f in fields(self)})

    def to_row(self) -> Dict[str, str]:
        return {
            'Requirement ID': self.requirement_id,
            'Requirement Type': self.requirement_type,
            'Link to process': self.link_to_process,
            'Requirement Description': self.requirement_description,
            'Comment': self.comment,
            'Requirement Active?': self.requirement_active,
            'Priority': self.priority,
        }


@dataclass(frozen=True)
class Analysis:
    """Classification of a single requirement."""
    primary_intent: str
    secondary_intents: Tuple[str, ...] = ()
    complexity: str = 'moderate'
    priority: str = 'medium'
    technical_requirements: Tuple[str, ...] = ()
    business_value: str = 'medium'
    user_impact: str = 'medium'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'primaryIntent': self.primary_intent,
            'secondaryIntents': list(self.secondary_intents),
            'complexity': self.complexity,
            'priority': self.priority,
            'technicalRequirements': list(self.technical_requirements),
            'businessValue': self.business_value,
            'userImpact': self.user_impact,
        }


class RequirementAnalyzer:
    def __init__(self, catalog: Optional[PatternCatalog] = None):
        self.catalog = catalog or load_default_catalog()

    @staticmethod
    def _count(pattern: Pattern, text: str) -> int:
        return sum(1 for _ in pattern.finditer(text))

    @staticmethod
    def combined_text(record: RequirementRecord) -> str:
        """Description, type and comment lower-cased into one string."""
        return ' '.join([
            record.requirement_description,
            record.requirement_type,
            record.comment,
        ]).lower()

    def analyze(self, record: RequirementRecord) -> Analysis:
        text = self.combined_text(record)
        scores = self.score_intents(text)
        logger.debug(f"Intent scores for {record.requirement_id or '<no id>'}: {scores}")

        return Analysis(
            primary_intent=self.detect_primary_intent(text, scores),
            secondary_intents=self.detect_secondary_intents(text, scores),
            complexity=self.assess_complexity(text),
            priority=self.assess_priority(record),
            technical_requirements=self.extract_technical_requirements(text),
            business_value=self.assess_business_value(text),
            user_impact=self.assess_user_impact(text),
        )

    def score_intents(self, text: str) -> List[Tuple[str, int]]:
        """Match count per intent, in catalog order."""
        return [(intent, self._count(pattern, text)) for intent, pattern in self.catalog.intent_patterns]

    def detect_primary_intent(self, text: str, scores: Optional[List[Tuple[str, int]]] = None) -> str:
        scores = scores if scores is not None else self.score_intents(text)

        best_intent, best_score = DEFAULT_INTENT, 0
        for intent, score in scores:
            if score > best_score:
                best_intent, best_score = intent, score
        return best_intent

    def detect_secondary_intents(self, text: str,
                                 scores: Optional[List[Tuple[str, int]]] = None) -> Tuple[str, ...]:
        scores = scores if scores is not None else self.score_intents(text)

        ranked = sorted((item for item in scores if item[1] > 0), key=lambda item: item[1], reverse=True)
        return tuple(intent for intent, _ in ranked[1:3])

    def assess_complexity(self, text: str) -> str:
        complex_count = self._count(self.catalog.complex_indicators, text)
        real_time_count = self._count(self.catalog.real_time_indicators, text)
        simple_count = self._count(self.catalog.simple_indicators, text)

        if complex_count > 0 or real_time_count > 1:
            return 'complex'
        if simple_count > 0:
            return 'simple'
        return 'moderate'

    def assess_priority(self, record: RequirementRecord) -> str:
        priority = record.priority.lower()
        description = record.requirement_description.lower()

        if any(term in priority for term in self.catalog.priority_high_terms):
            return 'high'
        if (any(term in priority for term in self.catalog.priority_low_terms)
                or any(phrase in description for phrase in self.catalog.optional_phrases)):
            return 'low'
        return 'medium'

    def extract_technical_requirements(self, text: str) -> Tuple[str, ...]:
        return tuple(tag for tag, pattern in self.catalog.technical_tags if pattern.search(text))

    def _assess_level(self, text: str, high: Pattern, low: Pattern) -> str:
        high_matches = self._count(high, text)
        low_matches = self._count(low, text)

        if high_matches > low_matches and high_matches > 0:
            return 'high'
        if low_matches > 0:
            return 'low'
        return 'medium'

    def assess_business_value(self, text: str) -> str:
        return self._assess_level(text, self.catalog.high_value_indicators, self.catalog.low_value_indicators)

    def assess_user_impact(self, text: str) -> str:
        return self._assess_level(text, self.catalog.high_impact_indicators, self.catalog.low_impact_indicators)
