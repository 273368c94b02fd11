import logging
from typing import Optional, Sequence

from patterns import DEFAULT_FEATURE_NAME, PatternCatalog, load_default_catalog
from requirement_analyzer import Analysis

logger = logging.getLogger(__name__)


class FeatureNamer:
    """Picks a short Feature/Function label for a requirement."""

    def __init__(self, catalog: Optional[PatternCatalog] = None):
        self.catalog = catalog or load_default_catalog()

    @staticmethod
    def select_by_complexity(names: Sequence[str], complexity: str) -> str:
        if complexity == 'complex':
            return names[-1]
        if complexity == 'simple':
            return names[0]
        return names[len(names) // 2]

    def name(self, description: str, analysis: Analysis) -> str:
        text = description.lower()

        for pattern, names in self.catalog.feature_name_rules:
            if pattern.search(text):
                return self.select_by_complexity(names, analysis.complexity)

        logger.debug(f"No feature pattern matched, using intent default for {analysis.primary_intent}")
        return self.catalog.intent_feature_names.get(analysis.primary_intent, DEFAULT_FEATURE_NAME)
