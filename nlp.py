import re
import random
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from patterns import (
    COMBINE_PREFIXES,
    COMPLEMENTARY_OVERLAP,
    CRITICAL_PREFIX,
    DEFAULT_CAPABILITY_PREFIX,
    ELLIPSIS,
    MAX_DESCRIPTION_LENGTH,
    MAX_DOMAIN_TAGS,
    MAX_QUANTITIES,
    MAX_SPECIFIC_TERMS,
    MAX_TECHNICAL_DETAILS,
    MIN_DESCRIPTION_LENGTH,
    MIN_FRAGMENT_LENGTH,
    MIN_RECOMBINED_LENGTH,
    MIN_SPECIFIC_TERM_LENGTH,
    STRATEGIC_PREFIX,
    TIER_MAX_LENGTH,
    PatternCatalog,
    load_default_catalog,
)
from requirement_analyzer import Analysis, RequirementRecord

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r'\s+')
_COLON_LETTER = re.compile(r':(\s*)([a-z])')
_DIGIT = re.compile(r'\d')
_ING_SUFFIX = re.compile(r'\w*ing$')
_ED_SUFFIX = re.compile(r'\w*ed$')


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(' ', text).strip()


def capitalize_first(text: str) -> str:
    if not text:
        return ''
    return text[0].upper() + text[1:]


@dataclass
class UniqueElements:
    """Record-specific details used to tell similar descriptions apart."""
    specific_terms: List[str] = field(default_factory=list)
    quantities: List[str] = field(default_factory=list)
    domain_tags: List[str] = field(default_factory=list)
    tier_key: str = ''


class DescriptionSynthesizer:
    """Rewrites a requirement sentence into a functional description.

    Each pipeline step is a separate method taking and returning a string so
    the steps can be exercised on their own. Only the blank-description filler
    draws on ``rng``; everything else is deterministic.
    """

    def __init__(self, catalog: Optional[PatternCatalog] = None, rng: Optional[random.Random] = None):
        self.catalog = catalog or load_default_catalog()
        self.rng = rng or random.Random()

    def synthesize(self, record: RequirementRecord, analysis: Analysis) -> str:
        """Run the full pipeline for one record."""
        original = record.requirement_description
        if not original.strip():
            logger.debug(f"Blank description for {record.requirement_id or '<no id>'}, using filler")
            return self.bound_length(self.generic_description(analysis), analysis)

        cleaned = self.clean(original)
        fragments = self.split_sentences(cleaned)
        parts = [part for part in (self.rewrite_sentence(fragment) for fragment in fragments) if part]
        description = self.recombine(parts)

        if not description or len(description) < MIN_RECOMBINED_LENGTH:
            description = self.paraphrase(cleaned, analysis)

        description = self.add_technical_details(description, original)
        description = self.inject_uniqueness(description, original, record.requirement_id)
        description = self.add_colon_structure(description)
        description = self.cleanup_grammar(description)
        description = self.apply_framing(description, analysis)
        return self.bound_length(description, analysis)

    def clean(self, text: str) -> str:
        """Strip subject + modal phrasing such as 'the system shall'."""
        cleaned = text
        for pattern, replacement in self.catalog.cleaning_rules:
            cleaned = pattern.sub(replacement, cleaned)
        return collapse_whitespace(cleaned)

    def split_sentences(self, text: str) -> List[str]:
        fragments = self.catalog.sentence_split.split(text)
        return [fragment.strip() for fragment in fragments if fragment.strip()]

    def rewrite_sentence(self, sentence: str) -> str:
        """Apply the first matching transformation rule to a fragment."""
        if not sentence or len(sentence) < MIN_FRAGMENT_LENGTH:
            return ''

        rewritten = sentence
        for pattern, replacement in self.catalog.sentence_rules:
            if pattern.search(rewritten):
                rewritten = pattern.sub(replacement, rewritten)
                break

        return capitalize_first(collapse_whitespace(rewritten))

    @staticmethod
    def is_complementary(main: str, candidate: str) -> bool:
        main_words = set(main.lower().split())
        candidate_words = candidate.lower().split()
        overlap = [word for word in candidate_words if word in main_words]
        return len(overlap) < len(candidate_words) * COMPLEMENTARY_OVERLAP

    def recombine(self, parts: List[str]) -> str:
        if not parts:
            return ''
        if len(parts) == 1:
            return parts[0]

        combined = parts[0]
        for part in parts[1:]:
            if not self.is_complementary(combined, part):
                continue
            if part.startswith(COMBINE_PREFIXES):
                combined += ' ' + part
            else:
                combined += ' with ' + part.lower()
        return combined

    def paraphrase(self, cleaned: str, analysis: Analysis) -> str:
        """Direct paraphrase used when the rewrite produced too little text."""
        paraphrased = cleaned
        for pattern, replacement in self.catalog.paraphrase_rules:
            paraphrased = pattern.sub(replacement, paraphrased)
        paraphrased = collapse_whitespace(paraphrased.rstrip('.!; '))

        if not self.catalog.capability_nouns.search(paraphrased):
            paraphrased = f"{paraphrased} functionality".strip()

        if not self.catalog.capability_leading.match(paraphrased):
            prefix = self.catalog.capability_prefixes.get(analysis.primary_intent, DEFAULT_CAPABILITY_PREFIX)
            paraphrased = f"{prefix} for {paraphrased}"

        return capitalize_first(paraphrased)

    def extract_technical_details(self, original: str) -> str:
        details = [clause for pattern, clause in self.catalog.technical_details if pattern.search(original)]
        return ' and '.join(details[:MAX_TECHNICAL_DETAILS])

    def add_technical_details(self, description: str, original: str) -> str:
        details = self.extract_technical_details(original)
        if details:
            return f"{description} {details}"
        return description

    def extract_unique_elements(self, original: str, requirement_id: str = '') -> UniqueElements:
        """Collect specific terms, quantities, domain tags and the id tier key."""
        text = original.lower()

        terms = []
        for pattern in self.catalog.specific_term_patterns:
            for match in pattern.finditer(text):
                term = match.group(0).strip()
                if len(term) >= MIN_SPECIFIC_TERM_LENGTH and term not in terms:
                    terms.append(term)

        quantities = []
        for pattern in self.catalog.quantity_patterns:
            for match in pattern.finditer(text):
                quantity = match.group(0).strip()
                if quantity not in quantities:
                    quantities.append(quantity)

        domains = [domain for domain, pattern in self.catalog.domain_patterns if pattern.search(text)]

        requirement_id = requirement_id.strip()
        return UniqueElements(
            specific_terms=terms[:MAX_SPECIFIC_TERMS],
            quantities=quantities[:MAX_QUANTITIES],
            domain_tags=domains[:MAX_DOMAIN_TAGS],
            tier_key=requirement_id[-1:] if requirement_id else '',
        )

    def inject_uniqueness(self, description: str, original: str, requirement_id: str = '') -> str:
        elements = self.extract_unique_elements(original, requirement_id)

        if elements.specific_terms:
            term = elements.specific_terms[0]
            if term.lower() not in description.lower():
                description = self.incorporate_specific_term(description, term)
        if elements.quantities:
            description = self.incorporate_quantity(description, elements.quantities[0])
        if elements.domain_tags:
            description = self.incorporate_domain(description, elements.domain_tags[0])
        if elements.tier_key:
            description = self.incorporate_tier(description, elements.tier_key)
        return description

    @staticmethod
    def incorporate_specific_term(description: str, term: str) -> str:
        clean_term = _ED_SUFFIX.sub('', _ING_SUFFIX.sub('', term, count=1), count=1).strip()
        if len(clean_term) < 3:
            return description

        for anchor in ('management', 'system', 'functionality'):
            if anchor in description:
                return description.replace(anchor, f"{clean_term} {anchor}", 1)
        return f"{description} with specialized {clean_term} handling"

    @staticmethod
    def incorporate_quantity(description: str, quantity: str) -> str:
        lowered = quantity.lower()
        if any(word in lowered for word in ('real', 'immediate', 'instant')):
            return f"{description} with real-time processing capabilities"
        if 'batch' in lowered or 'scheduled' in lowered:
            return f"{description} with scheduled batch processing"
        if any(word in lowered for word in ('daily', 'weekly', 'monthly')):
            return f"{description} with {lowered} processing cycles"
        if _DIGIT.search(quantity):
            return f"{description} with scalable processing for high-volume operations"
        return description

    def incorporate_domain(self, description: str, domain: str) -> str:
        context = self.catalog.domain_context.get(domain)
        if context and domain not in description.lower():
            return f"{description} {context}"
        return description

    def incorporate_tier(self, description: str, tier_key: str) -> str:
        phrase = self.catalog.tier_phrases.get(tier_key)
        if phrase and len(description) < TIER_MAX_LENGTH and 'with' not in description:
            return f"{description} {phrase}"
        return description

    def add_colon_structure(self, description: str) -> str:
        """Split a leading noun phrase from its verb clause with a colon."""
        structured = description
        for pattern, replacement in self.catalog.colon_rules:
            if pattern.search(structured):
                structured = pattern.sub(replacement, structured, count=1)
                break

        for pattern, replacement in self.catalog.colon_cleanup:
            structured = pattern.sub(replacement, structured, count=1)

        return _COLON_LETTER.sub(lambda m: ':' + m.group(1) + m.group(2).upper(), structured)

    def cleanup_grammar(self, description: str) -> str:
        """Remove artifacts left behind by the earlier rewriting steps."""
        text = description
        for pattern, replacement in self.catalog.grammar_rules:
            text = pattern.sub(replacement, text)
        return collapse_whitespace(text)

    @staticmethod
    def apply_framing(description: str, analysis: Analysis) -> str:
        if analysis.priority == 'high':
            return f"{CRITICAL_PREFIX} {description.lower()}"
        if analysis.business_value == 'high':
            return f"{STRATEGIC_PREFIX} {description.lower()}"
        return description

    def bound_length(self, description: str, analysis: Analysis) -> str:
        """Pad short descriptions and truncate long ones."""
        bounded = collapse_whitespace(description)

        if len(bounded) < MIN_DESCRIPTION_LENGTH:
            enhancements = self.catalog.length_enhancements
            bounded = f"{bounded} {enhancements.get(analysis.business_value, enhancements['medium'])}"

        if len(bounded) > MAX_DESCRIPTION_LENGTH:
            kept = bounded[:MAX_DESCRIPTION_LENGTH - len(ELLIPSIS)]
            # Cutting mid-word can leave a fresh artifact at the end
            kept = self.cleanup_grammar(kept)
            bounded = kept + ELLIPSIS
        return bounded

    def generic_description(self, analysis: Analysis) -> str:
        """Random filler for requirements that have no description."""
        description = self.rng.choice(self.catalog.filler_descriptions)

        if analysis.priority == 'high':
            description = f"{CRITICAL_PREFIX} {description.lower()}"
        if analysis.user_impact == 'high':
            description = description.replace('functionality', 'user-focused functionality')
            description = description.replace('tool', 'user-friendly tool')
        return description
