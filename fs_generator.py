import sys
import json
import random
import logging
import argparse
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from tqdm import tqdm

from column_mapping import apply_column_mapping, map_columns
from config import configure_logging, load_settings
from documents import generate_fs_document, generate_fs_workbook, read_urs_file, save_stream
from fallback_generator import FallbackGenerator
from feature_namer import FeatureNamer
from nlp import DescriptionSynthesizer
from patterns import PatternCatalog, load_default_catalog
from requirement_analyzer import Analysis, RequirementAnalyzer, RequirementRecord

logger = logging.getLogger(__name__)

EMPTY_COMMENT_TOKENS = {'n/a', 'na', '-'}
NOT_APPLICABLE = 'N/A'

RowLike = Union[RequirementRecord, Mapping[str, Any]]


def normalize_comment(comment: Optional[str]) -> str:
    """Pass a comment through, mapping empty or placeholder values to N/A."""
    if comment is None:
        return NOT_APPLICABLE
    stripped = str(comment).strip()
    if not stripped or stripped.lower() in EMPTY_COMMENT_TOKENS:
        return NOT_APPLICABLE
    return str(comment)


@dataclass(frozen=True)
class FSRecord:
    """One derived Functional Specification row."""
    fs_id: str
    reference_urs_id: str
    feature: str
    description: str
    comments: str
    requirement_active: str

    def to_row(self) -> Dict[str, str]:
        return {
            'FS ID': self.fs_id,
            'Reference URS ID': self.reference_urs_id,
            'Feature/Function': self.feature,
            'Description': self.description,
            'Comments': self.comments,
            'Requirement Active?': self.requirement_active,
        }


@dataclass(frozen=True)
class TransformationOutcome:
    """FS row plus how it was produced.

    ``analysis`` is None and ``error`` holds the reason whenever the record
    was downgraded to the fallback generator.
    """
    record: FSRecord
    analysis: Optional[Analysis] = None
    used_fallback: bool = False
    error: Optional[str] = None

    def to_dict(self, include_analysis: bool = False) -> Dict[str, Any]:
        result: Dict[str, Any] = self.record.to_row()
        if include_analysis:
            result['analysis'] = self.analysis.to_dict() if self.analysis else None
            result['used_fallback'] = self.used_fallback
            result['error'] = self.error
        return result


class FSGenerator:
    """Turns URS rows into FS rows, one record at a time."""

    def __init__(self, catalog: Optional[PatternCatalog] = None, rng: Optional[random.Random] = None,
                 id_prefix: str = 'FS', id_width: int = 3):
        self.catalog = catalog or load_default_catalog()
        self.analyzer = RequirementAnalyzer(self.catalog)
        self.namer = FeatureNamer(self.catalog)
        self.synthesizer = DescriptionSynthesizer(self.catalog, rng=rng)
        self.fallback = FallbackGenerator()
        self.id_prefix = id_prefix
        self.id_width = id_width

    @classmethod
    def from_settings(cls, settings=None, seed: Optional[int] = None) -> 'FSGenerator':
        settings = settings or load_settings()
        seed = seed if seed is not None else settings.random_seed
        return cls(rng=random.Random(seed), id_prefix=settings.id_prefix, id_width=settings.id_width)

    def format_fs_id(self, index: int) -> str:
        return f"{self.id_prefix}-{index:0{self.id_width}d}"

    @staticmethod
    def _coerce(row: RowLike) -> RequirementRecord:
        if isinstance(row, RequirementRecord):
            return row
        return RequirementRecord.from_row(row)

    def transform_record(self, row: RowLike, index: int) -> TransformationOutcome:
        """Transform one record; ``index`` is its 1-based position in the run."""
        fs_id = self.format_fs_id(index)
        record = None
        try:
            record = self._coerce(row)
            logger.debug(f"Analyzing requirement {index}: {record.requirement_id}")
            analysis = self.analyzer.analyze(record)
            logger.debug(f"Requirement {index} primary intent: {analysis.primary_intent}")

            fs_record = FSRecord(
                fs_id=fs_id,
                reference_urs_id=record.requirement_id,
                feature=self.namer.name(record.requirement_description, analysis),
                description=self.synthesizer.synthesize(record, analysis),
                comments=normalize_comment(record.comment),
                requirement_active=record.requirement_active,
            )
            return TransformationOutcome(record=fs_record, analysis=analysis)
        except Exception as e:
            logger.warning(f"Falling back to rule-based generation for requirement {index}: {str(e)}")
            record = record.normalized() if record is not None else RequirementRecord()
            return self._fallback_outcome(record, fs_id, index, str(e))

    def _fallback_outcome(self, record: RequirementRecord, fs_id: str, index: int,
                          error: str) -> TransformationOutcome:
        generated = self.fallback.generate(record, index)
        fs_record = FSRecord(
            fs_id=fs_id,
            reference_urs_id=record.requirement_id,
            feature=generated['feature'],
            description=generated['description'],
            comments=generated['comments'],
            requirement_active=record.requirement_active,
        )
        return TransformationOutcome(record=fs_record, used_fallback=True, error=error)

    def transform(self, rows: Iterable[RowLike], progress: bool = False) -> List[TransformationOutcome]:
        """Transform a whole run, keeping input order."""
        rows = list(rows)
        outcomes = []
        for index, row in enumerate(tqdm(rows, desc="Generating FS", unit="req", disable=not progress), start=1):
            outcomes.append(self.transform_record(row, index))

        fallbacks = sum(1 for outcome in outcomes if outcome.used_fallback)
        logger.info(f"Generated {len(outcomes)} FS records ({fallbacks} via fallback)")
        return outcomes

    def generate(self, rows: Iterable[RowLike]) -> List[FSRecord]:
        return [outcome.record for outcome in self.transform(rows)]


def prepare_rows(raw_rows: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Map arbitrary sheet headers onto the URS columns."""
    if not raw_rows:
        return []
    mapping = map_columns(raw_rows[0].keys())
    if mapping.unmapped_required:
        logger.warning(f"Columns filled with defaults: {', '.join(mapping.unmapped_required)}")
    return apply_column_mapping(raw_rows, mapping)


def main():
    parser = argparse.ArgumentParser(description='Generate a Functional Specification from a URS spreadsheet')
    parser.add_argument('--input', '-i', required=True, help='Path to the URS workbook (.xlsx or .csv)')
    parser.add_argument('--output', '-o', help='Path of the FS workbook to write')
    parser.add_argument('--docx', help='Also write the FS as a Word document to this path')
    parser.add_argument('--json', action='store_true', help='Print FS rows with their analysis as JSON')
    parser.add_argument('--seed', type=int, help='Seed for the blank-description filler')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')

    args = parser.parse_args()

    settings = load_settings()
    configure_logging(settings, debug=args.debug)

    try:
        rows = prepare_rows(read_urs_file(args.input))
        generator = FSGenerator.from_settings(settings, seed=args.seed)
        outcomes = generator.transform(rows, progress=True)
        fs_rows = [outcome.record.to_row() for outcome in outcomes]

        output = args.output or f"Functional_Specification_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
        save_stream(generate_fs_workbook(fs_rows), output)
        if args.docx:
            save_stream(generate_fs_document(fs_rows), args.docx)

        if args.json:
            print(json.dumps([outcome.to_dict(include_analysis=True) for outcome in outcomes], indent=2))

    except Exception as e:
        logger.error(f"Error: {str(e)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
