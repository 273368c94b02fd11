import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = [
    'Requirement ID',
    'Requirement Type',
    'Link to process',
    'Requirement Description',
    'Comment',
    'Requirement Active?'
]
OPTIONAL_COLUMNS = ['Priority']

KEYWORD_MAPPINGS = {
    'Requirement ID': ['id', 'req_id', 'reqid', 'requirement_id', 'req id', 'number', 'no'],
    'Requirement Type': ['type', 'req_type', 'reqtype', 'category', 'kind'],
    'Link to process': ['process', 'link', 'workflow', 'procedure', 'step'],
    'Requirement Description': ['description', 'desc', 'details', 'requirement', 'text', 'summary'],
    'Comment': ['comment', 'comments', 'note', 'notes', 'remark', 'remarks'],
    'Requirement Active?': ['active', 'status', 'enabled', 'valid', 'current', 'state'],
    'Priority': ['priority', 'severity', 'importance'],
}


def default_value(column: str, row_index: int) -> str:
    """Placeholder for a required column the sheet does not have."""
    defaults = {
        'Requirement ID': f"REQ-{row_index:03d}",
        'Requirement Type': 'Functional',
        'Link to process': 'N/A',
        'Requirement Description': 'Description not provided',
        'Comment': 'Auto-generated from incomplete data',
        'Requirement Active?': 'Yes'
    }
    return defaults.get(column, '')


@dataclass
class MappingResult:
    mapping: Dict[str, str] = field(default_factory=dict)
    unmapped_required: List[str] = field(default_factory=list)
    available_columns: List[str] = field(default_factory=list)
    needs_mapping: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mapping': dict(self.mapping),
            'unmapped_required': list(self.unmapped_required),
            'available_columns': list(self.available_columns),
            'needs_mapping': self.needs_mapping,
        }


def _normalize(header: str) -> str:
    return str(header).strip().lower()


def find_best_column_match(column: str, available: Iterable[str]) -> Optional[str]:
    """First header containing one of the column's keywords."""
    available = list(available)
    for keyword in KEYWORD_MAPPINGS.get(column, []):
        for header in available:
            if keyword in _normalize(header):
                return header
    return None


def map_columns(headers: Iterable[Any], overrides: Optional[Mapping[str, str]] = None) -> MappingResult:
    """Reconcile sheet headers with the canonical URS columns.

    Exact (case-insensitive) matches are claimed first so a keyword match
    never steals a header that belongs to another column. ``overrides`` pins
    columns chosen by the caller.
    """
    available = [str(header) for header in headers]
    result = MappingResult(available_columns=available)
    used = set()

    for column, header in (overrides or {}).items():
        if header in available:
            result.mapping[column] = header
            used.add(header)
        else:
            logger.warning(f"Ignoring mapping for {column}: column '{header}' not found")

    for column in REQUIRED_COLUMNS + OPTIONAL_COLUMNS:
        if column in result.mapping:
            continue
        exact = next((h for h in available if h not in used and _normalize(h) == _normalize(column)), None)
        if exact:
            result.mapping[column] = exact
            used.add(exact)

    for column in REQUIRED_COLUMNS + OPTIONAL_COLUMNS:
        if column in result.mapping:
            continue
        match = find_best_column_match(column, [h for h in available if h not in used])
        if match:
            result.mapping[column] = match
            used.add(match)
            if column in REQUIRED_COLUMNS:
                result.needs_mapping = True
                logger.info(f"Mapped '{match}' to '{column}' by keyword")
        elif column in REQUIRED_COLUMNS:
            result.unmapped_required.append(column)
            result.needs_mapping = True

    return result


def _cell(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, float) and value != value:
        return ''
    return str(value)


def apply_column_mapping(rows: List[Mapping[str, Any]], result: MappingResult) -> List[Dict[str, str]]:
    """Rename row keys to the canonical columns, filling gaps with defaults."""
    mapped_rows = []
    for index, row in enumerate(rows, start=1):
        mapped = {}
        for column in REQUIRED_COLUMNS:
            header = result.mapping.get(column)
            mapped[column] = _cell(row.get(header)) if header else default_value(column, index)
        if 'Priority' in result.mapping:
            mapped['Priority'] = _cell(row.get(result.mapping['Priority']))
        mapped_rows.append(mapped)
    return mapped_rows
