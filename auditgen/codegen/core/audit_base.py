"""
Audit field list parsing.

The shared base configuration is driven by a line-oriented resource where
every line reads ``<type>:<FieldName>``, for example::

    datetime:CreatedAt
    string:CreatedBy
"""

from typing import Iterable, List, Optional

from .naming import to_storage_name
from .rules import DEFAULT_STRING_LENGTH, Directive, DirectiveKind
from .schema import AuditFieldSpec
from ...logging_config import get_logger

logger = get_logger(__name__)

FIELD_SEPARATOR = ":"

# Keywords that map to a column type; "string" is handled as a length limit
AUDIT_COLUMN_TYPES = {
    "datetime": "timestamp",
    "int": "integer",
    "bool": "boolean",
}


def parse_audit_field(line: str) -> Optional[AuditFieldSpec]:
    """
    Parse one resource line.

    Returns:
        AuditFieldSpec, or None for blank or malformed lines
    """
    if not line or not line.strip() or FIELD_SEPARATOR not in line:
        return None

    parts = line.split(FIELD_SEPARATOR)
    if len(parts) != 2:
        return None

    type_keyword = parts[0].strip()
    name = parts[1].strip()
    if not name:
        return None

    return AuditFieldSpec(type_keyword=type_keyword, name=name)


def parse_audit_fields(lines: Optional[Iterable[str]]) -> List[AuditFieldSpec]:
    """Parse all valid lines, keeping their order."""
    specs = []
    for number, line in enumerate(lines or (), start=1):
        spec = parse_audit_field(line)
        if spec is None:
            if line and line.strip():
                logger.debug("Ignoring malformed audit field line %d: %r", number, line)
            continue
        specs.append(spec)
    return specs


def audit_field_directives(
    spec: AuditFieldSpec, default_string_length: int = DEFAULT_STRING_LENGTH
) -> List[Directive]:
    """
    Directives for one audit field.

    Unknown type keywords produce only the column name directive.
    """
    directives = []
    keyword = spec.type_keyword.lower()

    if keyword == "string":
        directives.append(Directive(DirectiveKind.MAX_LENGTH, default_string_length))
    elif keyword in AUDIT_COLUMN_TYPES:
        directives.append(
            Directive(DirectiveKind.COLUMN_TYPE, AUDIT_COLUMN_TYPES[keyword])
        )

    directives.append(Directive(DirectiveKind.COLUMN_NAME, to_storage_name(spec.name)))
    return directives
