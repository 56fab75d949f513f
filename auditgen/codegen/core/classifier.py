"""
Property classification for target entity types.

Splits an entity's properties into audit fields (configured by the shared
base), eligible fields (configured per entity) and excluded fields.
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from .schema import PropertyDescriptor, SUPPORTED_PROPERTY_TYPES
from ...logging_config import get_logger

logger = get_logger(__name__)

AUDIT_FIELD_NAMES = ("CreatedAt", "UpdatedAt", "CreatedBy", "ModifiedBy")


@dataclass
class PropertyPartition:
    """Result of classifying an entity's properties."""

    audit: List[PropertyDescriptor] = field(default_factory=list)
    eligible: List[PropertyDescriptor] = field(default_factory=list)
    excluded: List[PropertyDescriptor] = field(default_factory=list)


def is_mappable(prop: PropertyDescriptor) -> bool:
    """Only public instance properties take part in mapping."""
    return prop.is_public and not prop.is_static


def is_simple_type(prop: PropertyDescriptor) -> bool:
    """Check whether the property type has a configuration rule."""
    return prop.type in SUPPORTED_PROPERTY_TYPES


def classify_properties(
    properties: Iterable[PropertyDescriptor],
    audit_field_names: Iterable[str] = AUDIT_FIELD_NAMES,
) -> PropertyPartition:
    """
    Partition properties preserving declaration order.

    Args:
        properties: Properties in declaration order
        audit_field_names: Reserved names handled by the shared base (exact match)

    Returns:
        PropertyPartition with audit, eligible and excluded properties
    """
    reserved = set(audit_field_names)
    partition = PropertyPartition()

    for prop in properties:
        if not is_mappable(prop):
            partition.excluded.append(prop)
        elif prop.name in reserved:
            partition.audit.append(prop)
        elif is_simple_type(prop):
            partition.eligible.append(prop)
        else:
            logger.debug(
                "Skipping property %s: unsupported type %s",
                prop.name,
                prop.type_name or prop.type.value,
            )
            partition.excluded.append(prop)

    return partition
