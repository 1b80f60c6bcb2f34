# srs_response_formatter.py
"""
Response formatting for SRS query results.

Responsibilities:
- Labels for query kinds (query_to_string)
- Labels for RCC relations and compass sectors
- One-line descriptions of SpatialQueryResult objects

Presentation only: the engines never consume these strings.
"""
from typing import Dict, Optional

from component_42_spatial_types import (
    CompassSector,
    QueryType,
    RCCRelation,
    SpatialQueryResult,
)

QUERY_LABELS: Dict[QueryType, str] = {
    QueryType.RCC_DR: "disconnected",
    QueryType.RCC_PO: "partially overlapping",
    QueryType.RCC_EQ: "equal",
    QueryType.RCC_PP: "proper part",
    QueryType.RCC_PPI: "proper part inverse",
    QueryType.ORIENTATION: "orientation",
    QueryType.ALLOCENTRIC_ORIENTATION: "allocentric orientation",
}

RELATION_PHRASES: Dict[RCCRelation, str] = {
    RCCRelation.DR: "is disconnected from",
    RCCRelation.PO: "partially overlaps",
    RCCRelation.EQ: "is equal to",
    RCCRelation.PP: "is a proper part of",
    RCCRelation.PPI: "has as a proper part",
}

COMPASS_LABELS: Dict[CompassSector, str] = {
    CompassSector.N: "north",
    CompassSector.NE: "north-east",
    CompassSector.E: "east",
    CompassSector.SE: "south-east",
    CompassSector.S: "south",
    CompassSector.SW: "south-west",
    CompassSector.W: "west",
    CompassSector.NW: "north-west",
}

# Allocentric sectors are relative to the observer's facing (E = ahead)
FRAME_LABELS: Dict[CompassSector, str] = {
    CompassSector.E: "front",
    CompassSector.NE: "front-left",
    CompassSector.N: "left",
    CompassSector.NW: "back-left",
    CompassSector.W: "back",
    CompassSector.SW: "back-right",
    CompassSector.S: "right",
    CompassSector.SE: "front-right",
}


def query_to_string(query_type: QueryType) -> str:
    """Human-readable label of a query kind (e.g. RCC_DR -> 'disconnected')."""
    return QUERY_LABELS[query_type]


def relation_phrase(relation: RCCRelation) -> str:
    return RELATION_PHRASES[relation]


def compass_label(sector: CompassSector) -> str:
    return COMPASS_LABELS[sector]


def frame_label(sector: CompassSector) -> str:
    return FRAME_LABELS[sector]


def format_query_result(
    result: SpatialQueryResult,
    reference_name: Optional[str] = None,
    primary_name: Optional[str] = None,
) -> str:
    """
    Describe a query result in one sentence.

    Names default to the shape ids when not given.
    """
    reference = reference_name or f"shape {result.reference_id}"
    primary = primary_name or f"shape {result.primary_id}"

    if result.query_type.is_topological:
        relation = result.relation
        if relation is None:
            return f"{primary} / {reference}: no relation computed"
        answer = "yes" if result.holds else "no"
        return (
            f"{query_to_string(result.query_type)}? {answer}: "
            f"{primary} {relation_phrase(relation)} {reference}"
        )

    if result.sector is None:
        return f"{primary}: no orientation computed"

    if result.query_type == QueryType.ORIENTATION:
        return f"{primary} faces {compass_label(result.sector)}"

    return f"{primary} is to the {frame_label(result.sector)} of {reference}"
