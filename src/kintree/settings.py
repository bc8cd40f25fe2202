"""Tunable constants for kinship resolution and diagram layout."""

from dataclasses import dataclass

# Longest path (in edges) the kinship search will follow from the root person
MAX_KINSHIP_DEPTH = 8

# Paths at least this long that match no known shape are "distant relatives"
DISTANT_RELATIVE_DEPTH = 6

# Status texts that mark a person as deceased even without a death date
DECEASED_STATUSES = frozenset({"殁", "歿", "Deceased"})


@dataclass(frozen=True)
class LayoutSettings:
    """Pixel geometry of the family diagram and layered-layout hints."""

    slot_width: int = 180
    member_width: int = 120
    anchor_width: int = 32
    group_height: int = 250
    group_padding: int = 20
    member_top: int = 50
    # Anchor top edge sits half an anchor above the members' connection handles
    anchor_top: int = 74
    default_node_width: int = 220
    default_node_height: int = 220
    nodesep: int = 80
    ranksep: int = 100
    lineage_weight: int = 20
    spouse_weight: int = 5


DEFAULT_LAYOUT = LayoutSettings()
