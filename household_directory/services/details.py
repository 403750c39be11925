from __future__ import annotations

from dataclasses import dataclass

from ..models.directory_record import DirectoryRecord

"""Detail view data for a single directory record.

Pure data for a detail collaborator to render: display fallbacks for empty
fields and the member/relation pairing.
"""

__all__ = [
    "RecordDetails",
    "relation_pairs",
    "family_name_display",
    "build_details",
]

DEFAULT_RELATION = "Family"
NOT_LISTED = "Not Listed"
NO_LINK = "No Link"


@dataclass(frozen=True)
class RecordDetails:
    name: str
    family_name: str
    relations: list[tuple[str, str]]  # (relation label, member name)
    dob: str
    dob_countdown: str  # "" when there is no countdown to show
    anniversary: str
    anniversary_countdown: str
    contact: str
    address: str
    map_link: str

    @property
    def has_contact(self) -> bool:
        return self.contact != "-"


def relation_pairs(record: DirectoryRecord) -> list[tuple[str, str]]:
    """Pair each listed member with the relation at the same position.

    Members without a matching relation label are labelled "Family".
    """
    if not record.family_members_raw:
        return []
    members = [s.strip() for s in record.family_members_raw.split(",")]
    relations = [s.strip() for s in record.relations_raw.split(",")] if record.relations_raw else []
    return [
        (relations[i] if i < len(relations) and relations[i] else DEFAULT_RELATION, member)
        for i, member in enumerate(members)
    ]


def family_name_display(record: DirectoryRecord) -> str:
    if record.family_name and record.family_name != "-":
        return record.family_name
    return NOT_LISTED


def build_details(record: DirectoryRecord) -> RecordDetails:
    return RecordDetails(
        name=record.name,
        family_name=family_name_display(record),
        relations=relation_pairs(record),
        dob=record.dob,
        dob_countdown=record.dob_countdown.label,
        anniversary=record.anniversary,
        anniversary_countdown=record.anniversary_countdown.label,
        contact=record.contact,
        address=record.address,
        map_link=record.map_link or NO_LINK,
    )
