from typing import List, Sequence

from jobportal.modules.connections.normalize import RelationRecord


def matches(record: RelationRecord, query: str) -> bool:
    """Case-insensitive substring match on name, company and headline."""
    needle = query.strip().lower()
    if not needle:
        return True
    profile = record.user.profile
    haystacks = (
        record.user.full_name,
        profile.company or "",
        profile.headline or "",
    )
    return any(needle in text.lower() for text in haystacks)


def filter_records(records: Sequence[RelationRecord], query: str) -> List[RelationRecord]:
    """Return the records matching ``query``, preserving order.

    An empty query returns every record. Filtering is idempotent.
    """
    if not query or not query.strip():
        return list(records)
    return [record for record in records if matches(record, query)]
