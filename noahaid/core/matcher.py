from typing import Optional, Sequence

from noahaid.core.knowledge import Topic


def match_topic(query: str, topics: Sequence[Topic]) -> Optional[Topic]:
    """Return the first topic whose keyword or title occurs inside the query.

    Containment is a plain substring test on the lowercased query, so "burns"
    hits the ``burn`` keyword and "bleeding" hits ``bleed``. The title test runs
    the same direction (title inside query), which only fires for long inputs.
    """
    lowered = (query or "").lower()
    if not lowered:
        return None
    for topic in topics:
        if any(keyword in lowered for keyword in topic.keywords):
            return topic
        if topic.title.lower() in lowered:
            return topic
    return None
