import re
from collections.abc import Iterable, Sequence

from linkedin_job_scraper.models import ListingRecord


class SkillFilter:
    """
    Keeps listings whose title mentions at least one requested skill.

    Matching is a case-insensitive substring search ("go" matches "Golang
    Developer"), not a whole-word match. An empty skill set lets every
    listing through.
    """

    def __init__(self, skills: Iterable[str]):
        # Sorted so the compiled pattern is the same for equal skill sets
        self.skills = sorted({s.strip() for s in skills if s and s.strip()})
        self.regex = (
            re.compile("|".join(re.escape(s) for s in self.skills), re.IGNORECASE)
            if self.skills
            else None
        )

    def matches(self, title: str) -> bool:
        if self.regex is None:
            return True
        if not title:
            return False
        return bool(self.regex.search(title))

    def apply(self, records: Iterable[ListingRecord]) -> list[ListingRecord]:
        """Filter records, preserving their order."""
        if self.regex is None:
            return list(records)
        return [record for record in records if self.matches(record.title)]


def filter_results(
    records: Sequence[ListingRecord],
    skills: Iterable[str],
    limit: int,
) -> list[ListingRecord]:
    """
    Cap the candidates at `limit`, then apply the skill filter.
    The cap bounds candidates considered, so a strict filter may return fewer.
    """
    return SkillFilter(skills).apply(records[:limit])
