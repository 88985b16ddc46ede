from linkedin_job_scraper.models import ListingRecord, SearchResult


class JobFormatter:
    """
    Formats listing records as plain text for terminal output.
    """

    TITLE_WIDTH = 80

    @classmethod
    def truncate(cls, text: str, width: int | None = None) -> str:
        """Shorten text to `width` characters, cutting at the last word boundary."""
        width = width or cls.TITLE_WIDTH
        if not text or len(text) <= width:
            return text or ""
        return text[:width].rsplit(" ", 1)[0] + "..."

    @classmethod
    def format_job(cls, job: ListingRecord, index: int | None = None) -> str:
        """
        Formats one listing as an indented block:

            1. Backend Engineer
               Acme Corp | Berlin, Germany
               Posted: 2026-10-18
               https://www.linkedin.com/jobs/view/...
        """
        prefix = f"{index}. " if index is not None else ""
        indent = " " * len(prefix)

        lines = [f"{prefix}{cls.truncate(job.title)}"]
        lines.append(f"{indent}{job.company} | {job.location}")
        if job.date_posted:
            lines.append(f"{indent}Posted: {job.date_posted}")
        lines.append(f"{indent}{job.link}")
        return "\n".join(lines)

    @classmethod
    def format_result(cls, result: SearchResult) -> str:
        if not result.jobs:
            return "No matching jobs found."

        header = f"Found {result.count} job{'s' if result.count != 1 else ''}:"
        blocks = [cls.format_job(job, i) for i, job in enumerate(result.jobs, start=1)]
        return header + "\n\n" + "\n\n".join(blocks)
