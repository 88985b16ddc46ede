import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from linkedin_job_scraper.errors import ScrapeError, ValidationError
from linkedin_job_scraper.filters import filter_results
from linkedin_job_scraper.formatter import JobFormatter
from linkedin_job_scraper.models import SearchResult
from linkedin_job_scraper.pipeline import search_jobs
from linkedin_job_scraper.query import normalize_query
from linkedin_job_scraper.scrapers.extractor import extract_from_html

logger = logging.getLogger(__name__)


def replay_html(
    html_path: Path,
    job_title: str | None,
    limit: str | None = None,
    skills: str | None = None,
) -> SearchResult:
    """
    Run extraction and filtering over a saved search-results page instead of
    a live browser. Useful for checking the selector table against new markup.
    """
    spec = normalize_query(job_title, limit=limit, skills=skills)
    html = html_path.read_text(encoding="utf-8")
    candidates = extract_from_html(html, spec.limit)
    return SearchResult.from_records(filter_results(candidates, spec.skills, spec.limit))


def render(result: SearchResult, as_json: bool) -> str:
    if as_json:
        payload = {
            "success": True,
            "status": 200,
            "count": result.count,
            "jobs": [job.model_dump(by_alias=True) for job in result.jobs],
        }
        return json.dumps(payload, indent=2, ensure_ascii=False)
    return JobFormatter.format_result(result)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="linkedin-jobs",
        description="Search LinkedIn job postings with a headless browser.",
    )
    parser.add_argument("job_title", help="Job title or keywords to search for.")
    parser.add_argument("--location", default=None, help="Location to search in.")
    parser.add_argument(
        "--limit",
        default=None,
        help="Maximum number of listings to consider (default: 10).",
    )
    parser.add_argument(
        "--skills",
        default=None,
        help="Comma-separated skills; keeps only titles mentioning one of them.",
    )
    parser.add_argument(
        "--date-range",
        default=None,
        help="Posting age: day, week, month, or a number of days (default: day).",
    )
    parser.add_argument(
        "--experience",
        default=None,
        help=(
            "Experience level: internship, entry level, associate, "
            "mid-senior level, director, executive."
        ),
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON.",
    )
    parser.add_argument(
        "--html",
        type=Path,
        default=None,
        metavar="FILE",
        help="Extract from a saved results page instead of launching a browser.",
    )
    return parser.parse_args(argv)


def cli(argv: list[str] | None = None) -> None:
    """CLI entry point for the package."""
    # Set up logging once, in the application entry point only
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO
    )
    args = parse_args(argv)

    try:
        if args.html is not None:
            result = replay_html(args.html, args.job_title, limit=args.limit, skills=args.skills)
        else:
            result = asyncio.run(
                search_jobs(
                    args.job_title,
                    location=args.location,
                    limit=args.limit,
                    skills=args.skills,
                    date_range=args.date_range,
                    experience=args.experience,
                )
            )
    except ValidationError as e:
        logger.error(str(e))
        sys.exit(2)
    except ScrapeError as e:
        logger.error(f"Scraping failed: {e}")
        sys.exit(1)
    except OSError as e:
        if args.html is None:
            raise
        logger.error(f"Cannot read {args.html}: {e}")
        sys.exit(2)

    print(render(result, args.json))


if __name__ == "__main__":
    cli()
