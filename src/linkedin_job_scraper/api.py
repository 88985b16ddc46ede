import asyncio
import logging

import uvicorn
from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from linkedin_job_scraper import config
from linkedin_job_scraper.errors import ScrapeError, ValidationError
from linkedin_job_scraper.pipeline import search_jobs

logger = logging.getLogger(__name__)

JOBS_ROUTE = "/api/v1/jobs/getLinkedInJobs"


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"success": False, "status": status, "message": message},
    )


def _search_slots(request: Request) -> asyncio.Semaphore:
    """Per-app semaphore bounding how many browsers run at once."""
    slots = getattr(request.app.state, "search_slots", None)
    if slots is None:
        slots = asyncio.Semaphore(config.MAX_CONCURRENT_SEARCHES)
        request.app.state.search_slots = slots
    return slots


def create_app() -> FastAPI:
    """Build the HTTP app exposing the job search pipeline."""
    app = FastAPI(title="LinkedIn Job Scraper")

    origin = config.CORS_ORIGIN
    if origin:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[origin],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get(JOBS_ROUTE)
    async def get_linkedin_jobs(
        request: Request,
        job_title: str | None = Query(default=None, alias="jobTitle"),
        location: str | None = Query(default=None),
        limit: str | None = Query(default=None),
        skills: str | None = Query(default=None),
        date_range: str | None = Query(default=None, alias="dateRange"),
        experience: str | None = Query(default=None),
    ) -> JSONResponse:
        """Scrape LinkedIn job postings filtered by skills, date range and experience level."""
        try:
            async with _search_slots(request):
                result = await search_jobs(
                    job_title,
                    location=location,
                    limit=limit,
                    skills=skills,
                    date_range=date_range,
                    experience=experience,
                )
        except ValidationError as e:
            return _error(400, str(e))
        except ScrapeError as e:
            logger.error(f"Error during scraping: {e}")
            return _error(500, "Internal Server Error")
        except Exception as e:
            logger.exception(f"Unexpected error handling search: {e}")
            return _error(500, "Internal Server Error")

        return JSONResponse(
            status_code=200,
            content={
                "success": True,
                "status": 200,
                "count": result.count,
                "jobs": [job.model_dump(by_alias=True) for job in result.jobs],
            },
        )

    return app


app = create_app()


def serve() -> None:
    """Run the HTTP app with uvicorn on the configured host and port."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO
    )
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    serve()
