"""Smoke test of the instructor flow against a running API.

Logs in with the configured probe credentials, then lists the
instructor's own courses. Prints what it sees; no retries, no assertions.
"""

import asyncio
import sys

from edumaster.config import settings
from edumaster.dashboard.api import ApiError, ApiResponseError, EduMasterClient
from edumaster.scripts.runner import configure_logging


async def run_probe(client: EduMasterClient, email: str, password: str) -> int:
    try:
        print("1. Attempting login...")
        await client.login(email, password)
        print("Login successful!")
        print("Token received")

        print("\n2. Fetching instructor courses...")
        courses = await client.my_courses()
        print(f"Fetched {len(courses)} courses:")
        for course in courses:
            print(f"- {course.title} (Published: {course.published})")
    except ApiResponseError as exc:
        print(f"Error: {exc.payload}", file=sys.stderr)
        return 1
    except ApiError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


async def _main() -> int:
    async with EduMasterClient(settings.api_base_url) as client:
        return await run_probe(client, settings.probe_email, settings.probe_password)


def main() -> int:
    configure_logging()
    return asyncio.run(_main())


if __name__ == "__main__":
    sys.exit(main())
