"""Print every instructor with the courses they created."""

import asyncio
import sys

from edumaster.scripts.runner import configure_logging, run_report
from edumaster.services.report_service import instructor_roster


def main() -> int:
    configure_logging()
    return asyncio.run(run_report(instructor_roster))


if __name__ == "__main__":
    sys.exit(main())
