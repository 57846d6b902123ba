"""Print a full snapshot of the database contents."""

import asyncio
import sys

from edumaster.scripts.runner import configure_logging, run_report
from edumaster.services.report_service import database_snapshot


def main() -> int:
    configure_logging()
    return asyncio.run(run_report(database_snapshot))


if __name__ == "__main__":
    sys.exit(main())
