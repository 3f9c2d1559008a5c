#!/usr/bin/env python3
"""
Entry point: `python -m gridbfs [--headless] [--size N] [--density P] ...`

Without --headless the pygame viewer opens; with it the search runs at the
configured cadence and the final grid is printed to the terminal.
"""

import logging
import sys

from gridbfs.config import resolve_settings
from gridbfs.log import setup_logging

log = logging.getLogger("gridbfs")


def main(argv=None) -> int:
    settings = resolve_settings(argv)
    setup_logging(settings.log_level)

    if not settings.headless:
        from gridbfs.app.viewer import main as viewer_main
        viewer_main(settings)
        return 0

    from gridbfs.app.console import run_headless
    from gridbfs.core.errors import GridSearchError
    from gridbfs.core.maps import load_map
    from gridbfs.core.scheduler import StepScheduler
    from gridbfs.core.session import SearchSession

    session = SearchSession(settings)
    try:
        if settings.map_path is not None:
            session.load(load_map(settings.map_path))
        else:
            session.randomize()
    except (OSError, ValueError, KeyError, GridSearchError) as ex:
        log.error("failed to build grid: %s", ex)
        print(f"Failed to build grid: {ex}")
        return 1
    result = run_headless(session, StepScheduler(session, settings.step_interval_ms))
    return 0 if result is not None and result.found else 2


if __name__ == "__main__":
    sys.exit(main())
