"""Main FastMCP server — mounts the analysis and result sub-servers."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from . import tracing
from .client import GeminiFacade
from .tools._runtime import current_runtime, set_runtime
from .tools.analysis import analysis_server
from .tools.results import results_server

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(server: FastMCP):
    """Startup/shutdown hook — tracing, the result store and shared Gemini clients."""
    tracing.setup()
    yield {}
    runtime = current_runtime()
    if runtime is not None:
        runtime.kv.close()
        set_runtime(None)
    closed = await GeminiFacade.close_all()
    tracing.shutdown()
    logger.info("Lifespan shutdown: closed %d client(s)", closed)


app = FastMCP(
    "snaphockey-ai",
    instructions=(
        "Hockey video analysis powered by Gemini — Shot Rater scores a single shot, "
        "Skill Check evaluates any skill clip, AI Coach gives biomechanics feedback "
        "from a front-net and a side-angle clip, Stick Analyzer recommends a stick "
        "setup and models from a shooting clip."
    ),
    lifespan=_lifespan,
)

app.mount(analysis_server)
app.mount(results_server)


def main() -> None:
    """Entry-point for ``snaphockey-ai`` console script."""
    app.run()


if __name__ == "__main__":
    main()
