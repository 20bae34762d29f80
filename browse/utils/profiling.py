"""
Request profiling for the content API.

When profiling is enabled in the settings, adding ?profile=true to a request
records a pyinstrument profile and writes it as HTML under the output
directory.
"""

import logging
from pathlib import Path

from fastapi import Request, Response
from pyinstrument import Profiler
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


def profile_filename(url_path: str) -> str:
    name = url_path.strip("/").replace("/", "_")
    return f"{name or 'root'}.html"


class ProfilingMiddleware(BaseHTTPMiddleware):
    """Profile requests carrying ?profile=true and save the result as HTML."""

    def __init__(self, app, output_dir: Path = Path("profiles")):
        super().__init__(app)
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Profiling middleware enabled. Output directory: {self.output_dir}")

    async def dispatch(self, request: Request, call_next):
        if request.query_params.get("profile") != "true":
            return await call_next(request)

        profiler = Profiler(interval=0.0001)
        profiler.start()
        try:
            response: Response = await call_next(request)
        finally:
            profiler.stop()

        output_file = self.output_dir / profile_filename(request.url.path)
        output_file.write_text(profiler.output_html(), encoding="utf-8")
        logger.info(f"Profile saved to {output_file}")

        response.headers["X-Profile-Output"] = str(output_file)
        return response
