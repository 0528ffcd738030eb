"""
Jinja2 template environment for the Transcriptorator pages.

Registers the shared display helpers as template filters and renders
pages with the site-wide context every layout needs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from archive_common.config import Settings
from archive_common.utils import (
    chamber_label,
    format_date,
    format_duration,
    format_timestamp,
)

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
STATIC_DIR = Path(__file__).resolve().parent / "static"

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
templates.env.filters["format_date"] = format_date
templates.env.filters["format_duration"] = format_duration
templates.env.filters["format_timestamp"] = format_timestamp
templates.env.filters["chamber_label"] = chamber_label


def render(
    request: Request,
    name: str,
    settings: Settings,
    context: dict[str, Any] | None = None,
    status_code: int = 200,
) -> Response:
    """Render template *name* with the site name added to *context*."""
    ctx: dict[str, Any] = {"site_name": settings.site_name}
    if context:
        ctx.update(context)
    return templates.TemplateResponse(request, name, ctx, status_code=status_code)
