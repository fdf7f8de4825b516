"""Application-level viewer dependencies.

Resolves who is looking at the listing. Repositories apply visibility rules
against the returned Viewer.
"""

from fastapi import Header

from src.core.config import settings
from src.core.domain.viewer import Viewer


def _primary_language(accept_language: str | None) -> str:
    """Pick the first language tag from an Accept-Language header."""
    if not accept_language:
        return "en"
    first = accept_language.split(",")[0].split(";")[0].strip()
    return first.lower() or "en"


async def get_current_viewer(
    accept_language: str | None = Header(default=None),
) -> Viewer:
    """Get the viewer for the current request (anonymous)."""
    return Viewer(
        permissions=frozenset(settings.ANONYMOUS_PERMISSIONS),
        language=_primary_language(accept_language),
    )
