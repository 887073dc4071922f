"""Orchestration: business_data.json -> profile -> every managed page."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from .models import BusinessProfile
from .updater import PAGES, Page, update_page

PUBLIC_DIR = Path("public")

UPDATED = "updated"
UNCHANGED = "unchanged"
MISSING = "missing"


@dataclass(frozen=True)
class PageResult:
    page: Page
    path: Path
    status: str  # one of UPDATED, UNCHANGED, MISSING


def update_business_data(
    profile: BusinessProfile,
    public_dir: Path = PUBLIC_DIR,
    today: date | None = None,
    on_progress: Callable[[PageResult], None] | None = None,
    pages: tuple[Page, ...] = PAGES,
) -> list[PageResult]:
    """
    Update every managed page under *public_dir*.

    Args:
        profile: Validated business facts
        public_dir: Directory holding the site's HTML pages
        today: Local date for closure checks (default: date.today())
        on_progress: Optional callback(result) called once per page
        pages: Pages to process, in order

    Returns:
        One PageResult per page
    """
    today = today or date.today()
    results = []

    for page in pages:
        path = Path(public_dir) / page.filename
        if not path.exists():
            status = MISSING
        elif update_page(path, page, profile, today):
            status = UPDATED
        else:
            status = UNCHANGED

        result = PageResult(page=page, path=path, status=status)
        results.append(result)
        if on_progress:
            on_progress(result)

    return results
