"""CLI entry point: copy business_data.json into the site's HTML pages."""

import argparse
import sys

from rich.console import Console
from rich.markup import escape

from .config import CONFIG_FILE, load_profile
from .main import MISSING, PUBLIC_DIR, UPDATED, PageResult, update_business_data

NEXT_STEPS = (
    "1. Review the changes",
    f"2. Test locally: python -m http.server --directory {PUBLIC_DIR}",
    "3. Commit and deploy",
)


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="update-business-data",
        description=(
            f"Update the HTML pages in {PUBLIC_DIR}/ from {CONFIG_FILE}. "
            "Run it from the site root, the directory holding both."
        ),
    )
    parser.parse_args(argv)

    console = Console()
    console.print("Updating business data in HTML files...\n")

    def on_progress(result: PageResult):
        name = escape(result.page.filename)
        if result.status == UPDATED:
            console.print(f"[green]✓ Updated:[/] {name}")
        elif result.status == MISSING:
            console.print(f"[red]✗ File not found:[/] {escape(str(result.path))}")
        else:
            console.print(f"[yellow]⚠ No updates needed:[/] {name}")

    try:
        profile = load_profile(CONFIG_FILE)
        results = update_business_data(profile, PUBLIC_DIR, on_progress=on_progress)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n[bold red]Error:[/] {escape(str(e))}\n")
        sys.exit(1)

    updated = sum(1 for r in results if r.status == UPDATED)
    console.print(f"\n[bold green]{updated} file(s) updated successfully![/]")
    console.print("\nNext steps:")
    for step in NEXT_STEPS:
        console.print(step)


if __name__ == "__main__":
    main()
