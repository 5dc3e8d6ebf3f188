"""Run the project's spelling, lint, format and type checks in sequence."""

import subprocess
import sys
from pathlib import Path

from funlog import log_calls
from rich import get_console, reconfigure
from rich import print as rprint

PROJECT_ROOT = Path.cwd().resolve()
CODE_PATHS = [
    str(PROJECT_ROOT / "src"),
    str(PROJECT_ROOT / "tests"),
    str(PROJECT_ROOT / "examples"),
    str(PROJECT_ROOT / "devtools"),
]
DOC_PATHS = ["README.md", "DESIGN.md"]

CHECKS: list[list[str]] = [
    ["codespell", "--write-changes", *CODE_PATHS, *DOC_PATHS],
    ["ruff", "check", "--fix", *CODE_PATHS],
    ["ruff", "format", *CODE_PATHS],
    ["ty", "check", "--project", str(PROJECT_ROOT), str(PROJECT_ROOT / "src")],
]

reconfigure(emoji=not get_console().options.legacy_windows)


def main() -> int:
    rprint()
    failures = sum(run(cmd) for cmd in CHECKS)
    rprint()

    if failures:
        rprint(f"[bold red]:x: {failures} of {len(CHECKS)} checks failed.[/bold red]")
    else:
        rprint("[bold green]:white_check_mark: All checks passed![/bold green]")
    rprint()
    return failures


@log_calls(level="warning", show_timing_only=True)
def run(cmd: list[str]) -> int:
    rprint(f"[bold green]:arrow_forward: {' '.join(cmd)}[/bold green]")
    try:
        subprocess.run(cmd, text=True, check=True)
    except subprocess.CalledProcessError as e:
        rprint(f"[bold red]Error: {e}[/bold red]")
        return 1
    except FileNotFoundError as e:
        rprint(f"[bold red]Executable not found: {e}[/bold red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
