from __future__ import annotations

import argparse
import sys
from pathlib import Path

from unused_opens._data import Range
from unused_opens._data import Settings
from unused_opens._diagnostics import analyze_snapshot
from unused_opens._quick_parse import split_lines
from unused_opens._snapshot import SnapshotError
from unused_opens._snapshot import load_snapshot


def _statement_text(source: str, range_: Range) -> str:
    """Source text of a (usually single-line) statement."""
    lines = split_lines(source)
    index = range_.start.line - 1
    if not 0 <= index < len(lines):
        return ""
    line = lines[index]
    if range_.end.line == range_.start.line:
        return line[range_.start.column:range_.end.column].strip()
    return line[range_.start.column:].strip()


def check_file(
    filepath: Path, settings: Settings | None = None,
) -> tuple[int, list[str]]:
    """Check a snapshot file for unused open statements.

    Returns:
        Tuple of (number of unused opens found, list of messages)
    """
    settings = settings or Settings()
    messages: list[str] = []

    try:
        snapshot = load_snapshot(filepath)
    except (OSError, UnicodeDecodeError, SnapshotError) as e:
        messages.append(f"Error reading {filepath}: {e}")
        return 0, messages

    diagnostics = analyze_snapshot(snapshot, settings)

    for diagnostic in diagnostics:
        text = _statement_text(snapshot.source, diagnostic.location)
        messages.append(f"{diagnostic} ({text})" if text else str(diagnostic))

    return len(diagnostics), messages


def collect_snapshot_files(paths: list[Path]) -> list[Path]:
    """Collect all snapshot files from given paths."""
    files: list[Path] = []

    for path in paths:
        if path.is_file():
            if path.suffix == ".json":
                files.append(path)
        elif path.is_dir():
            files.extend(sorted(path.rglob("*.json")))

    return files


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Detect unused open declarations in analysis snapshots.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s Program.fs.json           Check a single snapshot
  %(prog)s snapshots/                Check every *.json snapshot in a directory
  %(prog)s -q snapshots/             Only print the summary
        """,
    )
    parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Snapshot files or directories to check",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only show summary, not individual issues",
    )
    parser.add_argument(
        "--no-unused-opens",
        dest="unused_opens",
        action="store_false",
        help="Disable the unused open declarations check",
    )

    args = parser.parse_args(argv)
    settings = Settings(unused_opens=args.unused_opens)

    files = collect_snapshot_files(args.paths)

    if not files:
        print("No snapshot files found", file=sys.stderr)
        return 1

    total_unused = 0
    total_files_with_issues = 0

    for filepath in files:
        count, messages = check_file(filepath, settings)
        if count > 0:
            total_unused += count
            total_files_with_issues += 1
            if not args.quiet:
                for msg in messages:
                    print(msg)
        elif messages:
            # Read errors
            for msg in messages:
                print(msg, file=sys.stderr)

    if total_unused > 0:
        print(
            f"\nFound {total_unused} unused open(s) "
            f"in {total_files_with_issues} file(s)",
        )
        return 1
    else:
        print("No unused opens found")
        return 0
