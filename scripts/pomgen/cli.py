"""CLI entry point and file I/O.

Wires together descriptor loading, POM generation and the properties
manifest.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .errors import PomGenerationError
from .pom_writer import (
    make_pom,
    make_pom_properties,
    write_pom,
    write_pom_properties,
)
from .project_loader import load_project


def generate(
    project_path: Path,
    pom_location: str = "pom.xml",
    properties_location: Optional[str] = None,
    dry_run: bool = False,
    disclaimer: bool = True,
) -> Optional[str]:
    """Generate ``pom.xml`` (and optionally ``pom.properties``) for a project.

    Args:
        project_path: Project directory containing ``project.json``, or the file itself.
        pom_location: POM path, relative to the project root unless absolute.
        properties_location: Where to write ``pom.properties``; skipped if ``None``.
        dry_run: If ``True``, prints generated content to stdout instead of writing files.
        disclaimer: Whether to append the "autogenerated" notice to the POM.

    Returns:
        Absolute path of the written POM, or ``None`` on a dry run.

    Raises:
        PomGenerationError: If the descriptor cannot be loaded or the
            snapshot integrity check fails.
    """
    project = load_project(project_path)

    if dry_run:
        print("=" * 60)
        print(pom_location)
        print("=" * 60)
        print(make_pom(project, disclaimer=disclaimer))
        if properties_location:
            print("=" * 60)
            print(properties_location)
            print("=" * 60)
            print(make_pom_properties(project))
        return None

    pom_file = write_pom(project, pom_location, disclaimer=disclaimer)
    if properties_location:
        write_pom_properties(project, properties_location)
    return pom_file


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Write a pom.xml file for Maven interoperability"
    )
    parser.add_argument(
        "project", type=Path, nargs="?", default=Path("."),
        help="Project directory or project.json path (default: current directory)",
    )
    parser.add_argument("--output", "-o", default="pom.xml", help="POM path relative to the project root")
    parser.add_argument(
        "--properties", "-p", default=None,
        help="Also write a pom.properties manifest to this path",
    )
    parser.add_argument("--no-disclaimer", action="store_true", help="Omit the autogenerated notice")
    parser.add_argument("--dry-run", "-n", action="store_true", help="Print output without writing files")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None):
    """CLI entry point. Parses arguments and delegates to ``generate()``."""
    args = parse_args(argv)
    try:
        generate(
            args.project,
            pom_location=args.output,
            properties_location=args.properties,
            dry_run=args.dry_run,
            disclaimer=not args.no_disclaimer,
        )
    except PomGenerationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
