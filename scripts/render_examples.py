#!/usr/bin/env python3
"""Batch render every view of the examples and test fixtures to SVG.

Outputs go to /tmp/idef0_svg_renders/<model>/.

Usage:
    python scripts/render_examples.py [--theme dark]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from idef0_svg.errors import LayoutInvariantError, ModelError  # noqa: E402
from idef0_svg.parser import Process, parse_statements  # noqa: E402
from idef0_svg.themes import THEMES  # noqa: E402

OUTPUT_DIR = Path("/tmp/idef0_svg_renders")
FIXTURES_DIR = project_root / "tests" / "fixtures"
EXAMPLES_DIR = project_root / "examples"

MODEL_FILES = sorted(EXAMPLES_DIR.glob("*.idef0")) + sorted(
    FIXTURES_DIR.glob("*.idef0")
)


def _walk(process: Process):
    yield process
    for child in process.children:
        yield from _walk(child)


def render_file(path: Path, output_dir: Path, theme_name: str) -> tuple[str, list[str]]:
    """Parse a model and write its schematic plus every decompose view.

    Returns (name, list_of_issues).
    """
    name = path.stem
    issues: list[str] = []

    try:
        root = Process.parse(parse_statements(path.read_text()))
    except ModelError as e:
        return name, [f"PARSE ERROR: {e}"]

    target_dir = output_dir / name
    target_dir.mkdir(parents=True, exist_ok=True)
    theme = THEMES[theme_name]

    views = [("schematic", root.schematic)]
    views += [(f"decompose_{p.name}", p.decompose) for p in _walk(root)]
    for view_name, view in views:
        try:
            diagram = view()
        except LayoutInvariantError as e:
            issues.append(f"LAYOUT ERROR in {view_name}: {e}")
            continue
        unsatisfied = diagram.unsatisfied_lines
        if unsatisfied:
            issues.append(f"{view_name}: {len(unsatisfied)} unsatisfied ICOM(s)")
        filename = view_name.lower().replace(" ", "_") + ".svg"
        (target_dir / filename).write_text(diagram.to_svg(theme))

    return name, issues


def main():
    parser = argparse.ArgumentParser(description="Batch render IDEF0 models")
    parser.add_argument(
        "--theme", choices=sorted(THEMES), default="classic", help="Visual theme"
    )
    args = parser.parse_args()

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    print(f"Rendering {len(MODEL_FILES)} files to {OUTPUT_DIR}/")
    print()

    max_name_len = max(len(f.stem) for f in MODEL_FILES)
    any_errors = False

    for path in MODEL_FILES:
        name, issues = render_file(path, OUTPUT_DIR, args.theme)
        status = "OK" if not issues else "ISSUES"
        if any("ERROR" in i for i in issues):
            status = "FAIL"
            any_errors = True

        print(f"  {name:<{max_name_len}}  [{status}]")
        for issue in issues:
            print(f"    - {issue}")

    print(f"\nOutputs in: {OUTPUT_DIR}/")

    if any_errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
