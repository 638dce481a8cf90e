"""Export a project JSON file to PDF, DOCX and/or plain text."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List

from ..config import load_config, setup_logging
from ..export.exporter import Exporter, ExportFormat


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export a write-up project")
    parser.add_argument("input", help="Path to JSON file containing the project")
    parser.add_argument(
        "--format",
        default="all",
        help="page/pdf, structured/docx, text/txt, or 'all' (default)",
    )
    parser.add_argument("--output-dir", dest="output_dir", help="Directory to write artifacts into")
    parser.add_argument("--config", help="YAML config file layered over the package defaults")
    return parser.parse_args(argv)


def load_payload(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def main(argv: list[str] | None = None) -> List[Path]:
    args = parse_args(argv)
    config = load_config(args.config)
    setup_logging(config)

    payload = load_payload(Path(args.input))
    exporter = Exporter(config=config, output_dir=args.output_dir)
    if args.format == "all":
        return list(exporter.export_all(payload).values())
    return [exporter.export_to_file(payload, ExportFormat.parse(args.format))]


if __name__ == "__main__":  # pragma: no cover - manual execution
    for written in main():
        print(f"Wrote {written}")
