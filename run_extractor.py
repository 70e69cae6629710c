# run_extractor.py
"""
Extract one or more records from a JSON file and print the fields, the
confidence and the suggested layout.

    python run_extractor.py records.json [--layout NAME]

The file may hold a single record object or a list of records.
"""

import argparse
import json
import sys
from pathlib import Path

from loguru import logger

# Make the repo root importable
repo_root = Path(__file__).resolve().parent
if str(repo_root) not in sys.path:
    sys.path.append(str(repo_root))

from core.config import get_settings
from core.logger import configure_logging
from services.extractor import extract_fields, suggest_layout_for_fields
from services.layouts import default_layouts


def main() -> int:
    parser = argparse.ArgumentParser(description="Extract records and suggest layouts.")
    parser.add_argument("path", type=Path, help="JSON file with a record or a list of records")
    parser.add_argument("--layout", help="render with this layout instead of the suggested one")
    args = parser.parse_args()

    configure_logging(get_settings().log_level)

    try:
        with args.path.open(encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error(f"Cannot read {args.path}: {exc}")
        return 1

    records = payload if isinstance(payload, list) else [payload]
    layouts = default_layouts()

    for record in records:
        fields = extract_fields(record)
        suggestion = suggest_layout_for_fields(fields)
        layout = args.layout or suggestion.layout

        print("\n=== RECORD ===")
        print(f"Type       : {fields.type_id or 'unknown'}")
        print(f"Confidence : {suggestion.confidence.value}")
        print(f"Layout     : {layout} (suggested: {suggestion.layout})")
        print(json.dumps(layouts.render_fields(fields, record, layout), indent=2, default=str))

    return 0


if __name__ == "__main__":
    sys.exit(main())
