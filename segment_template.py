#!/usr/bin/env python3
"""
Customer Segment Template

Prints the "first-time buyers of a product" segmentation template,
translated for a locale, as the JSON the admin host renders.

Usage:
    python3 segment_template.py [--locale fr]
"""

import argparse
import json
import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(__file__))

from review_sorter.common.config_loader import load_translations
from review_sorter.common.log_config import setup_logging
from review_sorter.segments import TARGET, build_first_purchase_template


def main() -> None:
    parser = argparse.ArgumentParser(description="Print the customer segment template")
    parser.add_argument("--locale", default="en", help="Locale under config/locales (default: en)")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--quiet", action="store_true")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        template = build_first_purchase_template(load_translations(args.locale))
    except (FileNotFoundError, KeyError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print(json.dumps({"target": TARGET, "template": template.to_dict()},
                     ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
