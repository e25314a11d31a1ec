# -*- coding: utf-8 -*-

"""
Command-line entry point: turn a YAML/JSON decision table definition into DMN.

    python -m dmn_builder rules.yml -o rules.dmn
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from dmn_builder.config import ConfigManager
from dmn_builder.core.exceptions import DmnBuilderError
from dmn_builder.core.models import HIT_POLICIES
from dmn_builder.core.services import DmnConversionService
from dmn_builder.logging_config import setup_logging

logger = logging.getLogger("dmn_builder.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dmn-builder",
        description="Generate a DMN decision table document from a YAML or JSON definition.",
    )
    parser.add_argument("definition", help="Definition file (.yml, .yaml or .json)")
    parser.add_argument(
        "-o", "--output",
        help="Write the document to this path instead of standard output",
    )
    parser.add_argument(
        "--hit-policy",
        help="Override the hit policy (DMN defines: %s)" % ", ".join(HIT_POLICIES),
    )
    parser.add_argument(
        "--no-check",
        action="store_true",
        help="Skip the well-formedness check before writing",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Configure logging, convert the definition and emit the document.
    """
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)

    service = DmnConversionService.from_config(ConfigManager().get_builder_config())
    if args.no_check:
        service.check_well_formed = False

    try:
        xml = service.convert(args.definition, args.output, hit_policy=args.hit_policy)
    except DmnBuilderError as exc:
        logger.error("%s", exc)
        return 1

    if args.output is None:
        sys.stdout.write(xml)
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
