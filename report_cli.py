#!/usr/bin/env python
"""
RHK Engine command line version.

Builds a report without the web front end:
1. load the teacher profile (JSON file or flags);
2. take an analysis payload from a JSON file, or analyze a photo / roster
   with the configured AI service;
3. compose the report and write the HTML print view (plus a JSON sidecar)
   to the output directory.

Usage:
    python report_cli.py --category character-education --image foto.jpg --profile profil.json
    python report_cli.py --category student-assessment --roster kelas7a.txt --class-name "VII A" \\
        --name "Siti Aminah" --unit "MTs Negeri 1" --locality "Bandung"
    python report_cli.py --category digital-technology --payload analisis.json --profile profil.json
"""

import argparse
import base64
import json
import mimetypes
import random
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from RHKEngine import InputIncomplete, ReportAgent
from RHKEngine.core import CategoryNotFound, category_registry
from RHKEngine.llms import ConfigurationError
from RHKEngine.nodes import AnalyzerFailure
from RHKEngine.utils.config import Settings, settings as global_settings


def setup_logger(verbose: bool = False):
    """Configure logging."""
    logger.remove()
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="DEBUG" if verbose else "INFO",
    )


def read_image_as_data_url(path: str) -> str:
    mime = mimetypes.guess_type(path)[0] or "image/jpeg"
    encoded = base64.b64encode(Path(path).read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def load_profile(args) -> Dict[str, Any]:
    profile: Dict[str, Any] = {}
    if args.profile:
        profile = json.loads(Path(args.profile).read_text(encoding="utf-8"))
    overrides = {
        "name": args.name,
        "idNumber": args.nip,
        "unit": args.unit,
        "locality": args.locality,
    }
    profile.update({key: value for key, value in overrides.items() if value})
    return profile


def parse_arguments():
    parser = argparse.ArgumentParser(
        description="RHK Engine command line version - report generation without the front end",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Categories: " + ", ".join(category_registry.ids()),
    )
    parser.add_argument('--category', required=True, help='report category id')
    parser.add_argument('--payload', help='analysis payload JSON file (skips the AI call)')
    parser.add_argument('--image', help='activity photo (analyzed, or attached to a --payload report)')
    parser.add_argument('--roster', help='text file with one student name per line')
    parser.add_argument('--class-name', dest='class_name', help='class label for the roster page')
    parser.add_argument('--note', help='free-text hint for the analyzer')
    parser.add_argument('--profile', help='teacher profile JSON file')
    parser.add_argument('--name', help='teacher name')
    parser.add_argument('--nip', help='teacher NIP')
    parser.add_argument('--unit', help='school / work unit')
    parser.add_argument('--locality', help='city')
    parser.add_argument('--period', help='reporting period, e.g. "Juli - Desember 2026"')
    parser.add_argument('--output-dir', dest='output_dir', default=None, help='output directory')
    parser.add_argument('--model', default=None, help='analyzer model name')
    parser.add_argument('--seed', type=int, default=None, help='seed for the border and date draws')
    parser.add_argument('--verbose', action='store_true', help='show debug logs')
    return parser.parse_args()


def build_agent_config(args) -> Settings:
    """Merge command line overrides into the .env based settings."""
    config_overrides: Dict[str, Any] = {}
    if args.model:
        config_overrides['RHK_ENGINE_MODEL_NAME'] = args.model
    if args.output_dir:
        config_overrides['OUTPUT_DIR'] = args.output_dir

    if not config_overrides:
        return global_settings
    return global_settings.model_copy(update=config_overrides)


def run(args) -> Optional[Path]:
    config = build_agent_config(args)
    rng = random.Random(args.seed) if args.seed is not None else None
    agent = ReportAgent(config, rng=rng)
    profile = load_profile(args)

    if args.payload:
        payload = json.loads(Path(args.payload).read_text(encoding="utf-8"))
        image = read_image_as_data_url(args.image) if args.image else None
        document = agent.compose_from_payload(profile, args.category, payload, image=image, period=args.period)
    else:
        roster = Path(args.roster).read_text(encoding="utf-8") if args.roster else None
        document = agent.generate_report(
            profile,
            args.category,
            image=read_image_as_data_url(args.image) if args.image else None,
            note=args.note,
            roster=roster,
            class_name=args.class_name,
            period=args.period,
        )

    for warning in document.warnings:
        logger.warning(f"payload warning: {warning.message}")
    html_path = agent.save_report(document)
    logger.success(f"✓ {document.display_title}")
    logger.info(f"pages: {', '.join(document.page_kinds)}")
    logger.info(f"HTML file: {html_path}")
    return html_path


def main():
    args = parse_arguments()
    setup_logger(verbose=args.verbose)
    try:
        run(args)
    except (CategoryNotFound, InputIncomplete, ConfigurationError) as e:
        logger.error(str(e))
        sys.exit(2)
    except AnalyzerFailure as e:
        logger.error(f"{e.remediation} ({e.kind})")
        sys.exit(1)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.warning("interrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"unexpected error: {e}")
        sys.exit(1)
