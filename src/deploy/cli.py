#!/usr/bin/env python3
"""
Waves Marketing Site Deployment
===============================
Syncs the static marketing site to S3 website hosting, corrects content
types for the main assets and, when a CloudFront distribution is
configured, invalidates its cache.

Usage:
    waves-deploy --env=dev --validate
    waves-deploy --env=production --dry-run --validate
    waves-deploy --env=production --force --profile=waves-prod
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from common.logs import configure_logging

from .config import DeployConfig, DeployOptions
from .errors import DeployError
from .runner import run_deploy


logger = logging.getLogger("deploy")

EPILOG = """\
Examples:
  # Deploy to development environment
  waves-deploy --env=dev --validate

  # Dry run for production
  waves-deploy --env=production --dry-run --validate

  # Force deploy to production
  waves-deploy --env=production --force --profile=waves-prod
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="waves-deploy",
        description="🌊 Waves Marketing Site Deployment",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--env",
        dest="environment",
        choices=["dev", "staging", "production"],
        default="dev",
        help="Deployment environment (default: dev)",
    )
    parser.add_argument("--region", default="us-east-1", help="AWS region (default: us-east-1)")
    parser.add_argument("--profile", default="default", help="AWS profile (default: default)")
    parser.add_argument("--force", action="store_true", help="Force deployment to production")
    parser.add_argument(
        "--validate",
        dest="validate_content",
        action="store_true",
        help="Run extra validation checks before deployment",
    )
    parser.add_argument("--dry-run", action="store_true", help="Validate and stage but don't deploy")
    parser.add_argument("--root", type=Path, default=Path("."), help="Site directory (default: .)")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def parse_options(argv: Optional[List[str]] = None) -> tuple[DeployOptions, bool]:
    args = build_parser().parse_args(argv)
    options = DeployOptions(
        environment=args.environment,
        region=args.region,
        profile=args.profile,
        force=args.force,
        validate_content=args.validate_content,
        dry_run=args.dry_run,
        root=args.root,
    )
    return options, args.verbose


def log_banner(options: DeployOptions) -> None:
    logger.info("🌊 Waves Marketing Site Deployment")
    logger.info("📍 Environment: %s", options.environment)
    logger.info("🌍 Region: %s", options.region)
    logger.info("⚡ Force: %s", options.force)
    logger.info("✅ Validate: %s", options.validate_content)
    logger.info("🧪 Dry Run: %s", options.dry_run)
    logger.info("👤 AWS Profile: %s", options.profile)
    logger.info("─" * 60)


def main(argv: Optional[List[str]] = None) -> int:
    options, verbose = parse_options(argv)
    configure_logging(verbose=verbose)
    log_banner(options)

    try:
        config = DeployConfig.from_env()
        run_deploy(options, config)
    except DeployError as e:
        logger.error("❌ %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
