from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from .commands import CommandRunner, content_type_command, invalidation_command, render, sync_command
from .config import DeployConfig, DeployOptions, DeployResult
from .credentials import check_credentials
from .errors import CommandError, ProductionGuardError, SyncError
from .validation import check_main_page, check_required_files, validate_content


logger = logging.getLogger(__name__)

CredentialChecker = Callable[..., Dict[str, Any]]


def _sync(runner: CommandRunner, argv: List[str], what: str) -> None:
    try:
        runner.run(argv, stream=True)
    except CommandError as e:
        raise SyncError(f"{what} failed: {e}") from e


def _set_content_types(runner: CommandRunner, config: DeployConfig, profile: str) -> List[str]:
    warnings: List[str] = []
    for key, content_type in config.content_types:
        try:
            runner.run(content_type_command(config.s3_bucket, key, content_type, profile))
        except CommandError as e:
            msg = f"Content type setting warning: {key}: {e}"
            logger.warning("⚠️ %s", msg)
            warnings.append(msg)
    return warnings


def _invalidate(runner: CommandRunner, config: DeployConfig, profile: str) -> Optional[str]:
    try:
        runner.run(invalidation_command(config.cloudfront_distribution_id, profile))
    except CommandError as e:
        msg = f"CloudFront invalidation failed (continuing): {e}"
        logger.warning("⚠️ %s", msg)
        return msg
    logger.info("✅ CloudFront invalidation created")
    return None


def run_deploy(
    options: DeployOptions,
    config: DeployConfig,
    *,
    runner: Optional[CommandRunner] = None,
    credential_checker: Optional[CredentialChecker] = None,
) -> DeployResult:
    """
    Run the full deployment sequence.

    Steps run strictly in order and stop at the first fatal failure, which
    raises a DeployError subclass. Advisory problems are logged and
    returned in `DeployResult.warnings`.
    """
    runner = runner or CommandRunner(cwd=options.root)
    credential_checker = credential_checker or check_credentials
    root = options.root
    warnings: List[str] = []

    logger.info("📦 Gathering marketing site artifacts...")

    if options.validate_content:
        logger.info("\n✅ Running pre-deployment validation...")
        warnings.extend(validate_content(root, config.marker_checks))

    if options.is_production and not options.force:
        logger.warning("\n⚠️ Production deployment requires --force flag")
        logger.warning("   Use: waves-deploy --env=production --force")
        raise ProductionGuardError("Production deployment requires --force flag")

    logger.info("\n🔐 Checking AWS credentials...")
    identity = credential_checker(options.profile, region=options.region)
    logger.info("✅ AWS credentials validated")
    logger.debug("caller identity: %s", identity.get("Arn"))

    logger.info("\n📋 Pre-deployment checks...")
    check_required_files(root, config.required_files)
    logger.info("✅ Required files present")

    warnings.extend(check_main_page(root))

    website_url = config.website_url(options.region)

    if options.dry_run:
        logger.info("\n🧪 Performing dry run deployment...")
        argv = sync_command(config.s3_bucket, options.profile, config.exclude_patterns, dry_run=True)
        logger.info("📤 Would execute: %s", render(argv))
        _sync(runner, argv, "Dry run")
        logger.info("\n🧪 Dry run complete - no actual deployment performed")
        logger.info("✅ All validations passed - ready for deployment")
        return DeployResult(
            environment=options.environment,
            bucket=config.s3_bucket,
            website_url=website_url,
            dry_run=True,
            warnings=warnings,
        )

    logger.info("\n🚀 Deploying marketing site to S3...")
    logger.info("📤 Syncing files to s3://%s", config.s3_bucket)
    _sync(
        runner,
        sync_command(config.s3_bucket, options.profile, config.exclude_patterns, dry_run=False),
        "S3 sync",
    )
    logger.info("✅ Files synced to S3")

    logger.info("🔧 Setting content types...")
    warnings.extend(_set_content_types(runner, config, options.profile))
    logger.info("✅ Content types configured")

    invalidated = False
    if config.cloudfront_distribution_id:
        logger.info("\n🔄 Creating CloudFront invalidation...")
        failure = _invalidate(runner, config, options.profile)
        if failure:
            warnings.append(failure)
        else:
            invalidated = True

    production_urls = None
    if options.is_production:
        production_urls = [config.production_url, website_url]

    result = DeployResult(
        environment=options.environment,
        bucket=config.s3_bucket,
        website_url=website_url,
        production_urls=production_urls,
        invalidated=invalidated,
        warnings=warnings,
    )
    log_summary(result)
    return result


def log_summary(result: DeployResult) -> None:
    logger.info("\n🎉 Marketing site deployment completed successfully!")
    logger.info("📊 Deployment Summary:")
    logger.info("   Environment: %s", result.environment)
    logger.info("   S3 Bucket: s3://%s", result.bucket)
    logger.info("   Website URL: %s", result.website_url)
    if result.production_urls:
        main_url, direct_url = result.production_urls
        logger.info("\n🌐 Production URLs:")
        logger.info("   Main URL: %s (requires DNS setup)", main_url)
        logger.info("   Direct URL: %s", direct_url)
    if result.warnings:
        logger.info("   Warnings: %d", len(result.warnings))
    logger.info("\n✨ Waves marketing site deployment complete!")
