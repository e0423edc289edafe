from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from common.env import getenv

from .errors import ConfigError


# Environment variable overrides for the deploy target
ENV_S3_BUCKET = "WAVES_S3_BUCKET"
ENV_DISTRIBUTION_ID = "WAVES_CLOUDFRONT_DISTRIBUTION_ID"

DEFAULT_BUCKET = "waves-static-seawater"
PRODUCTION_URL = "https://waves.seawater.io"

Environment = Literal["dev", "staging", "production"]

DEFAULT_REQUIRED_FILES: Tuple[str, ...] = (
    "index.html",
    "css/marine-theme.css",
    "js/marine-app.js",
    "about.html",
    "features.html",
)

# Always excluded from the sync: editor, version-control and package-manifest files
BASE_EXCLUDE_PATTERNS: Tuple[str, ...] = (
    "node_modules/*",
    ".git/*",
    "package*.json",
    ".claude/*",
)

DEFAULT_EXCLUDE_PATTERNS: Tuple[str, ...] = BASE_EXCLUDE_PATTERNS + (
    "*.md",
    "next.config.js",
    "tsconfig.json",
    "deploy*.js",
    "deploy*.sh",
    "*.log",
)

DEFAULT_CONTENT_TYPES: Tuple[Tuple[str, str], ...] = (
    ("index.html", "text/html; charset=utf-8"),
    ("css/marine-theme.css", "text/css; charset=utf-8"),
    ("js/marine-app.js", "application/javascript; charset=utf-8"),
)


class MarkerCheck(BaseModel):
    """A literal string expected inside a site file (extended validation)."""

    file: str
    content: str
    description: str


DEFAULT_MARKER_CHECKS: Tuple[MarkerCheck, ...] = (
    MarkerCheck(file="index.html", content="Amplify Your Navigation Tools", description="AI amplification messaging"),
    MarkerCheck(file="index.html", content="Choose Your Navigation Experience", description="Pricing section"),
    MarkerCheck(file="index.html", content="Open Source Navigation Intelligence", description="GitHub integration"),
    MarkerCheck(file="css/marine-theme.css", content="marine-", description="Marine theme styles"),
    MarkerCheck(file="js/marine-app.js", content="WavesMarineApp", description="Marine app functionality"),
)


class DeployConfig(BaseModel):
    """
    Static deployment target and site conventions.

    Fields
    - s3_bucket: bucket the site is mirrored into.
    - cloudfront_distribution_id: empty when no distribution is configured
      (invalidation is skipped).
    - required_files: paths (relative to the site root) that must exist.
    - exclude_patterns: sync exclusions; the base editor/VCS/manifest
      patterns are always merged in.
    - content_types: (key, content-type) pairs corrected after the sync.
    - marker_checks: literal content expected by `--validate`.
    """

    s3_bucket: str = DEFAULT_BUCKET
    cloudfront_distribution_id: str = ""
    required_files: List[str] = Field(default_factory=lambda: list(DEFAULT_REQUIRED_FILES))
    exclude_patterns: List[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    content_types: List[Tuple[str, str]] = Field(default_factory=lambda: list(DEFAULT_CONTENT_TYPES))
    marker_checks: List[MarkerCheck] = Field(default_factory=lambda: list(DEFAULT_MARKER_CHECKS))
    production_url: str = PRODUCTION_URL

    @field_validator("s3_bucket")
    @classmethod
    def _bucket_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("s3_bucket must not be empty")
        return v

    @field_validator("exclude_patterns")
    @classmethod
    def _merge_base_excludes(cls, v: List[str]) -> List[str]:
        out: List[str] = list(BASE_EXCLUDE_PATTERNS)
        for pattern in v:
            if pattern not in out:
                out.append(pattern)
        return out

    @classmethod
    def from_env(cls) -> "DeployConfig":
        overrides = {}
        bucket = getenv(ENV_S3_BUCKET)
        if bucket:
            overrides["s3_bucket"] = bucket
        dist = getenv(ENV_DISTRIBUTION_ID)
        if dist:
            overrides["cloudfront_distribution_id"] = dist
        try:
            return cls(**overrides)
        except ValidationError as e:
            raise ConfigError(f"Invalid deploy configuration from {ENV_S3_BUCKET}/{ENV_DISTRIBUTION_ID}: {e}") from e

    def website_url(self, region: str) -> str:
        return f"http://{self.s3_bucket}.s3-website-{region}.amazonaws.com"


class DeployOptions(BaseModel):
    """Command-line options for a single deployment run."""

    environment: Environment = "dev"
    region: str = "us-east-1"
    profile: str = "default"
    force: bool = False
    validate_content: bool = False
    dry_run: bool = False
    root: Path = Path(".")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


class DeployResult(BaseModel):
    environment: str
    bucket: str
    website_url: str
    production_urls: Optional[List[str]] = None
    dry_run: bool = False
    invalidated: bool = False
    warnings: List[str] = Field(default_factory=list)
