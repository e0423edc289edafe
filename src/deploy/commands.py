from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import CommandError


logger = logging.getLogger(__name__)

AWS = "aws"


def exclude_args(patterns: Sequence[str]) -> List[str]:
    out: List[str] = []
    for pattern in patterns:
        out.extend(["--exclude", pattern])
    return out


def sync_command(bucket: str, profile: str, patterns: Sequence[str], *, dry_run: bool) -> List[str]:
    """Mirror the site root into the bucket.

    The real sync deletes remote objects absent locally; the preview only
    reports what would change.
    """
    mode = "--dryrun" if dry_run else "--delete"
    return [AWS, "s3", "sync", ".", f"s3://{bucket}", "--profile", profile, mode, *exclude_args(patterns)]


def content_type_command(bucket: str, key: str, content_type: str, profile: str) -> List[str]:
    uri = f"s3://{bucket}/{key}"
    return [
        AWS, "s3", "cp", uri, uri,
        "--profile", profile,
        "--content-type", content_type,
        "--metadata-directive", "REPLACE",
    ]


def invalidation_command(distribution_id: str, profile: str, paths: str = "/*") -> List[str]:
    return [
        AWS, "cloudfront", "create-invalidation",
        "--distribution-id", distribution_id,
        "--paths", paths,
        "--profile", profile,
    ]


def render(argv: Sequence[str]) -> str:
    """Shell-quoted form of a command, for display only."""
    return shlex.join(argv)


class CommandRunner:
    """
    Runs external commands synchronously from the site root.

    Notes
    - `stream=True` lets the command write straight to the terminal (used for
      the sync so its per-file progress is visible); otherwise output is
      captured and attached to `CommandError` on failure.
    - No retries: a failed command raises immediately.
    """

    def __init__(self, cwd: Optional[Path] = None) -> None:
        self._cwd = cwd

    def run(self, argv: Sequence[str], *, stream: bool = False) -> str:
        args = list(argv)
        logger.debug("$ %s", render(args))
        try:
            proc = subprocess.run(
                args,
                cwd=self._cwd,
                check=False,
                text=True,
                stdout=None if stream else subprocess.PIPE,
                stderr=None if stream else subprocess.STDOUT,
            )
        except OSError as exc:
            raise CommandError(args, None, str(exc)) from exc
        output = proc.stdout or ""
        if proc.returncode != 0:
            raise CommandError(args, proc.returncode, output)
        return output


__all__ = [
    "CommandRunner",
    "sync_command",
    "content_type_command",
    "invalidation_command",
    "exclude_args",
    "render",
]
