from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Sequence

from bs4 import BeautifulSoup

from .config import MarkerCheck
from .errors import MissingFileError, UnreadableFileError


logger = logging.getLogger(__name__)

_WAVES_TITLE = re.compile(r"Waves")


def _read_site_file(path: Path, name: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("  ❌ Cannot read %s: %s", name, e)
        raise UnreadableFileError(name, str(e)) from e


def check_markers(root: Path, checks: Sequence[MarkerCheck]) -> List[str]:
    """Check literal marketing markers in site files.

    Returns the advisory warnings (marker absent). A missing file raises
    MissingFileError; a file that is not UTF-8 text raises
    UnreadableFileError.
    """
    warnings: List[str] = []
    for check in checks:
        path = root / check.file
        if not path.is_file():
            logger.error("  ❌ Required file missing: %s", check.file)
            raise MissingFileError(check.file)
        content = _read_site_file(path, check.file)
        if check.content in content:
            logger.info("  ✅ %s found in %s", check.description, check.file)
        else:
            msg = f"{check.description} missing from {check.file}"
            logger.warning("  ⚠️ %s", msg)
            warnings.append(msg)
    return warnings


def check_seo(html: str) -> List[str]:
    """Check the main page for title, description, Open Graph and JSON-LD."""
    soup = BeautifulSoup(html, "html.parser")
    title = soup.find("title")
    results = [
        ("Page title with Waves", title is not None and bool(_WAVES_TITLE.search(title.get_text()))),
        ("Meta description", soup.find("meta", attrs={"name": "description"}) is not None),
        ("Open Graph tags", soup.find("meta", attrs={"property": re.compile(r"^og:")}) is not None),
        ("Schema.org structured data", soup.find("script", attrs={"type": "application/ld+json"}) is not None),
    ]
    warnings: List[str] = []
    for name, present in results:
        if present:
            logger.info("  ✅ %s present", name)
        else:
            msg = f"{name} missing or incomplete"
            logger.warning("  ⚠️ %s", msg)
            warnings.append(msg)
    return warnings


def validate_content(root: Path, checks: Sequence[MarkerCheck]) -> List[str]:
    logger.info("🔒 Running marketing site validation...")
    warnings = check_markers(root, checks)
    index = root / "index.html"
    if index.is_file():
        warnings.extend(check_seo(_read_site_file(index, "index.html")))
    logger.info("✅ Marketing site validation completed")
    return warnings


def check_required_files(root: Path, required: Sequence[str]) -> None:
    for name in required:
        if not (root / name).is_file():
            raise MissingFileError(name)


def basic_html_checks(html: str) -> List[str]:
    """Textual sanity checks on the main page; warnings only."""
    warnings: List[str] = []
    if "<!DOCTYPE html>" not in html:
        warnings.append("HTML5 doctype missing")
    if "<title>" not in html:
        warnings.append("Page title missing")
    if "Flowbite" not in html:
        warnings.append("Flowbite integration might be missing")
    return warnings


def check_main_page(root: Path) -> List[str]:
    index = root / "index.html"
    if not index.exists():
        return []
    logger.info("🔍 Validating HTML...")
    try:
        html = index.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        msg = "HTML validation warnings (continuing anyway)"
        logger.warning("⚠️ %s", msg)
        return [msg]
    warnings = basic_html_checks(html)
    for w in warnings:
        logger.warning("⚠️ %s", w)
    logger.info("✅ HTML validation completed")
    return warnings
