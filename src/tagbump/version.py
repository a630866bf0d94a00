from __future__ import annotations

import logging
import re

from tagbump.errors import VersionMismatchError

logger = logging.getLogger(__name__)


def extract_version(tag: str, pattern: re.Pattern[str] | str) -> str:
    """Searches *pattern* anywhere in *tag* and returns the whole match as the version, also if the pattern
    contains capturing groups. The value is returned verbatim.

    Raises #VersionMismatchError if the pattern does not match."""

    compiled_pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    logger.info('Checking latest tag <subj>"%s"</subj> against input regexp', tag)
    match = compiled_pattern.search(tag)
    if not match:
        raise VersionMismatchError(tag, compiled_pattern.pattern)

    version = match.group(0)
    logger.info('Extracted new version <val>"%s"</val> from <subj>"%s"</subj>', version, tag)
    return version
