"""
File discovery for errorflow.

Walks a directory for analyzable sources, applying the exclusion patterns
before the engine ever sees a path.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from .config import AnalysisConfig
from .exceptions import InvalidPathError

logger = logging.getLogger(__name__)


def should_skip_file(filepath: Path, exclude_patterns: list[str]) -> bool:
    """
    Check if a file should be skipped based on exclusion patterns.

    ``dir/*`` patterns exclude any file below a directory called ``dir``;
    other patterns are matched against the path from the right
    (``*.spec.ts``, ``src/generated/*.ts``).

    Args:
        filepath: File to check, relative to the discovery root
        exclude_patterns: List of glob patterns to exclude

    Returns:
        True if file should be skipped
    """
    directories = filepath.parts[:-1]
    for pattern in exclude_patterns:
        if pattern.endswith("/*") and "/" not in pattern[:-2]:
            if pattern[:-2] in directories:
                return True
        if filepath.match(pattern):
            return True
    return False


def discover_source_files(
    root_dir: Path,
    config: Optional[AnalysisConfig] = None,
    extra_excludes: Optional[list[str]] = None,
) -> list[Path]:
    """
    Find every analyzable file under ``root_dir``.

    Args:
        root_dir: Directory to scan
        config: Supplies extensions, exclusions and limits
        extra_excludes: Patterns added on top of ``config.exclude_patterns``

    Returns:
        Sorted list of file paths (sorted for a stable iteration order)

    Raises:
        InvalidPathError: If ``root_dir`` is not a directory
    """
    config = config or AnalysisConfig()
    if not root_dir.is_dir():
        raise InvalidPathError(root_dir, "not a directory")

    patterns = list(config.exclude_patterns) + list(extra_excludes or [])
    extensions = {ext.lower() for ext in config.extensions}
    found: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root_dir, followlinks=config.follow_symlinks):
        current = Path(dirpath)
        rel_dir = current.relative_to(root_dir)

        # Prune in place so excluded trees (node_modules) are never walked
        dirnames[:] = sorted(
            d
            for d in dirnames
            if (config.allow_hidden_files or not d.startswith("."))
            and not should_skip_file(rel_dir / d / "_", patterns)
        )

        for name in sorted(filenames):
            if not config.allow_hidden_files and name.startswith("."):
                continue
            path = current / name
            if path.suffix.lower() not in extensions:
                continue
            if path.is_symlink() and not config.follow_symlinks:
                continue
            if should_skip_file(rel_dir / name, patterns):
                continue
            found.append(path)

    found.sort()
    if len(found) > config.max_files:
        logger.warning(
            f"Found {len(found)} files, analyzing the first {config.max_files} (max_files)"
        )
        found = found[: config.max_files]
    return found
