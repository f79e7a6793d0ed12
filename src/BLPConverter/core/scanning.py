"""Expand command-line inputs into (source, destination) conversion jobs."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

logger = logging.getLogger("blp_converter")


@dataclass(frozen=True)
class ConversionJob:
    """One BLP file and the image path it converts to."""

    source: str
    destination: str


def _with_format(path: Path, output_format: str) -> Path:
    return path.with_suffix(f".{output_format}")


def _scan_directory(directory: str, output_dir: str, output_format: str,
                    extensions: set) -> List[ConversionJob]:
    """Mirror every BLP file under *directory* into ``output_dir/<dirname>/``."""
    root = Path(directory)
    # Path() drops a trailing slash; "." and ".." need resolving for a name.
    name = root.name if root.name not in ("", "..") else root.resolve().name
    group_dir = Path(output_dir) / name

    jobs = []
    for current, _dirs, files in os.walk(root):
        for fname in sorted(files):
            if Path(fname).suffix.lower() not in extensions:
                continue
            source = Path(current) / fname
            if not source.is_file():
                continue
            rel = source.relative_to(root)
            destination = group_dir / _with_format(rel, output_format)
            jobs.append(ConversionJob(str(source), str(destination)))
    logger.debug("Found %d BLP file(s) under %s", len(jobs), directory)
    return jobs


def collect_jobs(inputs: Iterable[str], output_dir: str, output_format: str,
                 extensions: Sequence[str] = (".blp",)
                 ) -> Tuple[List[ConversionJob], List[Tuple[str, str]]]:
    """Build conversion jobs from files and directories.

    Returns ``(jobs, rejected)``. Missing inputs are logged and skipped;
    inputs that exist but are neither a regular file nor a directory are
    returned in *rejected* as ``(path, reason)`` and count as failures.
    """
    wanted = {ext.lower() for ext in extensions}
    jobs: List[ConversionJob] = []
    rejected: List[Tuple[str, str]] = []

    for item in inputs:
        path = Path(item)
        try:
            if not path.exists():
                logger.error("%s: Not found", item)
                continue
            if path.is_dir():
                jobs.extend(_scan_directory(item, output_dir, output_format, wanted))
            elif path.is_file():
                destination = Path(output_dir) / _with_format(Path(path.name), output_format)
                jobs.append(ConversionJob(item, str(destination)))
            else:
                logger.error("%s: Not a directory or a regular file", item)
                rejected.append((item, "Not a directory or a regular file"))
        except OSError as exc:
            logger.error("%s: %s", item, exc)
            continue

    return jobs, rejected
