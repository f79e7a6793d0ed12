"""Convert batches of BLP files on a worker pool.

`BatchConverter` expands inputs into jobs, decodes each file independently,
and keeps thread-safe success/failure counts so one bad file never stops
the rest of the batch.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from tqdm import tqdm

from .config import ConverterConfig
from .core import (
    BLPHeader, ConversionJob, collect_jobs, decode_mipmap,
    parse_header, read_blp, save_pixels,
)
from .core.bcn import BlockCodec

logger = logging.getLogger("blp_converter")


@dataclass
class BatchResult:
    """Outcome counts of a batch run."""

    expected: int = 0
    converted: int = 0

    @property
    def failed(self) -> int:
        return self.expected - self.converted

    @property
    def ok(self) -> bool:
        return self.converted >= self.expected


def format_header_info(name: str, header: BLPHeader) -> str:
    """Render the ``--infos`` report for one file."""
    return (
        f"Infos about `{name}`:\n"
        f"  - Version:    BLP2\n"
        f"  - Format:     {header.friendly_format}\n"
        f"  - Dimensions: {header.width}x{header.height}\n"
        f"  - Mip levels: {header.mip_count}\n"
    )


class BatchConverter:
    """Decode BLP files and write them as PNG/TGA images."""

    def __init__(self, config: ConverterConfig, codec: Optional[BlockCodec] = None):
        self.config = config
        self.codec = codec
        self._lock = threading.Lock()
        self._converted = 0

    def convert_file(self, job: ConversionJob) -> bool:
        """Convert (or describe, in infos mode) a single file.

        Returns True on success. Decoding and I/O errors are logged, never
        raised, so the caller can keep going with the rest of the batch.
        """
        try:
            data = read_blp(job.source)
        except OSError as exc:
            logger.error("%s: Failed to open the file (%s)", job.source, exc)
            return False

        try:
            header = parse_header(data)
            if self.config.infos:
                print(format_header_info(Path(job.source).name, header), end="")
                return True

            pixels = decode_mipmap(header, data, self.config.mip_level, codec=self.codec)
        except ValueError as exc:
            # BLPError, or a block codec rejecting its payload
            logger.error("%s: %s", job.source, exc)
            return False

        try:
            save_pixels(pixels, job.destination, self.config.output_format)
        except (OSError, ValueError) as exc:
            logger.error("%s: Failed to save the image (%s)", job.source, exc)
            return False

        logger.info("%s: OK", job.source)
        return True

    def _record(self, success: bool):
        if success:
            with self._lock:
                self._converted += 1

    def _run_job(self, job: ConversionJob):
        try:
            self._record(self.convert_file(job))
        except Exception:
            logger.error("%s: Unexpected failure", job.source, exc_info=True)

    def run(self, inputs: Iterable[str]) -> BatchResult:
        """Convert every file reachable from *inputs*; return the counts."""
        jobs, rejected = collect_jobs(
            inputs, self.config.output_dir, self.config.output_format,
            self.config.extensions,
        )
        with self._lock:
            self._converted = 0

        self._execute(jobs)

        result = BatchResult(expected=len(jobs) + len(rejected),
                             converted=self._converted)
        if not result.ok:
            logger.error("Failed to convert %d image(s)", result.failed)
        else:
            logger.debug("Converted %d/%d image(s)", result.converted, result.expected)
        return result

    def _execute(self, jobs: List[ConversionJob]):
        if not jobs:
            return
        workers = min(self.config.resolve_jobs(), len(jobs))
        desc = "Reading" if self.config.infos else "Converting"
        disable = not self.config.show_progress

        if workers <= 1:
            for job in tqdm(jobs, desc=desc, disable=disable):
                self._run_job(job)
            return

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self._run_job, job) for job in jobs]
            with tqdm(total=len(futures), desc=desc, disable=disable) as pbar:
                for future in as_completed(futures):
                    future.result()
                    pbar.update(1)
