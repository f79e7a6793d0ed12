"""Command-line interface for the BLP converter."""

import argparse
import logging
import os
import sys

from .config import ConverterConfig
from .core import setup_logging

logger = logging.getLogger("blp_converter")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="BLPConverter",
        description="Convert BLP image files to PNG or TGA format",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  BLPConverter texture.blp
  BLPConverter -f tga -o ./out Textures/
  BLPConverter -i texture.blp
  BLPConverter -m 2 -j 8 Interface/ Textures/
  BLPConverter --generate-config -c blpconverter.yaml

A mip level past the end of a file's mip chain is silently replaced by the
smallest level the file provides.
        """
    )
    parser.add_argument("files", nargs="*", help="BLP files or directories to convert")
    parser.add_argument("--infos", "-i", action="store_true", default=None,
                        help="Display informations about the BLP file(s) (no conversion)")
    parser.add_argument("--dest", "-o",
                        help="Folder where the converted image(s) must be written to")
    parser.add_argument("--format", "-f", choices=["png", "tga"],
                        help="Output image format")
    parser.add_argument("--miplevel", "-m", type=int,
                        help="The specific mip level to convert")
    parser.add_argument("--jobs", "-j", type=int,
                        help="Number of parallel jobs (0 = one per CPU)")
    parser.add_argument("--config", "-c", help="Path to config YAML")
    parser.add_argument("--generate-config", action="store_true",
                        help="Write the default config YAML and exit")
    parser.add_argument("--log-level",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--no-progress", action="store_true",
                        help="Hide the progress bar")
    return parser


def main():
    """Parse CLI arguments, convert the requested files, and exit with a status."""
    parser = _build_parser()
    args = parser.parse_args()

    if args.generate_config:
        config = ConverterConfig()
        dest = args.config or "blpconverter.yaml"
        if os.path.isdir(dest):
            dest = os.path.join(dest, "blpconverter.yaml")
        config.to_yaml(dest)
        print(f"Generated default {dest}")
        return

    if not args.files:
        parser.error("at least one file or directory is required")

    # Make config warnings visible before full logging is configured.
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    if args.config:
        if not os.path.exists(args.config):
            logger.error("Config file not found: %s", args.config)
            sys.exit(1)
        try:
            config = ConverterConfig.from_yaml(args.config)
        except ValueError as e:
            logger.error("Invalid config file '%s': %s", args.config, e)
            sys.exit(1)
    else:
        config = ConverterConfig()

    # CLI overrides
    if args.infos:
        config.infos = True
    if args.dest is not None:
        config.output_dir = args.dest
    if args.format is not None:
        config.output_format = args.format
    if args.miplevel is not None:
        config.mip_level = args.miplevel
    if args.jobs is not None:
        config.jobs = args.jobs
    if args.log_level:
        config.log_level = args.log_level
    if args.no_progress:
        config.show_progress = False

    try:
        config.validate()
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    setup_logging(config.log_level, config.log_file or None)

    from .converter import BatchConverter
    converter = BatchConverter(config)
    try:
        result = converter.run(args.files)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        sys.exit(130)

    if not result.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
