"""
Command Line Interface for derivative generation.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .album_discovery import AlbumDiscovery
from .derivative_generator import DerivativeGenerator
from .formats import PipelineMode, SourceFormat
from .gallery import count_albums
from .generation_progress import GenerationProgress
from .hash_allocator import HashAllocator
from .output_tree import OutputTreeManager
from .pipeline import PipelineDriver
from .pipeline_config import PipelineConfig
from .reporter import Reporter

BASIC_EXTENSIONS = SourceFormat.JPEG.extensions


def setup_logging(verbose: bool) -> logging.Logger:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logging.getLogger('PIL').setLevel(logging.WARNING)

    return logging.getLogger('photoderiv')


def get_config(args: argparse.Namespace) -> PipelineConfig:
    """Get configuration from environment and CLI overrides."""
    config = PipelineConfig.from_env()

    if getattr(args, 'base_dir', None):
        config.base_dir = args.base_dir
    if getattr(args, 'content_root', None):
        config.content_root = args.content_root
    if getattr(args, 'images_root', None):
        config.images_root = args.images_root
    if getattr(args, 'public_root', None):
        config.public_root = args.public_root
    if getattr(args, 'mode', None):
        config.mode = args.mode
    if getattr(args, 'naming', None):
        config.naming = args.naming
    if getattr(args, 'workers', None):
        config.workers = args.workers

    return config


def load_config(args: argparse.Namespace, logger: logging.Logger) -> Optional[PipelineConfig]:
    """Build and validate configuration, logging every problem found."""
    config = get_config(args)
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return None
    return config


def build_discovery(config: PipelineConfig, logger: logging.Logger) -> AlbumDiscovery:
    return AlbumDiscovery(
        content_root=config.content_dir,
        images_root=config.images_dir,
        public_images_root=config.public_images_dir,
        mode=config.pipeline_mode,
        logger=logger,
    )


def cmd_run(args: argparse.Namespace) -> int:
    """Execute run command."""
    logger = setup_logging(args.verbose)

    config = load_config(args, logger)
    if config is None:
        return 1

    logger.info(f"Content root: {config.content_dir}")
    logger.info(f"Images root: {config.images_dir}")
    if config.pipeline_mode is PipelineMode.EXTENDED:
        logger.info(f"Public images root: {config.public_images_dir}")
    logger.info(f"Mode: {config.mode}, naming: {config.naming}")

    if args.show_files:
        logger.info("Show-files mode: will print each file")

    try:
        generator = DerivativeGenerator(
            mode=config.pipeline_mode,
            allocator=HashAllocator(config.naming),
            logger=logger,
        )
        driver = PipelineDriver(
            discovery=build_discovery(config, logger),
            generator=generator,
            tree_manager=OutputTreeManager(logger),
            workers=config.workers,
            dry_run=args.dry_run,
            logger=logger,
        )

        progress = GenerationProgress(show_files=args.show_files, logger=logger)
        stats = driver.run(progress=progress)

        if not args.quiet:
            print()
            Reporter().report_summary(stats, dry_run=args.dry_run)

        return 1 if stats.has_failures else 0

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.exception(f"Generation failed: {e}")
        return 1


def cmd_count(args: argparse.Namespace) -> int:
    """Execute count command."""
    logger = setup_logging(args.verbose)

    config = load_config(args, logger)
    if config is None:
        return 1

    try:
        albums = build_discovery(config, logger).list_album_names()
        if config.pipeline_mode is PipelineMode.EXTENDED:
            counts = count_albums(config.public_images_dir, albums)
        else:
            counts = count_albums(config.images_dir, albums, BASIC_EXTENSIONS)
    except Exception as e:
        logger.exception(f"Count failed: {e}")
        return 1

    Reporter().report_photo_counts(counts)
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='photoderiv',
        description='Regenerate resized photo derivatives for every album',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Layout (relative to --base-dir):
  src/content/photos/<album>/          albums to process
  src/assets/images/<album>-source/    source photos
  src/assets/images/<album>/           previews (extended) or resized JPEGs (basic)
  public/images/<album>/               full-size WebP (extended)

Running without a command is the same as "run".
Environment variables PHOTODERIV_BASE_DIR, PHOTODERIV_CONTENT_ROOT,
PHOTODERIV_IMAGES_ROOT, PHOTODERIV_PUBLIC_ROOT, PHOTODERIV_MODE,
PHOTODERIV_NAMING and PHOTODERIV_WORKERS set the defaults.
"""
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    run_parser = subparsers.add_parser('run', help='Regenerate derivatives for all albums')
    run_parser.add_argument('--mode', choices=[m.value for m in PipelineMode],
                            help='basic: one JPEG per photo; extended: WebP + JPEG preview')
    run_parser.add_argument('--naming', choices=list(HashAllocator.STRATEGIES),
                            help='random (new names every run) or content (SHA-256 of source)')
    run_parser.add_argument('-w', '--workers', type=int, help='Encoder threads')
    run_parser.add_argument('-n', '--dry-run', action='store_true', help='Show what would be done')
    run_parser.add_argument('-q', '--quiet', action='store_true', help='Suppress the summary report')
    run_parser.add_argument('--show-files', action='store_true',
                            help='Print each file as processed with result')
    run_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    add_path_arguments(run_parser)

    count_parser = subparsers.add_parser('count', help='Count published photos per album')
    count_parser.add_argument('--mode', choices=[m.value for m in PipelineMode],
                              help='Which output tree to count')
    count_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    add_path_arguments(count_parser)

    return parser


def add_path_arguments(parser: argparse.ArgumentParser) -> None:
    """Add directory layout arguments to a parser."""
    group = parser.add_argument_group('Layout')
    group.add_argument('--base-dir', metavar='PATH', help='Site root (default: current directory)')
    group.add_argument('--content-root', metavar='PATH', help='Album directory root')
    group.add_argument('--images-root', metavar='PATH', help='Source and preview image root')
    group.add_argument('--public-root', metavar='PATH', help='Public web root')


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    argv = sys.argv[1:] if args is None else list(args)
    parser = create_parser()
    parsed_args = parser.parse_args(argv)

    if not parsed_args.command:
        parsed_args = parser.parse_args(argv + ['run'])

    if parsed_args.command == 'run':
        return cmd_run(parsed_args)
    elif parsed_args.command == 'count':
        return cmd_count(parsed_args)

    return 1
