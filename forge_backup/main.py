import argparse
import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from .consts import METADATA_FILE
from .errors import BackupIOError, ForgeBackupError
from .models.args import Args
from .models.metadata import Metadata
from .pipeline import BackupPipeline
from .utils import load_manifest

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    arg_parser = argparse.ArgumentParser(
        description="Back up a site's database and files for a Forge move."
    )
    arg_parser.add_argument(
        "--dir", "-d",
        help="Specifies the source directory to copy",
        required=True
    )
    arg_parser.add_argument(
        "--server", "-s",
        help="Specifies the target server",
        default=None
    )
    arg_parser.add_argument(
        "--target", "-t",
        help="Specifies the target folder",
        default=None
    )
    arg_parser.add_argument(
        "--output", "-o",
        help="Directory to write forge_backup/ into "
             "(defaults to the home directory)",
        default=None
    )
    arg_parser.add_argument(
        "--exclude-manifest", "-e",
        help="File of glob patterns to leave out of the file archive",
        default=None
    )
    arg_parser.add_argument(
        "--skip-database",
        help="Only archive the site files",
        action="store_true"
    )
    arg_parser.add_argument(
        "--threads",
        help=(
            "Number of processes used to index files when excluding "
            "(default is 1, -1 means all available cores)"
        ),
        type=int, default=1
    )
    arg_parser.add_argument(
        "-v", "--verbose",
        help="Increase logging verbosity",
        action="count", default=0
    )
    return arg_parser


def configure_logging(level: int) -> None:
    if level >= 2:
        log_level = logging.DEBUG
    elif level == 1:
        log_level = logging.INFO
    else:
        log_level = logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )


def parse_args(argv: Optional[Iterable[str]] = None) -> Args:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    return Args(
        source_dir=args.dir,
        server=args.server,
        target=args.target,
        output_root=args.output or str(Path.home()),
        exclude_manifest_path=args.exclude_manifest,
        skip_database=args.skip_database,
        threads=args.threads,
    )


def write_metadata(
        pipeline: BackupPipeline, args: Args, archives: List[str]
) -> str:
    metadata = Metadata(
        site_type=pipeline.site_type.value,
        source_dir=pipeline.path,
        server=args.server,
        target=args.target,
        archives=[os.path.basename(archive) for archive in archives],
        created_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
    )
    path = os.path.join(pipeline.backup_dir, METADATA_FILE)
    with open(path, "w") as f:
        f.write(json.dumps(metadata.model_dump(), indent=2))
    LOGGER.info("Metadata written to %s", path)

    return path


def run(args: Args) -> None:
    exclude_patterns = []
    if args.exclude_manifest_path:
        try:
            exclude_patterns = load_manifest(args.exclude_manifest_path)
        except OSError as e:
            raise BackupIOError(str(e)) from e

    pipeline = BackupPipeline(
        args.source_dir,
        args.output_root,
        exclude_patterns=exclude_patterns,
        max_workers=args.threads,
    )

    site_type = pipeline.detect()
    print(f"Detected {site_type.value} site")

    pipeline.acquire_credentials()

    archives = []
    if args.skip_database:
        print("Skipping database backup")
    else:
        print("Backing up database...")
        archives.append(pipeline.backup_database())

    print("Backing up files...")
    archives.append(pipeline.backup_files())

    try:
        write_metadata(pipeline, args, archives)
    except OSError as e:
        raise BackupIOError(str(e)) from e

    print(f"Backup completed in '{pipeline.backup_dir}'")


def main(argv: Optional[Iterable[str]] = None):
    try:
        args = parse_args(argv)
        run(args)
    except (ForgeBackupError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
