"""
Backup workflow for a single site directory.

Stages and the state each one needs first:

1. ``detect``               Initialized           -> Detected
2. ``acquire_credentials``  Detected              -> CredentialsAcquired
3. ``backup_database``      CredentialsAcquired   -> DatabaseBackedUp
4. ``backup_files``         CredentialsAcquired   -> FilesBackedUp

Stages 3 and 4 are independent of each other. Reached states are never
undone: running a stage early, or a second time, raises
``PipelineOrderError`` before anything touches the disk or spawns a process.
"""

import functools
import logging
import os
from typing import List, Optional, Tuple

from .consts import (
    BACKUP_DIR,
    DATABASE_ARCHIVE,
    FILES_ARCHIVE,
    PipelineState,
    SiteType,
)
from .credentials import get_credentials
from .detector import detect_site_type
from .errors import BackupIOError, PipelineOrderError
from .models.credentials import Credentials
from .process import ProcessPipe
from .utils import FileIndexer, to_engineering_notation

LOGGER = logging.getLogger(__name__)


def requires(prerequisite: PipelineState, reaches: PipelineState):
    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            if prerequisite not in self.reached:
                raise PipelineOrderError(
                    f"{func.__name__}() needs state '{prerequisite.value}', "
                    f"pipeline is at '{self.state.value}'"
                )
            if reaches in self.reached:
                raise PipelineOrderError(
                    f"{func.__name__}() has already run"
                )

            result = func(self, *args, **kwargs)
            self._reached.append(reaches)
            return result

        return wrapper

    return decorator


class BackupPipeline:
    def __init__(
            self,
            path: str,
            output_root: str,
            process_pipe: Optional[ProcessPipe] = None,
            exclude_patterns: Optional[List[str]] = None,
            max_workers: int = 1,
    ):
        self.path = os.path.abspath(path)
        self.output_root = os.path.abspath(output_root)
        self.process_pipe = process_pipe or ProcessPipe()
        self.exclude_patterns = exclude_patterns or []
        self.max_workers = max_workers

        self.site_type: Optional[SiteType] = None
        self.credentials: Optional[Credentials] = None
        self._reached: List[PipelineState] = [PipelineState.INITIALIZED]

    @property
    def state(self) -> PipelineState:
        return self._reached[-1]

    @property
    def reached(self) -> Tuple[PipelineState, ...]:
        return tuple(self._reached)

    @property
    def backup_dir(self) -> str:
        return os.path.join(self.output_root, BACKUP_DIR)

    @property
    def database_archive(self) -> str:
        return os.path.join(self.backup_dir, DATABASE_ARCHIVE)

    @property
    def files_archive(self) -> str:
        return os.path.join(self.backup_dir, FILES_ARCHIVE)

    @requires(PipelineState.INITIALIZED, PipelineState.DETECTED)
    def detect(self) -> SiteType:
        self.site_type = detect_site_type(self.path)
        return self.site_type

    @requires(PipelineState.DETECTED, PipelineState.CREDENTIALS_ACQUIRED)
    def acquire_credentials(self) -> Credentials:
        self.credentials = get_credentials(self.path, self.site_type)
        LOGGER.info(
            "Found credentials for database '%s'", self.credentials.database
        )
        return self.credentials

    @requires(
        PipelineState.CREDENTIALS_ACQUIRED, PipelineState.DATABASE_BACKED_UP
    )
    def backup_database(self) -> str:
        self._ensure_backup_dir()
        self.process_pipe.dump_database(self.credentials, self.database_archive)
        return self.database_archive

    @requires(
        PipelineState.CREDENTIALS_ACQUIRED, PipelineState.FILES_BACKED_UP
    )
    def backup_files(self) -> str:
        self._ensure_backup_dir()
        inner_backup_dir = self._backup_dir_inside_site()

        if self.exclude_patterns:
            files, size = FileIndexer(
                self.path,
                exclude_patterns=self.exclude_patterns,
                exclude_paths=[inner_backup_dir] if inner_backup_dir else [],
                max_workers=self.max_workers,
            ).run()
            LOGGER.info(
                "Archiving %d entries, %s bytes",
                len(files), to_engineering_notation(size)
            )
            self.process_pipe.archive_directory(
                self.path, self.files_archive, file_list=files
            )
        else:
            excludes = [f"./{inner_backup_dir}"] if inner_backup_dir else []
            self.process_pipe.archive_directory(
                self.path, self.files_archive, excludes=excludes
            )

        return self.files_archive

    def run(self, skip_database: bool = False) -> List[str]:
        """Run every stage in order and return the archives written."""
        self.detect()
        self.acquire_credentials()

        archives = []
        if not skip_database:
            archives.append(self.backup_database())
        archives.append(self.backup_files())

        return archives

    def _ensure_backup_dir(self) -> None:
        try:
            os.makedirs(self.backup_dir, exist_ok=True)
        except OSError as e:
            raise BackupIOError(str(e)) from e

    def _backup_dir_inside_site(self) -> Optional[str]:
        """The backup directory relative to the site root, if it is inside."""
        if os.path.commonpath([self.path, self.backup_dir]) != self.path:
            return None

        return os.path.relpath(self.backup_dir, self.path)
