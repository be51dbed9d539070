"""
External utilities behind the two backup stages.

The database dump is streamed straight from ``mysqldump`` into ``gzip``;
neither the dump nor the compressed output is held in memory. The file
tree is archived by ``tar`` writing the compressed archive itself.
"""

import logging
import os
import subprocess
import tempfile
from typing import List, Optional, Sequence, Type

from .config import Config
from .consts import PASSWORD_ENV_VAR
from .errors import BackupError, BackupIOError
from .models.credentials import Credentials

LOGGER = logging.getLogger(__name__)


class ProcessPipe:
    def __init__(self, config: Type[Config] = Config):
        self.config = config
        self.gzip_level = config.gzip_level()

    def dump_database(self, credentials: Credentials, out_path: str) -> None:
        """
        Run ``mysqldump | gzip -c > out_path``.

        The password only ever travels in the dump process' environment.

        Raises:
            BackupIOError: a utility could not be started, exited non-zero,
                or the output file could not be written
        """
        env = os.environ.copy()
        env[PASSWORD_ENV_VAR] = credentials.password
        dump_command = self._mysqldump_command(credentials)
        gzip_command = self._gzip_command()

        LOGGER.info(
            "Dumping database '%s' as '%s'",
            credentials.database, credentials.username
        )
        try:
            with open(out_path, "wb") as out, \
                    tempfile.TemporaryFile() as dump_errors:
                dump = subprocess.Popen(
                    dump_command,
                    stdout=subprocess.PIPE,
                    stderr=dump_errors,
                    env=env,
                )
                try:
                    gzip = subprocess.Popen(
                        gzip_command,
                        stdin=dump.stdout,
                        stdout=out,
                        stderr=subprocess.PIPE,
                    )
                except OSError:
                    dump.kill()
                    dump.wait()
                    raise
                finally:
                    # gzip holds its own copy; closing ours lets mysqldump
                    # see SIGPIPE if gzip dies early
                    dump.stdout.close()

                _, gzip_stderr = gzip.communicate()
                dump.wait()

                dump_errors.seek(0)
                dump_stderr = dump_errors.read()
        except OSError as e:
            raise BackupIOError(str(e)) from e

        self._check(dump_command, dump.returncode, dump_stderr)
        self._check(gzip_command, gzip.returncode, gzip_stderr)
        LOGGER.info("Database dump written to %s", out_path)

    def archive_directory(
            self,
            source_dir: str,
            out_path: str,
            excludes: Sequence[str] = (),
            file_list: Optional[List[str]] = None,
    ) -> None:
        """
        Write a gzipped tar of ``source_dir`` to ``out_path``.

        With ``file_list`` only those paths (relative to ``source_dir``)
        are archived; otherwise the whole tree minus ``excludes``.

        Raises:
            BackupError: tar exited non-zero; carries its stderr
            BackupIOError: tar could not be started
        """
        with tempfile.NamedTemporaryFile() as list_file:
            if file_list is not None:
                list_file.write(
                    b"\0".join(os.fsencode(path) for path in file_list)
                )
                list_file.flush()
                command = self._tar_command(out_path, files_from=list_file.name)
            else:
                command = self._tar_command(out_path, excludes=excludes)

            LOGGER.info("Archiving %s to %s", source_dir, out_path)
            LOGGER.debug("Running %s", " ".join(command))
            try:
                result = subprocess.run(
                    command, cwd=source_dir, capture_output=True
                )
            except OSError as e:
                raise BackupIOError(str(e)) from e

        if result.returncode != 0:
            raise BackupError(result.stderr.decode("utf-8", errors="replace"))
        LOGGER.info("File archive written to %s", out_path)

    @staticmethod
    def _check(command: List[str], returncode: int, stderr: bytes) -> None:
        if returncode != 0:
            raise BackupIOError(
                f"Command '{command[0]}' failed with exit status "
                f"{returncode}: {stderr.decode('utf-8', errors='replace').strip()}"
            )

    def _mysqldump_command(self, credentials: Credentials) -> List[str]:
        return [
            self.config.MYSQLDUMP_BIN,
            "-u", credentials.username,
            "--no-tablespaces",
            credentials.database,
        ]

    def _gzip_command(self) -> List[str]:
        return [
            self.config.GZIP_BIN,
            "--stdout",
            f"-{self.gzip_level}",
        ]

    def _tar_command(
            self,
            out_path: str,
            excludes: Sequence[str] = (),
            files_from: Optional[str] = None,
    ) -> List[str]:
        command = [
            self.config.TAR_BIN,
            "--create",
            "--gzip",
            "--preserve-permissions",
            f"--file={out_path}",
        ]
        if files_from is not None:
            command += ["--null", f"--files-from={files_from}"]
        else:
            if excludes:
                command.append("--anchored")
            command += [f"--exclude={pattern}" for pattern in excludes]
            command.append(".")

        return command
