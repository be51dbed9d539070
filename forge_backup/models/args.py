import os
from typing import Optional

from .model import Model


class Args(Model):
    def __init__(
            self,
            source_dir: str,
            server: Optional[str],
            target: Optional[str],
            output_root: str,
            exclude_manifest_path: Optional[str],
            skip_database: bool,
            threads: int,
    ):
        self.source_dir = source_dir
        self.server = server
        self.target = target
        self.output_root = output_root
        self.exclude_manifest_path = exclude_manifest_path
        self.skip_database = skip_database
        self.threads = threads

        self.validate()

    def validate(self):
        if not self.source_dir:
            raise ValueError("Source directory is required")

        if not os.path.isdir(self.source_dir):
            raise ValueError(
                f"Source directory '{self.source_dir}' does not exist"
            )

        if not self.output_root:
            raise ValueError("Output root is required")

        if self.exclude_manifest_path and not os.path.exists(
            self.exclude_manifest_path
        ):
            raise ValueError(
                f"Exclude manifest path '{self.exclude_manifest_path}' "
                f"does not exist"
            )

        if self.threads < 1:
            self.threads = os.cpu_count() or 1
