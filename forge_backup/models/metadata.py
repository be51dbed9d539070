from typing import List, Optional

from .model import Model


class Metadata(Model):
    def __init__(
            self,
            site_type: str,
            source_dir: str,
            server: Optional[str],
            target: Optional[str],
            archives: List[str],
            created_at: str,
    ):
        self.site_type = site_type
        self.source_dir = source_dir
        self.server = server
        self.target = target
        self.archives = archives
        self.created_at = created_at
