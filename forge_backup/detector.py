"""
Site type detection.

Each fingerprint is a conjunction of groups of paths relative to the site
root; a group is satisfied when any one of its paths exists. Fingerprints
overlap (Drupal and Magento both need ``index.php``), so they are evaluated
in a fixed order and the first match wins.
"""

import logging
import os
from typing import List, Sequence, Tuple

from .consts import SiteType
from .errors import UnknownSiteError

LOGGER = logging.getLogger(__name__)


class Fingerprint:
    def __init__(self, site_type: SiteType, *groups: Sequence[str]):
        self.site_type = site_type
        self.groups: Tuple[Tuple[str, ...], ...] = tuple(
            (group,) if isinstance(group, str) else tuple(group)
            for group in groups
        )

    def matches(self, folder: str) -> bool:
        return all(
            any(os.path.exists(os.path.join(folder, path)) for path in group)
            for group in self.groups
        )

    def __repr__(self):
        return f"Fingerprint({self.site_type.value}, {self.groups})"


FINGERPRINTS: List[Fingerprint] = [
    Fingerprint(
        SiteType.LARAVEL, "artisan", "composer.json", "config/app.php"
    ),
    Fingerprint(
        SiteType.WORDPRESS, "wp-config.php", "wp-load.php", "wp-content"
    ),
    Fingerprint(SiteType.RAILS, "config.ru", "Gemfile", "bin/rails"),
    Fingerprint(
        SiteType.DJANGO, "manage.py", ("requirements.txt", "Pipfile")
    ),
    Fingerprint(SiteType.EXPRESS, ("app.js", "server.js"), "package.json"),
    Fingerprint(SiteType.FLASK, ("app.py", "main.py"), "requirements.txt"),
    Fingerprint(
        SiteType.DRUPAL,
        "index.php",
        "core/includes/bootstrap.inc",
        "sites/default/settings.php",
    ),
    Fingerprint(
        SiteType.MAGENTO, "index.php", "app/etc/env.php", "app/Mage.php"
    ),
]


def detect_site_type(folder: str) -> SiteType:
    if not os.path.isdir(folder):
        LOGGER.warning("Not a directory: %s", folder)
        raise UnknownSiteError()

    for fingerprint in FINGERPRINTS:
        if fingerprint.matches(folder):
            LOGGER.info(
                "Detected %s site in %s", fingerprint.site_type.value, folder
            )
            return fingerprint.site_type

    LOGGER.warning("No known site fingerprint matched %s", folder)
    raise UnknownSiteError()
