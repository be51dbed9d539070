import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, Optional, Type

from .consts import SiteType
from .errors import MissingDatabaseCredentialsError
from .grammar import extract_define_var, extract_env_var
from .models.credentials import Credentials

LOGGER = logging.getLogger(__name__)


class CredentialExtractor(ABC):
    def __init__(self, site_type: SiteType, folder: str):
        self.site_type = site_type
        self.folder = folder

    @abstractmethod
    def extract(self) -> Credentials:
        pass


class ConfigFileCredentials(CredentialExtractor):
    """
    Reads one configuration file and pulls the three database fields out
    of it with a single grammar. Subclasses name the file, the grammar
    and the keys.
    """

    config_file: str
    database_key: str
    username_key: str
    password_key: str

    @staticmethod
    @abstractmethod
    def grammar(contents: str, var_name: str) -> Optional[str]:
        pass

    def extract(self) -> Credentials:
        path = os.path.join(self.folder, self.config_file)
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                contents = f.read()
        except OSError as e:
            LOGGER.warning("Unable to read %s: %s", path, e)
            raise MissingDatabaseCredentialsError() from e

        fields = {
            self.database_key: self.grammar(contents, self.database_key),
            self.username_key: self.grammar(contents, self.username_key),
            self.password_key: self.grammar(contents, self.password_key),
        }
        missing = [key for key, value in fields.items() if value is None]
        if missing:
            LOGGER.warning(
                "Missing %s in %s", ", ".join(missing), path
            )
            raise MissingDatabaseCredentialsError()

        return Credentials(
            database=fields[self.database_key],
            username=fields[self.username_key],
            password=fields[self.password_key],
        )


class LaravelCredentials(ConfigFileCredentials):
    config_file = ".env"
    database_key = "DB_DATABASE"
    username_key = "DB_USERNAME"
    password_key = "DB_PASSWORD"
    grammar = staticmethod(extract_env_var)


class WordpressCredentials(ConfigFileCredentials):
    config_file = "wp-config.php"
    database_key = "DB_NAME"
    username_key = "DB_USER"
    password_key = "DB_PASSWORD"
    grammar = staticmethod(extract_define_var)


class UnsupportedCredentials(CredentialExtractor):
    def extract(self) -> Credentials:
        LOGGER.warning(
            "Reading database credentials is not supported for %s sites",
            self.site_type.value
        )
        raise MissingDatabaseCredentialsError()


class CredentialsFactory:
    extractors: Dict[SiteType, Type[CredentialExtractor]] = {}

    @classmethod
    def register_extractor(
            cls,
            site_type: SiteType,
            extractor_cls: Type[CredentialExtractor]
    ) -> None:
        cls.extractors[site_type] = extractor_cls

    @classmethod
    def create_extractor(
            cls, site_type: SiteType, folder: str
    ) -> CredentialExtractor:
        if not (extractor := cls.extractors.get(site_type, None)):
            raise ValueError(f"Unrecognized site type: '{site_type}'")

        return extractor(site_type, folder)


def get_credentials(folder: str, site_type: SiteType) -> Credentials:
    return CredentialsFactory.create_extractor(site_type, folder).extract()


CredentialsFactory.register_extractor(SiteType.LARAVEL, LaravelCredentials)
CredentialsFactory.register_extractor(
    SiteType.WORDPRESS, WordpressCredentials
)
for _unsupported in (
        SiteType.DJANGO,
        SiteType.RAILS,
        SiteType.EXPRESS,
        SiteType.FLASK,
        SiteType.DRUPAL,
        SiteType.MAGENTO,
):
    CredentialsFactory.register_extractor(
        _unsupported, UnsupportedCredentials
    )
