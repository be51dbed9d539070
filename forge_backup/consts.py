from enum import Enum


class SiteType(str, Enum):
    LARAVEL = "laravel"
    WORDPRESS = "wordpress"
    DJANGO = "django"
    RAILS = "rails"
    EXPRESS = "express"
    FLASK = "flask"
    DRUPAL = "drupal"
    MAGENTO = "magento"


class PipelineState(str, Enum):
    INITIALIZED = "initialized"
    DETECTED = "detected"
    CREDENTIALS_ACQUIRED = "credentials_acquired"
    DATABASE_BACKED_UP = "database_backed_up"
    FILES_BACKED_UP = "files_backed_up"


BACKUP_DIR = "forge_backup"
DATABASE_ARCHIVE = "backup.sql.gz"
FILES_ARCHIVE = "backup.files.tar.gz"
METADATA_FILE = "backup.meta.json"

PASSWORD_ENV_VAR = "MYSQL_PWD"
