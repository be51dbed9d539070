from .consts import PipelineState, SiteType
from .credentials import get_credentials
from .detector import detect_site_type
from .errors import (
    BackupError,
    BackupIOError,
    ConfigError,
    ForgeBackupError,
    MissingDatabaseCredentialsError,
    PipelineOrderError,
    UnknownSiteError,
)
from .grammar import extract_define_var, extract_env_var
from .models.credentials import Credentials
from .pipeline import BackupPipeline
from .process import ProcessPipe

__all__ = [
    "BackupError",
    "BackupIOError",
    "BackupPipeline",
    "ConfigError",
    "Credentials",
    "ForgeBackupError",
    "MissingDatabaseCredentialsError",
    "PipelineOrderError",
    "PipelineState",
    "ProcessPipe",
    "SiteType",
    "UnknownSiteError",
    "detect_site_type",
    "extract_define_var",
    "extract_env_var",
    "get_credentials",
]
