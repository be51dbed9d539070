from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credentials:
    """Database name, user and password needed to run the dump utility."""

    database: str
    username: str
    password: str = field(repr=False)
