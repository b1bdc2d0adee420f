"""Connection configuration domain entity."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ConnectionConfig:
    """Resolved Redis connection parameters.

    Compared by value: two configs with equal fields address the same store,
    whether they came from a URL or from discrete credential fields.

    Attributes:
        host: Redis host name
        port: Redis port
        username: ACL user name, if any
        password: Password, if any
        tls: Connect over TLS without certificate verification
        db: Logical database index
    """

    host: str
    port: int = 6379
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    tls: bool = False
    db: int = 0
