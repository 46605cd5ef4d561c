"""Connection pool protocol.

Anything that keeps pooled database connections built with a credential.
"""

from typing import Protocol


class ConnectionPoolProtocol(Protocol):
    """Pool that can be invalidated after a credential rotation."""

    async def invalidate_pool(self) -> None:
        """Drop pooled connections.

        Idle connections are closed right away. Connections checked out by
        in-flight work finish normally and are discarded on release. The next
        connection is built with the current credential.
        """
        ...
