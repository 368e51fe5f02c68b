"""Local refresher for running without an auth backend."""


class LocalRefresher:
    """Answers every renewal with a fixed result."""

    def __init__(self, succeed: bool = True) -> None:
        """Initialize the local refresher.

        Args:
            succeed: Result returned by every refresh call.
        """
        self.succeed = succeed
        self.calls = 0

    async def refresh(self) -> bool:
        self.calls += 1
        return self.succeed
