"""Errors raised while building a site."""

from pathlib import Path


class BuildError(Exception):
    """Fatal build failure tied to a filesystem path.

    The run is aborted; pages written so far must not be deployed.
    """

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{message}: {path}")
