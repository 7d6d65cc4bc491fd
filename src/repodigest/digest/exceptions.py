"""Exceptions raised by the digest engine."""


class DigestError(Exception):
    """Base exception for digest scan failures."""


class UnreadableContentError(DigestError):
    """Raised when a selected file's content cannot be read.

    The whole scan fails; the digest never silently drops a file it has
    already decided to include.
    """

    def __init__(self, relative_path: str, reason: str) -> None:
        self.relative_path = relative_path
        self.reason = reason
        super().__init__(f"Cannot read {relative_path}: {reason}")
