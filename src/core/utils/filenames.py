"""Generation of collision-resistant storage filenames.

A generated name combines a formatted timestamp, a random integer and the
original file extension, so concurrent uploads need no coordination to
avoid collisions.
"""

from collections.abc import Callable
from datetime import datetime
from pathlib import PurePath
import secrets

from core.utils.settings import UploadSettings


class FilenameGenerator:
    """Builds storage names according to `UploadSettings`."""

    def __init__(
        self,
        settings: UploadSettings | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        randbelow: Callable[[int], int] = secrets.randbelow,
    ) -> None:
        self._settings = settings or UploadSettings()
        self._clock = clock or (lambda: datetime.now(self._settings.zone))
        self._randbelow = randbelow

    def original_name(self, original_filename: str | None) -> str:
        """Return the client filename, or the configured fallback when unknown."""
        if original_filename and PurePath(original_filename).name:
            return PurePath(original_filename).name
        return self._settings.unknown_filename

    @staticmethod
    def extension(original_filename: str | None) -> str:
        """File extension of the original name, including the dot; may be empty."""
        if not original_filename:
            return ""
        return PurePath(original_filename).suffix

    def generate(self, original_filename: str | None) -> str:
        timestamp = self._clock().astimezone(self._settings.zone)
        return self._settings.filename_format.format(
            timestamp=timestamp.strftime(self._settings.timestamp_format),
            random=self._randbelow(self._settings.max_random),
            extension=self.extension(original_filename),
        )
