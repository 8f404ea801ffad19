"""Error taxonomy for avatar generation."""

from __future__ import annotations


class AvatarError(Exception):
    """Base error; ``operation`` names the step that failed."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class ConfigurationError(AvatarError, ValueError):
    pass


class InvalidInputError(AvatarError, ValueError):
    pass


class FontLoadError(AvatarError):
    pass


class AssetNotFoundError(FontLoadError):
    pass


class AssetUnreadableError(FontLoadError):
    pass


class MalformedFontError(FontLoadError):
    pass


class RenderError(AvatarError):
    pass


class EncodeError(AvatarError):
    pass


class OutputWriteError(AvatarError, OSError):
    pass
