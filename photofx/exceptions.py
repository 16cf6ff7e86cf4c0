"""Exceptions raised by photofx."""


class PhotofxError(Exception):
    """Base class for all photofx errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidParameter(PhotofxError):
    """A matched value cannot be parsed into the argument an effect expects."""

    def __init__(
        self,
        message: str,
        effect: str | None = None,
        value: str | None = None,
    ):
        super().__init__(message)
        self.effect = effect
        self.value = value

    def __str__(self):
        if self.effect is not None:
            return f"Invalid Parameter: {self.message} (Effect: {self.effect}, Value: {self.value!r})"
        return f"Invalid Parameter: {self.message}"


class InvalidImage(PhotofxError):
    """The image resource is missing, released, or empty."""

    def __str__(self):
        return f"Invalid Image: {self.message}"


class ProcessingError(PhotofxError):
    """A pixel transform or compositing step failed.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, effect: str, stage: str | None = None):
        super().__init__(message)
        self.effect = effect
        self.stage = stage

    def __str__(self):
        if self.stage is not None:
            return f"Processing Error: {self.message} (Effect: {self.effect}, Stage: {self.stage})"
        return f"Processing Error: {self.message} (Effect: {self.effect})"
