# MiniPixelAnimator/animator/errors.py


class AnimatorError(Exception):
    """Base class for every error raised by the animator core."""


class InvalidIndexError(AnimatorError, IndexError):
    """A frame or sequence index is outside the current bounds, or points at the hidden frame."""

    def __init__(self, index, valid_count: int | None = None, message: str | None = None):
        self.index = index
        self.valid_count = valid_count
        if message is None:
            if valid_count is None:
                message = f"Invalid frame index: {index}"
            else:
                message = f"Invalid frame index: {index} (valid range 0..{valid_count - 1})"
        super().__init__(message)


class InvalidPixelPositionError(AnimatorError, IndexError):
    def __init__(self, position, pixel_count: int = 256):
        self.position = position
        super().__init__(f"Invalid pixel position: {position} (valid range 0..{pixel_count - 1})")


class LastFrameError(AnimatorError):
    def __init__(self, message: str = "Cannot delete the only remaining frame!"):
        super().__init__(message)


class InvalidDurationConfigError(AnimatorError, ValueError):
    """Raised while parsing a frame duration; always recovered by falling back to the default."""

    def __init__(self, raw_value, reason: str):
        self.raw_value = raw_value
        super().__init__(f"Invalid frame duration {raw_value!r}: {reason}")
