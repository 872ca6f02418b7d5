from __future__ import annotations


class ConversionError(RuntimeError):
    """Base class for every failure that aborts a conversion run."""

    kind = "conversion"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class FormatError(ConversionError):
    """The input does not follow the segment/block layout (corrupt or unsupported)."""

    kind = "format"


class IOReadError(ConversionError):
    """A segment could not be fetched from the input stream.

    ``eof`` is set when the stream ran out of bytes before a full segment was
    read, as opposed to the stream itself reporting an error.
    """

    kind = "read"

    def __init__(self, detail: str, *, eof: bool = False) -> None:
        super().__init__(detail)
        self.eof = eof


class IOWriteError(ConversionError):
    kind = "write"


class AllocationError(ConversionError):
    kind = "allocation"
