"""Exceptions raised by dataset operations."""


class MrrdError(Exception):
    """Base class of all errors raised by mrrd."""


class OpenFailedError(MrrdError, OSError):
    """The container file could not be opened for writing."""


class DatasetClosedError(MrrdError):
    """The dataset handle was used after it was closed."""


class NotFoundError(MrrdError, KeyError):
    """A named entry does not exist in the dataset."""

    def __str__(self) -> str:
        """Show the message without the quotes added by KeyError."""
        return str(self.args[0]) if self.args else ''


class OutOfRangeError(MrrdError, IndexError):
    """An index exceeds the number of stored entries."""


class TypeMismatchError(MrrdError, ValueError):
    """The element type disagrees with the expected or stored element type."""


class SchemaMismatchError(MrrdError, ValueError):
    """Inner shape or element type of an array disagrees with the stored array stack."""


class ShapeMismatchError(MrrdError, ValueError):
    """A payload length disagrees with the length implied by its shape or header."""


class InvalidAcquisitionError(MrrdError, ValueError):
    """The acquisition header is inconsistent, e.g. more active than available channels."""


class TransformAllocFailedError(MrrdError, MemoryError):
    """Memory for the Fourier transform could not be obtained."""


class WriteFailedError(MrrdError, OSError):
    """The storage layer reported an error while writing."""
