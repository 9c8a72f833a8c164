"""Exceptions raised by alncut."""


class AlncutError(Exception):
    """Base class for all alncut errors."""
    pass


class InvalidCutoffArgument(AlncutError, ValueError):
    """Raised when a frequency argument is neither a positive integer nor a fraction in (0, 1)."""
    pass


class InvalidMoltypeArgument(AlncutError, ValueError):
    """Raised when a molecule type is not one of dna, rna or protein."""
    pass


class AlignmentLengthMismatch(AlncutError, ValueError):
    """Raised when the rows of one alignment record have unequal lengths."""
    pass


class MissingInputFile(FileNotFoundError, AlncutError):
    """Raised when a named input file does not exist."""
    pass


class InputParseError(AlncutError):
    """Raised when alignment data cannot be parsed in the requested format."""
    pass


class AlignmentWriteError(AlncutError):
    """Raised when a filtered alignment cannot be written in the requested format."""
    pass
