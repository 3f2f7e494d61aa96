"""
Exceptions raised while decoding DCD trajectory files.
"""


class DCDError(Exception):
    """Base class for DCD trajectory errors."""


class DCDFormatError(DCDError, ValueError):
    """The file is not a valid (or supported) DCD trajectory."""
