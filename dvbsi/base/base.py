# Licensed under the GPLv3 - see LICENSE
"""
Base definitions for views on section buffers.

Defines the `BufferView` class on which all table parts are built, which
holds a read-only byte array that shares memory with the buffer it was
created from, as well as the exceptions and warnings raised when decoding.
"""
import numpy as np


__all__ = ['DVBSIError', 'NotEnoughDataError', 'TextError',
           'UnsupportedEncodingError', 'DecodeFailureError',
           'MalformedSectionError', 'SdtWarning',
           'as_buffer', 'BufferView']


class DVBSIError(Exception):
    """Base class for all errors raised while decoding service information."""


class NotEnoughDataError(DVBSIError, EOFError):
    """A field extends beyond the end of the data available for it.

    Parameters
    ----------
    expected : int
        Number of bytes needed to read the field.
    available : int
        Number of bytes actually available.
    """
    def __init__(self, expected, available):
        self.expected = expected
        self.available = available
        super().__init__(expected, available)

    def __str__(self):
        return ("not enough data: expected {0} bytes, but only {1} available"
                .format(self.expected, self.available))


class TextError(DVBSIError):
    """Base class for problems decoding text fields."""


class UnsupportedEncodingError(TextError):
    """The text encoding has no decoder.

    Parameters
    ----------
    encoding : `~dvbsi.text.TextEncoding`
        The encoding resolved from the text selector bytes.
    """
    def __init__(self, encoding):
        self.encoding = encoding
        super().__init__(encoding)

    def __str__(self):
        return "unsupported text encoding {0}".format(self.encoding)


class DecodeFailureError(TextError, UnicodeError):
    """The text bytes are invalid for their encoding."""

    def __init__(self, reason):
        self.reason = reason
        super().__init__(reason)

    def __str__(self):
        return "could not decode text: {0}".format(self.reason)


class MalformedSectionError(DVBSIError, ValueError):
    """A length field points beyond the end of its enclosing buffer.

    Parameters
    ----------
    what : str
        Description of the part that could not be read.
    offset : int
        Byte offset of the part in the enclosing buffer.
    expected : int
        Number of bytes the part claims to occupy.
    available : int
        Number of bytes left in the enclosing buffer.
    """
    def __init__(self, what, offset, expected, available):
        self.what = what
        self.offset = offset
        self.expected = expected
        self.available = available
        super().__init__(what, offset, expected, available)

    def __str__(self):
        return ("malformed section: {0} at offset {1} needs {2} bytes, "
                "but only {3} remain".format(self.what, self.offset,
                                             self.expected, self.available))


class SdtWarning(UserWarning):
    """Warning for sections that are dropped instead of decoded."""


def as_buffer(data):
    """Get a read-only byte array sharing memory with ``data``.

    Parameters
    ----------
    data : bytes, bytearray, memoryview, or `~numpy.ndarray`
        Buffer to view.  Arrays are viewed as bytes; they have to be
        contiguous.

    Returns
    -------
    buffer : `~numpy.ndarray`
        One-dimensional array of unsigned bytes, with its ``WRITEABLE`` flag
        cleared.  No data is copied.
    """
    if isinstance(data, np.ndarray):
        if not data.flags['C_CONTIGUOUS']:
            raise ValueError("can only view contiguous arrays.")
        buffer = data.reshape(-1).view('u1')
    else:
        buffer = np.frombuffer(data, dtype='u1')

    if buffer.flags['WRITEABLE']:
        buffer = buffer.view()
        buffer.flags['WRITEABLE'] = False
    return buffer


class BufferView:
    """Base class for read-only views of part of a section.

    The view holds a byte array that shares memory with the buffer it was
    created from.  Nothing is copied until a value is decoded, so any view
    remains meaningful only as long as the underlying buffer is unchanged.

    Parameters
    ----------
    data : bytes, bytearray, memoryview, or `~numpy.ndarray`
        The bytes covered by the view.
    """

    def __init__(self, data):
        self.data = as_buffer(data)

    @property
    def buffer(self):
        """The underlying byte array."""
        return self.data

    @property
    def nbytes(self):
        """Size of the view in bytes."""
        return len(self.data)

    def __len__(self):
        return len(self.data)

    def tobytes(self):
        """Copy of the bytes covered by the view."""
        return self.data.tobytes()

    def __eq__(self, other):
        return (type(self) is type(other)
                and np.array_equal(self.data, other.data))
