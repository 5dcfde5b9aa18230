# Licensed under the GPLv3 - see LICENSE
"""
Character sets of text fields, and their resolution and decoding.

Text fields in service information start with an optional selector that
tells which character table the remaining bytes are encoded in (ETSI EN 300
468, Annex A).  A first byte in the range 0x20-0xff is not a selector but
already part of the text, encoded in the default table.  Other first bytes
select a table directly, except 0x10, which is followed by two bytes giving
an ISO 8859 part number, and 0x1f, which is followed by an encoding type id
registered elsewhere.
"""
import codecs
import enum
from collections import namedtuple

from ..base.base import (NotEnoughDataError, UnsupportedEncodingError,
                         DecodeFailureError)


__all__ = ['Charset', 'CODECS', 'TextEncoding', 'resolve', 'decode']


class Charset(enum.Enum):
    """Character tables that can be selected by a text field."""

    ISO_8859_1 = 'ISO 8859-1'
    ISO_8859_2 = 'ISO 8859-2'
    ISO_8859_3 = 'ISO 8859-3'
    ISO_8859_4 = 'ISO 8859-4'
    ISO_8859_5 = 'ISO 8859-5'
    ISO_8859_6 = 'ISO 8859-6'
    ISO_8859_7 = 'ISO 8859-7'
    ISO_8859_8 = 'ISO 8859-8'
    ISO_8859_9 = 'ISO 8859-9'
    ISO_8859_10 = 'ISO 8859-10'
    ISO_8859_11 = 'ISO 8859-11'
    ISO_8859_13 = 'ISO 8859-13'
    ISO_8859_14 = 'ISO 8859-14'
    ISO_8859_15 = 'ISO 8859-15'
    ISO_10646 = 'ISO/IEC 10646'
    KSX1001_2004 = 'KS X 1001-2004'
    GB2312_1980 = 'GB-2312-1980'
    BIG5 = 'Big5 subset of ISO/IEC 10646'
    UTF_8 = 'UTF-8'
    RESERVED_1 = 'reserved (single byte selector)'
    RESERVED_2 = 'reserved (three byte selector)'
    ENCODING_TYPE_ID = 'encoding type id'

    @property
    def codec(self):
        """Name of the Python codec for the table, or `None` if unsupported."""
        return CODECS.get(self)

    @property
    def reserved(self):
        return self in (Charset.RESERVED_1, Charset.RESERVED_2)


CODECS = {
    Charset.ISO_8859_1: 'iso8859_1',
    Charset.ISO_8859_2: 'iso8859_2',
    Charset.ISO_8859_3: 'iso8859_3',
    Charset.ISO_8859_4: 'iso8859_4',
    Charset.ISO_8859_5: 'iso8859_5',
    Charset.ISO_8859_6: 'iso8859_6',
    Charset.ISO_8859_7: 'iso8859_7',
    Charset.ISO_8859_8: 'iso8859_8',
    Charset.ISO_8859_9: 'iso8859_9',
    Charset.ISO_8859_10: 'iso8859_10',
    Charset.ISO_8859_11: 'iso8859_11',
    Charset.ISO_8859_13: 'iso8859_13',
    Charset.ISO_8859_14: 'iso8859_14',
    Charset.ISO_8859_15: 'iso8859_15',
    # Basic multilingual plane, two bytes per character.
    Charset.ISO_10646: 'utf_16_be',
    Charset.KSX1001_2004: 'euc_kr',
    Charset.GB2312_1980: 'gb2312',
    Charset.BIG5: 'big5',
    Charset.UTF_8: 'utf_8',
}
"""Python codecs for the supported character tables."""

# Tables selected by a single byte, indexed by that byte.
_SINGLE_BYTE_SELECTORS = {
    0x01: Charset.ISO_8859_5,
    0x02: Charset.ISO_8859_6,
    0x03: Charset.ISO_8859_7,
    0x04: Charset.ISO_8859_8,
    0x05: Charset.ISO_8859_9,
    0x06: Charset.ISO_8859_10,
    0x07: Charset.ISO_8859_11,
    0x09: Charset.ISO_8859_13,
    0x0a: Charset.ISO_8859_14,
    0x0b: Charset.ISO_8859_15,
    0x11: Charset.ISO_10646,
    0x12: Charset.KSX1001_2004,
    0x13: Charset.GB2312_1980,
    0x14: Charset.BIG5,
    0x15: Charset.UTF_8,
}

# ISO 8859 parts selected by 0x10, indexed by the 16-bit code following it.
# Part 12 was never published, so 0x000c is reserved.
_ISO_8859_PARTS = {
    0x0001: Charset.ISO_8859_1,
    0x0002: Charset.ISO_8859_2,
    0x0003: Charset.ISO_8859_3,
    0x0004: Charset.ISO_8859_4,
    0x0005: Charset.ISO_8859_5,
    0x0006: Charset.ISO_8859_6,
    0x0007: Charset.ISO_8859_7,
    0x0008: Charset.ISO_8859_8,
    0x0009: Charset.ISO_8859_9,
    0x000a: Charset.ISO_8859_10,
    0x000b: Charset.ISO_8859_11,
    0x000d: Charset.ISO_8859_13,
    0x000e: Charset.ISO_8859_14,
    0x000f: Charset.ISO_8859_15,
}

MULTI_BYTE_SELECTOR = 0x10
ENCODING_TYPE_ID_SELECTOR = 0x1f


class TextEncoding(namedtuple('TextEncoding', ['charset', 'selector'])):
    """Encoding of a text field, as resolved from its first bytes.

    Parameters
    ----------
    charset : `~dvbsi.text.Charset`
        The character table used for the text.
    selector : bytes
        The raw selector bytes preceding the text.  Empty if the text uses
        the default table without a selector.
    """
    __slots__ = ()

    @property
    def nbytes(self):
        """Number of bytes taken by the selector."""
        return len(self.selector)

    @property
    def codec(self):
        return self.charset.codec

    def __str__(self):
        if not self.selector:
            return self.charset.value
        return "{0} (selector 0x{1})".format(self.charset.value,
                                              self.selector.hex())


def resolve(data):
    """Determine the encoding of a text field from its selector.

    Only the selector bytes are inspected; the text itself is not.

    Parameters
    ----------
    data : bytes, `~numpy.ndarray`, or other sequence of bytes
        The text field, starting with its selector byte (if any).

    Returns
    -------
    encoding : `~dvbsi.text.TextEncoding`
        With the character table and the raw selector bytes.  Reserved
        selectors are resolved to `Charset.RESERVED_1` or
        `Charset.RESERVED_2`, keeping their bytes for diagnostics.

    Raises
    ------
    NotEnoughDataError
        If the field is empty, or a multi-byte selector is truncated.
    """
    head = bytes(data[:3])
    if not head:
        raise NotEnoughDataError(1, 0)

    first = head[0]
    if first >= 0x20:
        return TextEncoding(Charset.ISO_8859_1, b'')

    if first == MULTI_BYTE_SELECTOR:
        if len(head) < 3:
            raise NotEnoughDataError(3, len(head))
        charset = _ISO_8859_PARTS.get(int.from_bytes(head[1:3], 'big'),
                                      Charset.RESERVED_2)
        return TextEncoding(charset, head)

    if first == ENCODING_TYPE_ID_SELECTOR:
        if len(head) < 2:
            raise NotEnoughDataError(2, len(head))
        return TextEncoding(Charset.ENCODING_TYPE_ID, head[:2])

    # Everything else, including 0x00, which should never start a field,
    # is a single-byte selector.
    return TextEncoding(_SINGLE_BYTE_SELECTORS.get(first, Charset.RESERVED_1),
                        head[:1])


def decode(data, errors='strict'):
    """Decode a text field into a string.

    Parameters
    ----------
    data : bytes, `~numpy.ndarray`, or other sequence of bytes
        The text field, starting with its selector byte (if any).
    errors : str, optional
        How to handle bytes that are invalid in the resolved encoding.
        With 'strict' (default), raise `~dvbsi.DecodeFailureError`; with
        'replace', substitute the unicode replacement character.  Other
        error handlers registered with `codecs` are passed on.

    Returns
    -------
    text : str

    Raises
    ------
    UnsupportedEncodingError
        If the selector is reserved or refers to an encoding type id.
    DecodeFailureError
        If ``errors='strict'`` and the text is invalid for its encoding.
    NotEnoughDataError
        If the field is empty, or a multi-byte selector is truncated.
    ValueError
        If ``errors`` is not the name of a registered error handler.
    """
    try:
        codecs.lookup_error(errors)
    except LookupError as exc:
        raise ValueError("unknown error handler {0!r}".format(errors)) from exc

    encoding = resolve(data)
    if encoding.codec is None:
        raise UnsupportedEncodingError(encoding)

    payload = bytes(data[encoding.nbytes:])
    try:
        return payload.decode(encoding.codec, errors)
    except UnicodeDecodeError as exc:
        raise DecodeFailureError(str(exc)) from exc
