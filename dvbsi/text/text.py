# Licensed under the GPLv3 - see LICENSE
from astropy.utils import lazyproperty

from ..base.base import BufferView, NotEnoughDataError, DVBSIError
from .encoding import resolve, decode


__all__ = ['Text']


class Text(BufferView):
    """Text field with embedded encoding information.

    The bytes are kept as a view on the section buffer, and only decoded
    into a string when asked for.

    Parameters
    ----------
    data : bytes, `~numpy.ndarray`, or other buffer
        The text field, starting with its selector byte (if any).

    Raises
    ------
    NotEnoughDataError
        If ``data`` is empty.
    """

    def __init__(self, data):
        super().__init__(data)
        if len(self.data) == 0:
            raise NotEnoughDataError(1, 0)

    @lazyproperty
    def encoding(self):
        """Encoding of the text, as resolved from its selector bytes."""
        return resolve(self.data)

    @property
    def selector(self):
        """The raw selector bytes."""
        return self.encoding.selector

    @property
    def payload(self):
        """View of the encoded text following the selector."""
        return self.data[self.encoding.nbytes:]

    def decode(self, errors='strict'):
        """Decode the text into a string.

        Parameters
        ----------
        errors : str, optional
            How to handle invalid bytes: 'strict' (default) to raise
            `~dvbsi.DecodeFailureError`, 'replace' to substitute the
            unicode replacement character.

        Raises
        ------
        UnsupportedEncodingError
            If no decoder is available for the encoding.
        ValueError
            If ``errors`` is not a registered error handler.
        """
        return decode(self.data, errors)

    def to_string(self, errors='replace'):
        """Decode for display.

        Text that cannot be decoded at all is represented by a marker
        describing the problem, so this only raises for an ``errors`` value
        that is not a registered error handler.
        """
        try:
            return self.decode(errors)
        except DVBSIError as exc:
            return '<{0}>'.format(exc)

    __str__ = to_string

    def __repr__(self):
        try:
            text = repr(self.decode('replace'))
        except DVBSIError as exc:
            text = '<{0}>'.format(exc)
        return '<{0} {1}>'.format(self.__class__.__name__, text)
