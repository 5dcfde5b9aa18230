# Licensed under the GPLv3 - see LICENSE
"""
Routing of verified SDT sections to a consumer.

SDT sections describe either the transport stream that carries them
("actual", table id 0x42) or another one ("other", table id 0x46).  The
`SdtProcessor` wraps each section body in an `SdtSection` view, tags it as
`Actual` or `Other`, and passes it on to a consumer.
"""
import warnings

from ..base.base import SdtWarning, as_buffer
from .header import SdtHeader
from .section import SdtSection


__all__ = ['ActualOther', 'Actual', 'Other', 'SdtProcessor']


class ActualOther:
    """Value pertaining to the actual or to some other transport stream.

    Only the `Actual` and `Other` subclasses can be instantiated.  Of the
    ``actual`` and ``other`` attributes, only the one corresponding to the
    subclass holds the value; the other is `None`.

    Parameters
    ----------
    value : object
        The wrapped value, typically an `~dvbsi.sdt.SdtSection`.
    """

    is_actual = None

    def __init__(self, value):
        if self.is_actual is None:
            raise TypeError("use Actual or Other to wrap a value.")
        self.value = value

    @property
    def actual(self):
        """The value if it pertains to the actual transport stream."""
        return self.value if self.is_actual else None

    @property
    def other(self):
        """The value if it pertains to some other transport stream."""
        return None if self.is_actual else self.value

    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value

    def __repr__(self):
        return '{0}({1!r})'.format(self.__class__.__name__, self.value)


class Actual(ActualOther):
    """Value pertaining to the transport stream carrying it."""
    is_actual = True


class Other(ActualOther):
    """Value pertaining to a different transport stream."""
    is_actual = False


class SdtProcessor:
    """Route verified SDT sections to a consumer.

    Parameters
    ----------
    consumer : callable
        Called with an `Actual` or `Other` instance wrapping the
        `~dvbsi.sdt.SdtSection` for each accepted section.
    other : bool, optional
        Whether to pass on sections describing other transport streams.
        If `False`, these are dropped silently.  Default: `True`.
    """

    ACTUAL_TABLE_ID = 0x42
    OTHER_TABLE_ID = 0x46
    HEADER_NBYTES = 8
    """Size of the common header (3 bytes) and table syntax header (5)."""
    CRC_NBYTES = 4

    def __init__(self, consumer, other=True):
        self.consumer = consumer
        self.other = other

    def section(self, table_id, data):
        """Pass on a section body to the consumer.

        Parameters
        ----------
        table_id : int
            Table id of the section.
        data : bytes, `~numpy.ndarray`, or other buffer
            Section body, without headers and CRC.

        Returns
        -------
        result : object
            Whatever the consumer returned, or `None` if the section was
            dropped.

        Warns
        -----
        SdtWarning
            If the table id is not that of an SDT.  The section is dropped
            without being interpreted.
        """
        if table_id == self.ACTUAL_TABLE_ID:
            return self.consumer(Actual(SdtSection(data)))

        if table_id == self.OTHER_TABLE_ID:
            if self.other:
                return self.consumer(Other(SdtSection(data)))
            return None

        message = ("Expected SDT to have table id 0x{0:x}, but got 0x{1:x}"
                   .format(self.ACTUAL_TABLE_ID, table_id))
        data = as_buffer(data)
        if len(data) > SdtHeader.nbytes:
            message += " (original_network_id={0})".format(
                SdtHeader.frombuffer(data)['original_network_id'])
        warnings.warn(message, SdtWarning)
        return None

    def consume(self, data):
        """Pass on a complete, verified section to the consumer.

        The table id is taken from the first byte, and the headers and CRC
        are stripped at their fixed offsets; they are not otherwise
        interpreted.

        Parameters
        ----------
        data : bytes, `~numpy.ndarray`, or other buffer
            The section, from the table id up to and including the CRC.

        Raises
        ------
        ValueError
            If ``data`` is too short to hold the headers and CRC.
        """
        data = as_buffer(data)
        min_nbytes = self.HEADER_NBYTES + self.CRC_NBYTES
        if len(data) < min_nbytes:
            raise ValueError("SDT section should be at least {0} bytes, "
                             "but has {1}.".format(min_nbytes, len(data)))
        return self.section(int(data[0]),
                            data[self.HEADER_NBYTES:-self.CRC_NBYTES])

    __call__ = consume
