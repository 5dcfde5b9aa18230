# Licensed under the GPLv3 - see LICENSE
"""
Base definitions for descriptors.

Descriptors are tagged, length-prefixed records found in loops within
sections.  Each consists of a two-byte header, holding the tag and the
length of the payload, followed by the payload.  Descriptor classes hold
just a view of the payload.
"""
import struct

from ..base.base import BufferView
from ..base.header import HeaderParser, SIHeaderBase


__all__ = ['DescriptorHeader', 'DescriptorBase', 'UnknownDescriptor']


class DescriptorHeader(SIHeaderBase):
    """Tag and payload length preceding every descriptor.

    Parameters
    ----------
    words : tuple of int, or None
        Tag and length.  If `None`, set to zeros for later initialisation.
    verify : bool, optional
        Whether to do basic verification of integrity.  Default: `True`.
    """

    _struct = struct.Struct('>BB')

    _header_parser = HeaderParser(
        (('descriptor_tag', (0, 0, 8)),
         ('descriptor_length', (1, 0, 8, 0))))

    _properties = ('descriptor_nbytes',)

    @property
    def descriptor_nbytes(self):
        """Size of header plus payload in bytes."""
        return self.nbytes + self['descriptor_length']

    @descriptor_nbytes.setter
    def descriptor_nbytes(self, descriptor_nbytes):
        self['descriptor_length'] = descriptor_nbytes - self.nbytes


class DescriptorBase(BufferView):
    """Base class for views of descriptor payloads.

    Parameters
    ----------
    tag : int
        The descriptor tag.
    data : bytes, `~numpy.ndarray`, or other buffer
        The descriptor payload, i.e., excluding the tag and length bytes.
    name : str, optional
        Name of the tag.  Default: the name set on the class.
    verify : bool, optional
        Whether to do basic verification of the payload.  Default: `True`.
    """

    _name = None

    def __init__(self, tag, data, *, name=None, verify=True):
        super().__init__(data)
        self.tag = tag
        self.name = self._name if name is None else name
        if verify:
            self.verify()

    def verify(self):
        """Base verification always passes."""
        pass

    @property
    def header(self):
        """Header with tag and length, as it would precede the payload."""
        return DescriptorHeader((self.tag, len(self.data)))

    def __eq__(self, other):
        return super().__eq__(other) and self.tag == other.tag

    def __repr__(self):
        return '<{0} tag=0x{1:02x} ({2}), {3} bytes>'.format(
            self.__class__.__name__, self.tag, self.name, len(self.data))


class UnknownDescriptor(DescriptorBase):
    """Descriptor without a dedicated decoder.

    Gives access to the tag and the raw payload only.
    """

    _name = 'unknown'
