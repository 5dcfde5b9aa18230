# Licensed under the GPLv3 - see LICENSE
"""
Definitions for service records in SDT sections.

Each record consists of a fixed-size `~dvbsi.sdt.header.ServiceHeader`
followed by a loop of descriptors, whose length is given in the header.
Records follow each other without gaps, so the start of each record is
only known after reading the header of the previous one.
"""
from ..base.base import (BufferView, as_buffer, DVBSIError,
                         MalformedSectionError)
from ..descriptors import DescriptorIterator
from .header import ServiceHeader


__all__ = ['Service', 'ServiceIterator']


class Service(BufferView):
    """View of a service record.

    The fixed fields can be accessed as properties or, as encoded, by
    key (e.g., ``service['running_status']``).

    Parameters
    ----------
    data : bytes, `~numpy.ndarray`, or other buffer
        The service record.
    header : `~dvbsi.sdt.header.ServiceHeader`, optional
        Header already read from the start of ``data``.
    verify : bool, optional
        Whether to check that the descriptor loop fits in ``data``.
        Default: `True`.

    Raises
    ------
    NotEnoughDataError
        If ``data`` is too short to hold the header.
    MalformedSectionError
        If ``verify`` is `True` and the descriptor loop extends beyond
        the end of ``data``.
    """

    def __init__(self, data, header=None, verify=True):
        super().__init__(data)
        if header is None:
            header = ServiceHeader.frombuffer(self.data)
        self.header = header
        if verify:
            self.verify()

    def verify(self):
        record_nbytes = self.header.record_nbytes
        if record_nbytes > len(self.data):
            raise MalformedSectionError(
                'descriptor loop', self.header.nbytes,
                self['descriptors_loop_length'],
                len(self.data) - self.header.nbytes)

    def __getitem__(self, item):
        return self.header[item]

    def keys(self):
        return self.header.keys()

    def __contains__(self, key):
        return key in self.header

    @property
    def service_id(self):
        return self['service_id']

    @property
    def eit_schedule_flag(self):
        """Whether EIT schedule information is present in the stream."""
        return self['eit_schedule_flag']

    @property
    def eit_present_following_flag(self):
        """Whether EIT present/following information is present."""
        return self['eit_present_following_flag']

    @property
    def running_status(self):
        """Running status, as a `~dvbsi.sdt.RunningStatus`."""
        return self.header.running_status

    @property
    def free_ca_mode(self):
        """Whether one or more streams are controlled by a CA system."""
        return self['free_ca_mode']

    @property
    def descriptors_loop_length(self):
        return self['descriptors_loop_length']

    def descriptors(self, verify=True):
        """Iterate over the descriptors of the service.

        Parameters
        ----------
        verify : bool, optional
            Passed on to the descriptor decoders.  Default: `True`.

        Returns
        -------
        descriptors : `~dvbsi.descriptors.DescriptorIterator`
            Lazily dispatching each descriptor to the decoder for its tag.
        """
        start = self.header.nbytes
        stop = start + self.descriptors_loop_length
        return DescriptorIterator(self.data[start:stop], verify=verify)

    def __repr__(self):
        name = self.__class__.__name__
        outs = [f"{k}: {self.header._repr_value(k, self[k])}"
                for k in self.keys() if k != 'reserved_future_use']
        try:
            descriptors = repr(list(self.descriptors()))
        except DVBSIError as exc:
            descriptors = '<{0}>'.format(exc)
        outs.append(f"descriptors: {descriptors}")
        return "<{} {}>".format(name, (",\n  " + " "*len(name)).join(outs))


class ServiceIterator:
    """Iterator over the service records in a service loop.

    On each step, reads the header of the next record to determine its size,
    and checks that the record fits in the remaining buffer before
    advancing.  The iterator can only be used once; to iterate again,
    create a new one from the same buffer.

    Parameters
    ----------
    data : bytes, `~numpy.ndarray`, or other buffer
        The service loop, i.e., service records following each other.

    Raises
    ------
    MalformedSectionError
        On advancing to a record that extends beyond the buffer.
    """

    def __init__(self, data):
        self.data = as_buffer(data)
        self.offset = 0

    def __iter__(self):
        return self

    def __next__(self):
        remaining = len(self.data) - self.offset
        if remaining == 0:
            raise StopIteration

        if remaining < ServiceHeader.nbytes:
            raise MalformedSectionError('service record header', self.offset,
                                        ServiceHeader.nbytes, remaining)

        header = ServiceHeader.frombuffer(self.data, self.offset)
        size = header.record_nbytes
        if size > remaining:
            raise MalformedSectionError('service record', self.offset,
                                        size, remaining)

        start = self.offset
        self.offset += size
        return Service(self.data[start:self.offset], header=header,
                       verify=False)
