# Licensed under the GPLv3 - see LICENSE
"""
Definitions for Service Description Table sections.

An `SdtSection` is a view of the body of a section, i.e., without the
common and table syntax headers and without the trailing CRC, which are
dealt with by the layer assembling and verifying sections.
"""
from astropy.utils import lazyproperty

from ..base.base import BufferView, DVBSIError
from .header import SdtHeader
from .service import ServiceIterator


__all__ = ['SdtSection']


class SdtSection(BufferView):
    """View of the body of a verified SDT section.

    Parameters
    ----------
    data : bytes, `~numpy.ndarray`, or other buffer
        The section body.  It is not copied, so the view is meaningful only
        as long as the buffer is unchanged.

    Raises
    ------
    ValueError
        If ``data`` is not longer than the 3-byte fixed part, which violates
        the guarantees of the layer delivering sections.
    """

    def __init__(self, data):
        super().__init__(data)
        if len(self.data) <= SdtHeader.nbytes:
            raise ValueError("SDT section body should be longer than {0} "
                             "bytes, but has {1}."
                             .format(SdtHeader.nbytes, len(self.data)))

    @lazyproperty
    def header(self):
        """Fixed part of the section body preceding the service loop."""
        return SdtHeader.frombuffer(self.data)

    @property
    def original_network_id(self):
        return self.header['original_network_id']

    def services(self):
        """Iterate over the service records in the section.

        Returns
        -------
        services : `~dvbsi.sdt.ServiceIterator`
            Yielding `~dvbsi.sdt.Service` views.  Raises
            `~dvbsi.MalformedSectionError` on reaching a record that
            extends beyond the section.
        """
        return ServiceIterator(self.data[self.header.nbytes:])

    __iter__ = services

    def __repr__(self):
        name = self.__class__.__name__
        try:
            services = repr(list(self.services()))
        except DVBSIError as exc:
            services = '<{0}>'.format(exc)
        return "<{} original_network_id: {},\n  {}services: {}>".format(
            name, self.original_network_id, " "*len(name), services)
