# Licensed under the GPLv3 - see LICENSE
"""
Definitions for the service descriptor.

The service descriptor gives the type of a service and the names of the
service and its provider (ETSI EN 300 468, section 6.2.33)::

    service_type                   8 bits
    service_provider_name_length   8 bits
    service_provider_name          service_provider_name_length bytes
    service_name_length            8 bits
    service_name                   service_name_length bytes
"""
import enum

from ..base.base import DVBSIError, NotEnoughDataError
from ..text import Text
from .base import DescriptorBase


__all__ = ['ServiceType', 'ServiceDescriptor']


class ServiceType(enum.IntEnum):
    """Type of a service.

    Any value without a name of its own maps to a pseudo-member named
    ``RESERVED`` or, for 0x80-0xfe, ``USER_DEFINED``, which keeps the
    value itself.
    """

    DIGITAL_TELEVISION = 0x01
    DIGITAL_RADIO_SOUND = 0x02
    TELETEXT = 0x03
    NVOD_REFERENCE = 0x04
    NVOD_TIME_SHIFTED = 0x05
    MOSAIC = 0x06
    FM_RADIO = 0x07
    DVB_SRM = 0x08
    ADVANCED_CODEC_DIGITAL_RADIO_SOUND = 0x0a
    H264_AVC_MOSAIC = 0x0b
    DATA_BROADCAST = 0x0c
    RCS_MAP = 0x0e
    RCS_FLS = 0x0f
    DVB_MHP = 0x10
    MPEG2_HD_DIGITAL_TELEVISION = 0x11
    H264_AVC_SD_DIGITAL_TELEVISION = 0x16
    H264_AVC_SD_NVOD_TIME_SHIFTED = 0x17
    H264_AVC_SD_NVOD_REFERENCE = 0x18
    H264_AVC_HD_DIGITAL_TELEVISION = 0x19
    H264_AVC_HD_NVOD_TIME_SHIFTED = 0x1a
    H264_AVC_HD_NVOD_REFERENCE = 0x1b
    H264_AVC_FRAME_COMPATIBLE_PLANO_STEREOSCOPIC_HD_DIGITAL_TELEVISION = 0x1c
    H264_AVC_FRAME_COMPATIBLE_PLANO_STEREOSCOPIC_HD_NVOD_TIME_SHIFTED = 0x1d
    H264_AVC_FRAME_COMPATIBLE_PLANO_STEREOSCOPIC_HD_NVOD_REFERENCE = 0x1e
    HEVC_DIGITAL_TELEVISION = 0x1f

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, int) or not 0 <= value <= 0xff:
            return None
        member = int.__new__(cls, value)
        member._name_ = ('USER_DEFINED' if 0x80 <= value <= 0xfe
                         else 'RESERVED')
        member._value_ = value
        return member

    @property
    def reserved(self):
        return self.name == 'RESERVED'

    @property
    def user_defined(self):
        return self.name == 'USER_DEFINED'


class ServiceDescriptor(DescriptorBase):
    """Service descriptor, giving service type and names.

    The names are returned as `~dvbsi.text.Text` views, which are decoded
    only when asked for.

    Parameters
    ----------
    tag : int
        Descriptor tag.  Must be ``ServiceDescriptor.TAG`` (0x48).
    data : bytes, `~numpy.ndarray`, or other buffer
        The descriptor payload.
    name : str, optional
        Name of the tag.  Default: 'service'.
    verify : bool, optional
        Whether to check that the payload holds at least the service type
        and provider name length.  Default: `True`.

    Raises
    ------
    ValueError
        If ``tag`` is not that of a service descriptor.
    NotEnoughDataError
        If ``verify`` is `True` and the payload is too short.
    """

    TAG = 0x48
    _name = 'service'

    def __init__(self, tag, data, *, name=None, verify=True):
        if tag != self.TAG:
            raise ValueError("service descriptor should have tag 0x{0:02x}, "
                             "not 0x{1:02x}".format(self.TAG, tag))
        super().__init__(tag, data, name=name, verify=verify)

    def verify(self):
        if len(self.data) < 2:
            raise NotEnoughDataError(2, len(self.data))

    def _byte(self, offset):
        if offset >= len(self.data):
            raise NotEnoughDataError(offset + 1, len(self.data))
        return int(self.data[offset])

    def _text(self, length_offset):
        # Text field preceded by a one-byte length.
        start = length_offset + 1
        end = start + self._byte(length_offset)
        if end > len(self.data):
            raise NotEnoughDataError(end, len(self.data))
        return Text(self.data[start:end])

    def service_type(self):
        """Type of the service, as a `ServiceType`."""
        return ServiceType(self._byte(0))

    def service_provider_name(self):
        """Name of the service provider, as a `~dvbsi.text.Text` view.

        Raises
        ------
        NotEnoughDataError
            If the name extends beyond the payload, or is empty.
        """
        return self._text(1)

    def service_name(self):
        """Name of the service, as a `~dvbsi.text.Text` view.

        Raises
        ------
        NotEnoughDataError
            If the name extends beyond the payload, or is empty.
        """
        return self._text(2 + self._byte(1))

    def __repr__(self):
        outs = []
        for key, getter in (('service_type', self.service_type),
                            ('service_provider_name',
                             self.service_provider_name),
                            ('service_name', self.service_name)):
            try:
                value = repr(getter())
            except DVBSIError as exc:
                value = '<{0}>'.format(exc)
            outs.append('{0}: {1}'.format(key, value))
        name = self.__class__.__name__
        return "<{} {}>".format(name, (",\n  " + " "*len(name)).join(outs))
