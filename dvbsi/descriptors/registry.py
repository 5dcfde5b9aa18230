# Licensed under the GPLv3 - see LICENSE
"""
Dispatch of descriptors to decoders by tag.

The tag space is fixed by the standards: 0x00-0x3f by ISO/IEC 13818-1 and
0x40-0x7f by ETSI EN 300 468, with 0x80-0xfe user defined.  Every tag is
listed in ``DESCRIPTOR_TAGS`` with its name and decoder class; tags
without a dedicated decoder use `~dvbsi.descriptors.UnknownDescriptor`.
"""
from ..base.base import as_buffer, MalformedSectionError
from .base import DescriptorHeader, UnknownDescriptor
from .service import ServiceDescriptor


__all__ = ['DESCRIPTOR_TAGS', 'DESCRIPTOR_CLASSES', 'tag_name',
           'dispatch', 'DescriptorIterator']


DESCRIPTOR_TAGS = (
    # ISO/IEC 13818-1
    ('reserved', (0, 1, range(36, 64)), UnknownDescriptor),
    ('video_stream', 2, UnknownDescriptor),
    ('audio_stream', 3, UnknownDescriptor),
    ('hierarchy', 4, UnknownDescriptor),
    ('registration', 5, UnknownDescriptor),
    ('data_stream_alignment', 6, UnknownDescriptor),
    ('target_background_grid', 7, UnknownDescriptor),
    ('video_window', 8, UnknownDescriptor),
    ('CA', 9, UnknownDescriptor),
    ('ISO_639_language', 10, UnknownDescriptor),
    ('system_clock', 11, UnknownDescriptor),
    ('multiplex_buffer_utilization', 12, UnknownDescriptor),
    ('copyright', 13, UnknownDescriptor),
    ('maximum_bitrate', 14, UnknownDescriptor),
    ('private_data_indicator', 15, UnknownDescriptor),
    ('smoothing_buffer', 16, UnknownDescriptor),
    ('STD', 17, UnknownDescriptor),
    ('IBP', 18, UnknownDescriptor),
    ('ISO_IEC_13818_6', range(19, 27), UnknownDescriptor),
    ('MPEG4_video', 27, UnknownDescriptor),
    ('MPEG4_audio', 28, UnknownDescriptor),
    ('IOD', 29, UnknownDescriptor),
    ('SL', 30, UnknownDescriptor),
    ('FMC', 31, UnknownDescriptor),
    ('external_ES_ID', 32, UnknownDescriptor),
    ('MuxCode', 33, UnknownDescriptor),
    ('FmxBufferSize', 34, UnknownDescriptor),
    ('multiplex_buffer', 35, UnknownDescriptor),
    # ETSI EN 300 468
    ('network_name', 0x40, UnknownDescriptor),
    ('service_list', 0x41, UnknownDescriptor),
    ('stuffing', 0x42, UnknownDescriptor),
    ('satellite_delivery_system', 0x43, UnknownDescriptor),
    ('cable_delivery_system', 0x44, UnknownDescriptor),
    ('VBI_data', 0x45, UnknownDescriptor),
    ('VBI_teletext', 0x46, UnknownDescriptor),
    ('bouquet_name', 0x47, UnknownDescriptor),
    ('service', ServiceDescriptor.TAG, ServiceDescriptor),
    ('country_availability', 0x49, UnknownDescriptor),
    ('linkage', 0x4a, UnknownDescriptor),
    ('NVOD_reference', 0x4b, UnknownDescriptor),
    ('time_shifted_service', 0x4c, UnknownDescriptor),
    ('short_event', 0x4d, UnknownDescriptor),
    ('extended_event', 0x4e, UnknownDescriptor),
    ('time_shifted_event', 0x4f, UnknownDescriptor),
    ('component', 0x50, UnknownDescriptor),
    ('mosaic', 0x51, UnknownDescriptor),
    ('stream_identifier', 0x52, UnknownDescriptor),
    ('CA_identifier', 0x53, UnknownDescriptor),
    ('content', 0x54, UnknownDescriptor),
    ('parental_rating', 0x55, UnknownDescriptor),
    ('teletext', 0x56, UnknownDescriptor),
    ('telephone', 0x57, UnknownDescriptor),
    ('local_time_offset', 0x58, UnknownDescriptor),
    ('subtitling', 0x59, UnknownDescriptor),
    ('terrestrial_delivery_system', 0x5a, UnknownDescriptor),
    ('multilingual_network_name', 0x5b, UnknownDescriptor),
    ('multilingual_bouquet_name', 0x5c, UnknownDescriptor),
    ('multilingual_service_name', 0x5d, UnknownDescriptor),
    ('multilingual_component', 0x5e, UnknownDescriptor),
    ('private_data_specifier', 0x5f, UnknownDescriptor),
    ('service_move', 0x60, UnknownDescriptor),
    ('short_smoothing_buffer', 0x61, UnknownDescriptor),
    ('frequency_list', 0x62, UnknownDescriptor),
    ('partial_transport_stream', 0x63, UnknownDescriptor),
    ('data_broadcast', 0x64, UnknownDescriptor),
    ('scrambling', 0x65, UnknownDescriptor),
    ('data_broadcast_id', 0x66, UnknownDescriptor),
    ('transport_stream', 0x67, UnknownDescriptor),
    ('DSNG', 0x68, UnknownDescriptor),
    ('PDC', 0x69, UnknownDescriptor),
    ('AC3', 0x6a, UnknownDescriptor),
    ('ancillary_data', 0x6b, UnknownDescriptor),
    ('cell_list', 0x6c, UnknownDescriptor),
    ('cell_frequency_link', 0x6d, UnknownDescriptor),
    ('announcement_support', 0x6e, UnknownDescriptor),
    ('application_signalling', 0x6f, UnknownDescriptor),
    ('adaptation_field_data', 0x70, UnknownDescriptor),
    ('service_identifier', 0x71, UnknownDescriptor),
    ('service_availability', 0x72, UnknownDescriptor),
    ('default_authority', 0x73, UnknownDescriptor),
    ('related_content', 0x74, UnknownDescriptor),
    ('TVA_id', 0x75, UnknownDescriptor),
    ('content_identifier', 0x76, UnknownDescriptor),
    ('time_slice_fec_identifier', 0x77, UnknownDescriptor),
    ('ECM_repetition_rate', 0x78, UnknownDescriptor),
    ('S2_satellite_delivery_system', 0x79, UnknownDescriptor),
    ('enhanced_AC3', 0x7a, UnknownDescriptor),
    ('DTS', 0x7b, UnknownDescriptor),
    ('AAC', 0x7c, UnknownDescriptor),
    ('XAIT_location', 0x7d, UnknownDescriptor),
    ('FTA_content_management', 0x7e, UnknownDescriptor),
    ('extension', 0x7f, UnknownDescriptor),
    ('user_defined', range(0x80, 0xff), UnknownDescriptor),
    ('forbidden', 0xff, UnknownDescriptor),
)
"""Names and decoder classes of all descriptor tags.

Each entry holds a name, the tag or tags it covers (an int, range, or
tuple of those), and the class used to decode the payload.
"""


def _expand(tags):
    if isinstance(tags, int):
        return (tags,)
    if isinstance(tags, range):
        return tags
    return tuple(tag for part in tags for tag in _expand(part))


def _build_lookup(definitions):
    lookup = [None] * 256
    for name, tags, cls in definitions:
        for tag in _expand(tags):
            assert lookup[tag] is None, "tag {0} defined twice".format(tag)
            lookup[tag] = (name, cls)
    assert None not in lookup, "not all tags defined"
    return tuple(lookup)


DESCRIPTOR_CLASSES = _build_lookup(DESCRIPTOR_TAGS)
"""Name and decoder class for each tag, indexed by tag."""


def tag_name(tag):
    """Name of a descriptor tag."""
    return DESCRIPTOR_CLASSES[tag][0]


def dispatch(tag, data, verify=True):
    """Create a view of a descriptor payload appropriate for its tag.

    Parameters
    ----------
    tag : int
        Descriptor tag, between 0 and 255.
    data : bytes, `~numpy.ndarray`, or other buffer
        Descriptor payload, i.e., excluding the tag and length bytes.
    verify : bool, optional
        Whether the decoder should verify the payload.  Default: `True`.

    Returns
    -------
    descriptor : `~dvbsi.descriptors.base.DescriptorBase` subclass instance
        An `~dvbsi.descriptors.UnknownDescriptor` holding the raw payload
        for tags without a dedicated decoder.

    Raises
    ------
    NotEnoughDataError
        If the decoder for the tag rejects the payload.
    """
    name, cls = DESCRIPTOR_CLASSES[tag]
    return cls(tag, data, name=name, verify=verify)


class DescriptorIterator:
    """Iterator over the descriptors in a descriptor loop.

    Reads the header of each descriptor and dispatches its payload to the
    decoder for its tag.  Before advancing, checks that the descriptor fits
    within the loop.

    Parameters
    ----------
    data : bytes, `~numpy.ndarray`, or other buffer
        The descriptor loop.
    verify : bool, optional
        Passed on to the decoders.  Default: `True`.

    Raises
    ------
    MalformedSectionError
        On advancing to a descriptor that extends beyond the loop.
    """

    def __init__(self, data, verify=True):
        self.data = as_buffer(data)
        self.offset = 0
        self.verify = verify

    def __iter__(self):
        return self

    def __next__(self):
        remaining = len(self.data) - self.offset
        if remaining == 0:
            raise StopIteration

        if remaining < DescriptorHeader.nbytes:
            raise MalformedSectionError('descriptor header', self.offset,
                                        DescriptorHeader.nbytes, remaining)

        header = DescriptorHeader.frombuffer(self.data, self.offset)
        size = header.descriptor_nbytes
        if size > remaining:
            raise MalformedSectionError('descriptor', self.offset,
                                        size, remaining)

        start = self.offset + header.nbytes
        self.offset += size
        return dispatch(header['descriptor_tag'],
                        self.data[start:self.offset], verify=self.verify)
