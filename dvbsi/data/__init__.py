# Licensed under the GPLv3 - see LICENSE
"""Sample files with service information sections."""

# Use private names to avoid inclusion in the sphinx documentation.
from os import path as _path


def _full_path(name, dirname=_path.dirname(_path.abspath(__file__))):
    return _path.join(dirname, name)


SAMPLE_SDT = _full_path('sample.sdt')
"""SDT actual section.  original_network_id=9018, 25 services.

Complete section, from the table id up to and including the CRC, with
transport_stream_id=0x0d00, version_number=0, and section_number=0.
Reassembled from the transport stream packets of a UK DVB-T broadcast; all
services have a service descriptor with empty provider name, followed by a
default authority descriptor 'fp.bbc.co.uk'.
"""
