# Licensed under the GPLv3 - see LICENSE
"""Descriptors found in the loops of service information tables.

Descriptors are dispatched by tag to the decoders listed in
`~dvbsi.descriptors.registry.DESCRIPTOR_TAGS`; only the service descriptor
has a dedicated decoder, all others are returned as opaque payloads.
"""
from .base import DescriptorHeader, UnknownDescriptor  # noqa
from .service import ServiceType, ServiceDescriptor  # noqa
from .registry import (DESCRIPTOR_TAGS, tag_name, dispatch,  # noqa
                       DescriptorIterator)
