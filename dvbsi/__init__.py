# Licensed under the GPLv3 - see LICENSE
"""DVB Service Information decoding (ETSI EN 300 468).

Provides zero-copy views over verified Service Description Table sections,
their service loops and descriptors, and decoding of the text fields therein.
"""
from .base.base import (DVBSIError, NotEnoughDataError, TextError,  # noqa
                        UnsupportedEncodingError, DecodeFailureError,
                        MalformedSectionError, SdtWarning)
from .text import Charset, TextEncoding, Text, resolve, decode  # noqa
from .descriptors import (dispatch, UnknownDescriptor,  # noqa
                          ServiceDescriptor, ServiceType)
from .sdt import (SdtSection, Service, RunningStatus,  # noqa
                  SdtProcessor, ActualOther, Actual, Other)

from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version('dvbsi')
except PackageNotFoundError:
    __version__ = ''

# Define minima for the documentation, but do not bother to explicitly check.
__minimum_python_version__ = '3.10'
__minimum_astropy_version__ = '5.1'
__minimum_numpy_version__ = '1.24'
