# Licensed under the GPLv3 - see LICENSE
"""
Definitions for the fixed-size parts of Service Description Tables.

Implements an SdtHeader class for the part of a section body preceding the
service loop, and a ServiceHeader class for the part of each service record
preceding its descriptor loop (ETSI EN 300 468, section 5.2.3).

The section body starts with::

    original_network_id            16 bits
    reserved_future_use             8 bits

and every service record with::

    service_id                     16 bits
    reserved_future_use             6 bits
    EIT_schedule_flag               1 bit
    EIT_present_following_flag      1 bit
    running_status                  3 bits
    free_CA_mode                    1 bit
    descriptors_loop_length        12 bits
"""
import enum
import struct

from ..base.header import HeaderParser, SIHeaderBase


__all__ = ['RunningStatus', 'SdtHeader', 'ServiceHeader']


class RunningStatus(enum.IntEnum):
    """Running status of a service.

    The status is encoded in three bits; values 6 and 7 are reserved.
    """

    UNDEFINED = 0
    NOT_RUNNING = 1
    STARTS_IN_A_FEW_SECONDS = 2
    PAUSING = 3
    RUNNING = 4
    SERVICE_OFF_AIR = 5
    RESERVED_6 = 6
    RESERVED_7 = 7

    @property
    def reserved(self):
        return self >= RunningStatus.RESERVED_6


class SdtHeader(SIHeaderBase):
    """Part of an SDT section body preceding the service loop.

    Parameters
    ----------
    words : tuple of int, or None
        Original network id and reserved byte.  If `None`, set to zeros
        for later initialisation.
    verify : bool, optional
        Whether to do basic verification of integrity.  Default: `True`.
    """

    _struct = struct.Struct('>HB')

    _header_parser = HeaderParser(
        (('original_network_id', (0, 0, 16)),
         ('reserved_future_use', (1, 0, 8, 0xff))))


class ServiceHeader(SIHeaderBase):
    """Part of a service record preceding its descriptor loop.

    Parameters
    ----------
    words : tuple of int, or None
        Service id, flags byte, and status word.  If `None`, set to zeros
        for later initialisation.
    verify : bool, optional
        Whether to do basic verification of integrity.  Default: `True`.
    """

    _struct = struct.Struct('>HBH')

    _header_parser = HeaderParser(
        (('service_id', (0, 0, 16)),
         ('reserved_future_use', (1, 2, 6, 0x3f)),
         ('eit_schedule_flag', (1, 1, 1, False)),
         ('eit_present_following_flag', (1, 0, 1, False)),
         ('running_status', (2, 13, 3, RunningStatus.UNDEFINED)),
         ('free_ca_mode', (2, 12, 1, False)),
         ('descriptors_loop_length', (2, 0, 12, 0))))

    _properties = ('record_nbytes',)

    @property
    def running_status(self):
        """Running status, as a `RunningStatus`."""
        return RunningStatus(self['running_status'])

    @property
    def record_nbytes(self):
        """Size of the service record, i.e., header plus descriptor loop."""
        return self.nbytes + self['descriptors_loop_length']

    @record_nbytes.setter
    def record_nbytes(self, record_nbytes):
        self['descriptors_loop_length'] = record_nbytes - self.nbytes

    def _repr_value(self, key, value):
        if key == 'running_status':
            return RunningStatus(value).name
        return super()._repr_value(key, value)
