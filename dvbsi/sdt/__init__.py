# Licensed under the GPLv3 - see LICENSE
"""Service Description Table (SDT) sections.

The SDT lists the services carried in a transport stream (ETSI EN 300 468,
section 5.2.3).  Provides views of verified section bodies
(`~dvbsi.sdt.SdtSection`), of the service records therein
(`~dvbsi.sdt.Service`), and a processor that routes sections by table id
(`~dvbsi.sdt.SdtProcessor`).
"""
from .header import RunningStatus, SdtHeader, ServiceHeader  # noqa
from .service import Service, ServiceIterator  # noqa
from .section import SdtSection  # noqa
from .processor import ActualOther, Actual, Other, SdtProcessor  # noqa
