# Licensed under the GPLv3 - see LICENSE
"""Text fields of service information.

Text fields start with a selector identifying the character table used
(see ETSI EN 300 468, Annex A).  The `~dvbsi.text.encoding` module resolves
and decodes such fields, and `~dvbsi.text.text.Text` wraps them as views
that are only decoded on demand.
"""
from .encoding import Charset, TextEncoding, resolve, decode  # noqa
from .text import Text  # noqa
