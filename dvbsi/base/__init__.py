# Licensed under the GPLv3 - see LICENSE
"""Base implementations shared between all table parts.

Sections are considered as composed of fixed-size prefixes followed by
variable-length loops.  The `~dvbsi.base.base` module defines the read-only
buffer views on which every table part is built, as well as the exceptions
and warnings used throughout.  Fixed prefixes are decoded with the bit-field
parsers defined in `~dvbsi.base.header`.  Finally, `~dvbsi.base.utils`
contains some general utility routines.
"""
