# Licensed under the GPLv3 - see LICENSE
"""
Bit-field headers for the fixed-size parts of service information tables.

Sections, service records and descriptors all start with a short prefix of
big-endian fields packed without alignment.  A header class unpacks such a
prefix with a `~struct.Struct` into a few words of 8 or 16 bits, and gives
dict-like access to the fields, which are described by a `HeaderParser`
mapping each field name to ``(word_index, bit_index, bit_length, default)``.

For instance, the running status of a service is in the top three bits of
the third word of a service record header, so it is described by
``('running_status', (2, 13, 3, 0))``.
"""
import struct
import warnings
import functools
from copy import copy

import numpy as np

from .base import NotEnoughDataError
from .utils import fixedvalue


__all__ = ['make_parser', 'make_setter', 'get_default',
           'ParserDict', 'HeaderParser', 'SIHeaderBase']


def make_parser(word_index, bit_index, bit_length, default=None):
    """Create a function that extracts a field from header words.

    Single-bit fields are returned as `bool`, all others as `int`.

    Parameters
    ----------
    word_index : int
        Which word holds the field.
    bit_index : int
        Position of the least significant bit of the field.
    bit_length : int
        Number of bits in the field.

    Returns
    -------
    parser : function
        To be used as ``parser(words)``.
    """
    if bit_length == 1:
        bit = 1 << bit_index

        def parser(words):
            return (words[word_index] & bit) != 0

    elif bit_index == 0:
        bit_mask = (1 << bit_length) - 1

        def parser(words):
            return words[word_index] & bit_mask

    else:
        bit_mask = (1 << bit_length) - 1

        def parser(words):
            return (words[word_index] >> bit_index) & bit_mask

    return parser


def make_setter(word_index, bit_index, bit_length, default=None):
    """Create a function that stores a field in a list of header words.

    The function replaces the bits of the field with the value given, where
    `None` means the default and `True` sets all bits.

    Parameters
    ----------
    word_index : int
        Which word holds the field.
    bit_index : int
        Position of the least significant bit of the field.
    bit_length : int
        Number of bits in the field.
    default : int or bool or None
        Value to use when the setter is passed `None`.

    Returns
    -------
    setter : function
        To be used as ``setter(words, value)``.

    Raises
    ------
    ValueError
        From the setter, if the value does not fit in the field, or if it
        is `None` and the field has no default.
    """
    bit_mask = (1 << bit_length) - 1
    field_mask = bit_mask << bit_index

    def setter(words, value):
        if value is None:
            if default is None:
                raise ValueError("no default value so cannot set to 'None'.")
            value = default
        elif value is True:
            value = bit_mask
        elif np.any(value & bit_mask != value):
            raise ValueError("{0} cannot be represented with {1} bits"
                             .format(value, bit_length))
        words[word_index] = ((words[word_index] & ~field_mask)
                             | (int(value) << bit_index))
        return words

    return setter


def get_default(word_index, bit_index, bit_length, default=None):
    """Default value of a field, i.e., the last item of its description."""
    return default


class ParserDict:
    """Dict of functions derived from field descriptions, made when needed.

    Used as a class attribute of `HeaderParser`.  On first access from an
    instance, builds a dict mapping each field name to ``function(*description)``
    and stores it on the instance, where it shadows this descriptor until the
    instance is changed.

    Parameters
    ----------
    function : callable
        Called with the field description, e.g., `make_parser`.
    """

    def __init__(self, function):
        self.function = function

    def __set_name__(self, owner, name):
        self.name = name
        self.__doc__ = f"Lazily evaluated dict of {name}"

    def __get__(self, instance, cls=None):
        if instance is None:
            return self
        d = {key: self.function(*description)
             for key, description in instance.items()}
        setattr(instance, self.name, d)
        return d

    def __repr__(self):
        return f"{self.__class__.__name__}({self.function})"


class HeaderParser(dict):
    """Descriptions of the fields in a header.

    Initialised like a dict, with field names as keys and as values tuples of
    ``(word_index, bit_index, bit_length[, default])``.

    Functions to get and set fields, and their defaults, are available as
    the dicts ``parsers``, ``setters`` and ``defaults``.  These are built on
    first use and rebuilt after any change to the descriptions.
    """

    parsers = ParserDict(make_parser)
    setters = ParserDict(make_setter)
    defaults = ParserDict(get_default)

    def copy(self):
        return self.__class__(self)

    def __or__(self, other):
        if not isinstance(other, HeaderParser):
            return NotImplemented

        return self.__class__(super().__or__(other))

    def _clear_caches(self):
        for key in list(self.__dict__):
            if isinstance(getattr(type(self), key, None), ParserDict):
                del self.__dict__[key]


def _clearing_caches(method):
    @functools.wraps(getattr(dict, method))
    def wrapped(self, *args, **kwargs):
        result = getattr(dict, method)(self, *args, **kwargs)
        self._clear_caches()
        return result
    return wrapped


for _method in ('__setitem__', '__delitem__', 'update', 'pop', 'popitem',
                'clear'):
    setattr(HeaderParser, _method, _clearing_caches(_method))


class SIHeaderBase:
    """Base class for fixed-size prefixes of service information tables.

    Subclasses define:

      _struct : `~struct.Struct` that unpacks the prefix into words.

      _header_parser : `HeaderParser` describing the fields in those words.

      _properties : names of properties that can be set on initialisation
      with `fromvalues` and `update`, in the order they are to be set.

    Fields can be read (and, for mutable headers, set) by name, e.g.,
    ``header['service_id']``.

    Parameters
    ----------
    words : tuple or list of int, or None
        Header words.  A tuple gives an immutable header.  If `None`, a list
        of zeros is used, for filling in later (and verification is skipped).
    verify : bool, optional
        Whether to check the header.  For the base class, this only checks
        the number of words.
    """

    _struct = struct.Struct('')
    _header_parser = HeaderParser()
    _properties = ()

    def __init__(self, words, verify=True):
        if words is None:
            words = [0] * self.nwords
            verify = False

        self.words = words
        if verify:
            self.verify()

    def verify(self):
        assert len(self.words) == self.nwords

    @fixedvalue
    def nbytes(cls):
        """Size of the header in bytes."""
        return cls._struct.size

    @fixedvalue
    def nwords(cls):
        """Number of words in the header."""
        return len(cls._struct.unpack(bytes(cls._struct.size)))

    @classmethod
    def frombuffer(cls, buffer, offset=0, *args, **kwargs):
        """Read a header from a buffer.

        Parameters
        ----------
        buffer : bytes, `~numpy.ndarray`, or other buffer
            To read the header from.
        offset : int, optional
            Byte offset of the header in the buffer.  Default: 0.
        *args, **kwargs
            Further arguments for initialisation.

        Returns
        -------
        header : `SIHeaderBase` subclass instance
            Immutable header.

        Raises
        ------
        NotEnoughDataError
            If the buffer does not extend to the end of the header.
        """
        available = len(buffer) - offset
        if available < cls._struct.size:
            raise NotEnoughDataError(cls._struct.size, max(available, 0))
        return cls(cls._struct.unpack_from(buffer, offset), *args, **kwargs)

    def tobytes(self):
        """Pack the header words into bytes."""
        return self._struct.pack(*self.words)

    @classmethod
    def fromvalues(cls, *args, **kwargs):
        """Create a header from field values and properties.

        Fields not given are set to their defaults, if any.  Afterwards,
        properties listed in ``_properties`` are applied, so that, e.g.,
        ``record_nbytes`` can be used instead of a loop length.
        """
        self = cls(None, *args, verify=False)
        for key in set(self.keys()).difference(kwargs):
            default = self._header_parser.defaults[key]
            if default is not None:
                kwargs[key] = default

        self.update(**kwargs)
        return self

    @classmethod
    def fromkeys(cls, *args, **kwargs):
        """Create a header from values for exactly all its fields.

        Raises
        ------
        KeyError
            If fields are missing or unknown keywords are given.
        """
        self = cls(None, *args, verify=False)
        given = set(kwargs) - {'verify'}
        missing = set(self.keys()) - given
        extra = given - set(self.keys())
        if missing or extra:
            raise KeyError("missing fields {0} and/or extra keywords {1}"
                           .format(sorted(missing), sorted(extra)))

        self.update(**kwargs)
        return self

    def update(self, *, verify=True, **kwargs):
        """Set fields and properties.

        Fields are set first, then properties in the order of
        ``_properties``.  Keywords matching neither give a warning.

        Parameters
        ----------
        verify : bool, optional
            Whether to verify the header afterwards.  Default: `True`.
        **kwargs
            Values for fields and properties.
        """
        for key in set(kwargs).intersection(self.keys()):
            self[key] = kwargs.pop(key)

        for key in self._properties:
            if key in kwargs:
                setattr(self, key, kwargs.pop(key))

        if kwargs:
            warnings.warn("some keywords unused in header update: {0}"
                          .format(kwargs))

        if verify:
            self.verify()

    @property
    def mutable(self):
        """Whether the header can be changed, i.e., has words in a list."""
        return not isinstance(self.words, tuple)

    @mutable.setter
    def mutable(self, mutable):
        if not isinstance(self.words, (tuple, list)):
            raise TypeError("do not know how to set mutability of '.words' "
                            "of class {0}".format(type(self.words)))
        self.words = list(self.words) if mutable else tuple(self.words)

    def copy(self, **kwargs):
        """Mutable copy of the header."""
        kwargs.setdefault('verify', False)
        new = self.__class__(copy(self.words), **kwargs)
        new.mutable = True
        return new

    __copy__ = copy

    def keys(self):
        return self._header_parser.keys()

    def __contains__(self, key):
        return key in self.keys()

    def __getitem__(self, item):
        try:
            parser = self._header_parser.parsers[item]
        except KeyError:
            raise KeyError("{0} header does not contain {1}"
                           .format(self.__class__.__name__, item)) from None
        return parser(self.words)

    def __setitem__(self, item, value):
        try:
            setter = self._header_parser.setters[item]
        except KeyError:
            raise KeyError("{0} header does not contain {1}"
                           .format(self.__class__.__name__, item)) from None
        if not self.mutable:
            raise TypeError("header is immutable. Set '.mutable` attribute "
                            "or make a copy.")
        setter(self.words, value)

    def __eq__(self, other):
        return (type(self) is type(other)
                and tuple(self.words) == tuple(other.words))

    def _repr_value(self, key, value):
        if key.endswith('_id'):
            return '0x{:04x}'.format(value)
        return str(value)

    def __repr__(self):
        name = self.__class__.__name__
        outs = [f"{k}: {self._repr_value(k, self[k])}" for k in self.keys()]
        return "<{} {}>".format(name, (",\n  " + " "*len(name)).join(outs))
