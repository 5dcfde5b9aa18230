# Licensed under the GPLv3 - see LICENSE
import pytest
import numpy as np

from ...base.base import (NotEnoughDataError, UnsupportedEncodingError,
                          DecodeFailureError, TextError)
from .. import Charset, TextEncoding, Text, resolve, decode


class TestResolve:
    @pytest.mark.parametrize('first', range(0x20, 0x100))
    def test_default_table(self, first):
        encoding = resolve(bytes([first, 0x10, 0x00]))
        assert encoding == TextEncoding(Charset.ISO_8859_1, b'')
        assert encoding.nbytes == 0

    @pytest.mark.parametrize('selector, charset', [
        (0x01, Charset.ISO_8859_5),
        (0x02, Charset.ISO_8859_6),
        (0x03, Charset.ISO_8859_7),
        (0x04, Charset.ISO_8859_8),
        (0x05, Charset.ISO_8859_9),
        (0x06, Charset.ISO_8859_10),
        (0x07, Charset.ISO_8859_11),
        (0x09, Charset.ISO_8859_13),
        (0x0a, Charset.ISO_8859_14),
        (0x0b, Charset.ISO_8859_15),
        (0x11, Charset.ISO_10646),
        (0x12, Charset.KSX1001_2004),
        (0x13, Charset.GB2312_1980),
        (0x14, Charset.BIG5),
        (0x15, Charset.UTF_8)])
    def test_single_byte_selector(self, selector, charset):
        encoding = resolve(bytes([selector]) + b'abc')
        assert encoding.charset is charset
        assert encoding.selector == bytes([selector])
        assert encoding.nbytes == 1

    @pytest.mark.parametrize('selector', [0x00, 0x08, 0x0c, 0x0d, 0x0e, 0x0f]
                             + list(range(0x16, 0x1f)))
    def test_reserved_single_byte(self, selector):
        encoding = resolve(bytes([selector, 0x41]))
        assert encoding.charset is Charset.RESERVED_1
        assert encoding.charset.reserved
        assert encoding.selector == bytes([selector])

    @pytest.mark.parametrize('part', [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11,
                                      13, 14, 15])
    def test_iso_8859_part(self, part):
        encoding = resolve(bytes([0x10, 0x00, part, 0x41]))
        assert encoding.charset is getattr(Charset, f'ISO_8859_{part}')
        assert encoding.selector == bytes([0x10, 0x00, part])
        assert encoding.nbytes == 3

    @pytest.mark.parametrize('code', [b'\x00\x00', b'\x00\x0c',
                                      b'\x00\x10', b'\x01\x01'])
    def test_reserved_three_byte(self, code):
        encoding = resolve(b'\x10' + code)
        assert encoding.charset is Charset.RESERVED_2
        assert encoding.selector == b'\x10' + code

    @pytest.mark.parametrize('data', [b'\x10', b'\x10\x00'])
    def test_truncated_three_byte(self, data):
        with pytest.raises(NotEnoughDataError) as excinfo:
            resolve(data)
        assert excinfo.value.expected == 3
        assert excinfo.value.available == len(data)

    def test_encoding_type_id(self):
        encoding = resolve(b'\x1f\x01abc')
        assert encoding.charset is Charset.ENCODING_TYPE_ID
        assert encoding.selector == b'\x1f\x01'
        assert encoding.codec is None
        with pytest.raises(NotEnoughDataError):
            resolve(b'\x1f')

    def test_empty(self):
        with pytest.raises(NotEnoughDataError):
            resolve(b'')

    def test_array_input(self):
        data = np.frombuffer(b'\x10\x00\x02abc', dtype='u1')
        assert resolve(data).charset is Charset.ISO_8859_2

    def test_str(self):
        assert str(resolve(b'abc')) == 'ISO 8859-1'
        assert str(resolve(b'\x10\x00\x05a')) == (
            'ISO 8859-5 (selector 0x100005)')


class TestDecode:
    def test_latin1(self):
        assert decode(b'BBC ONE') == 'BBC ONE'
        assert decode(b'Caf\xe9') == 'Caf\xe9'

    def test_selector_stripped(self):
        assert decode(b'\x10\x00\x01Caf\xe9') == 'Caf\xe9'
        assert decode(b'\x15') == ''

    def test_utf8(self):
        text = 'Fran\xe7ais \u20ac'
        assert decode(b'\x15' + text.encode('utf-8')) == text

    def test_other_tables(self):
        assert decode(b'\x01\xbf\xb8\xb5\xe0') == '\u041f\u0418\u0415\u0440'
        assert decode(b'\x11\x00A\x20\xac') == 'A\u20ac'
        assert decode(b'\x10\x00\x0f\xa4') == '\u20ac'

    def test_invalid(self):
        with pytest.raises(DecodeFailureError):
            decode(b'\x15\xff')
        with pytest.raises(UnicodeError):
            decode(b'\x15abc\xc3')
        assert decode(b'\x15a\xffb', errors='replace') == 'a\ufffdb'

    @pytest.mark.parametrize('data', [b'\x08abc', b'\x10\x00\x0cabc',
                                      b'\x1f\x01abc'])
    def test_unsupported(self, data):
        with pytest.raises(UnsupportedEncodingError) as excinfo:
            decode(data)
        assert excinfo.value.encoding == resolve(data)
        assert isinstance(excinfo.value, TextError)

    def test_empty(self):
        with pytest.raises(NotEnoughDataError):
            decode(b'')

    @pytest.mark.parametrize('byte', range(0x20, 0x100))
    def test_latin1_every_byte(self, byte):
        data = bytes([byte])
        assert decode(data) == data.decode('latin-1')

    def test_unknown_error_handler(self):
        with pytest.raises(ValueError, match='unknown error handler'):
            decode(b'abc', errors='no-such-handler')
        with pytest.raises(ValueError):
            Text(b'\x15a').to_string(errors='no-such-handler')

    def test_other_error_handler(self):
        assert decode(b'\x15a\xffb', errors='ignore') == 'ab'


class TestText:
    def setup_class(cls):
        cls.data = np.frombuffer(b'\x15caf\xc3\xa9', dtype='u1')

    def test_basics(self):
        text = Text(self.data)
        assert len(text) == 6
        assert text.encoding.charset is Charset.UTF_8
        assert text.selector == b'\x15'
        assert text.payload.tobytes() == b'caf\xc3\xa9'
        assert np.shares_memory(text.data, self.data)
        assert text.decode() == 'caf\xe9'
        assert str(text) == 'caf\xe9'
        assert repr(text) == "<Text 'caf\xe9'>"

    def test_empty(self):
        with pytest.raises(NotEnoughDataError):
            Text(b'')

    def test_invalid(self):
        text = Text(b'\x15a\xff')
        with pytest.raises(DecodeFailureError):
            text.decode()
        assert text.to_string() == 'a\ufffd'
        assert text.decode('replace') == 'a\ufffd'

    def test_unsupported(self):
        text = Text(b'\x08abc')
        with pytest.raises(UnsupportedEncodingError):
            text.decode()
        assert text.to_string().startswith('<unsupported text encoding')
        assert repr(text).startswith('<Text <unsupported')

    def test_truncated_selector(self):
        text = Text(b'\x10\x00')
        with pytest.raises(NotEnoughDataError):
            text.encoding
        assert text.to_string().startswith('<not enough data')
