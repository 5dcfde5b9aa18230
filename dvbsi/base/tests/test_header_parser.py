# Licensed under the GPLv3 - see LICENSE
import pytest

from ..header import ParserDict, HeaderParser, make_parser, make_setter


class ParserDictSetup:
    @staticmethod
    def create_parser(index, default):
        def parser(words):
            return words[index]
        return parser

    @staticmethod
    def get_default(index, default):
        return default

    @staticmethod
    def random_name(index, default):
        return index


class TestParserDict(ParserDictSetup):
    def setup_class(cls):
        cls.hp = {'0': (0, 'default0'),
                  '1': (1, 'default1')}

        class H(HeaderParser):
            parsers = ParserDict(cls.create_parser)
            indices = ParserDict(cls.random_name)
            defaults = ParserDict(cls.get_default)

        cls.H = H

    def test_parserdict(self):
        assert self.H.parsers.name == 'parsers'
        assert self.H.indices.name == 'indices'
        assert repr(self.H.parsers).startswith('ParserDict')
        assert 'Lazily evaluated' in self.H.defaults.__doc__

    def test_init(self):
        h = self.H(self.hp)
        words = ['first', 'second']
        assert h.parsers['0'](words) == 'first'
        assert h.defaults['1'] == 'default1'
        assert h.indices['1'] == 1

    def test_cache_cleared_on_change(self):
        h = self.H(self.hp)
        assert h.defaults['0'] == 'default0'
        h['0'] = (0, 'other')
        assert h.defaults['0'] == 'other'
        del h['1']
        h.pop('0')
        assert h.defaults == {}


class TestHeaderParser:
    def setup_class(cls):
        cls.header_parser = HeaderParser(
            (('x0_0_16', (0, 0, 16)),
             ('x1_2_6', (1, 2, 6, 0x3f)),
             ('x1_1_1', (1, 1, 1, False)),
             ('x2_13_3', (2, 13, 3, 4)),
             ('x2_0_12', (2, 0, 12, 0))))

    def test_header_parser_update(self):
        extra = HeaderParser((('x3_0_8', (3, 0, 8)),))
        new = self.header_parser | extra
        assert isinstance(new, HeaderParser)
        assert len(new.keys()) == 6
        assert len(self.header_parser.keys()) == 5
        new = self.header_parser.copy()
        assert isinstance(new, HeaderParser)
        new.update(extra)
        assert len(new.keys()) == 6
        assert new['x3_0_8'] == (3, 0, 8)
        with pytest.raises(ValueError):
            self.header_parser.copy().update(('x3_0_8', (3, 0, 8)))

    def test_parsers(self):
        words = (0x2328, 0xfd, 0x8020)
        parsers = self.header_parser.parsers
        assert parsers['x0_0_16'](words) == 0x2328
        assert parsers['x1_2_6'](words) == 0x3f
        assert parsers['x1_1_1'](words) is False
        assert parsers['x2_13_3'](words) == 4
        assert parsers['x2_0_12'](words) == 0x20

    def test_defaults(self):
        defaults = self.header_parser.defaults
        assert defaults['x0_0_16'] is None
        assert defaults['x1_2_6'] == 0x3f
        assert defaults['x1_1_1'] is False

    def test_header_parser_class(self):
        header_parser = self.header_parser.copy()
        words = [0x1234, 0xff, 0xffff]
        header_parser['0_2_8'] = (0, 2, 8, 5)
        assert '0_2_8' in header_parser
        assert header_parser.defaults['0_2_8'] == 5
        assert header_parser.parsers['0_2_8'](words) == (words[0] >> 2) & 0xff
        # Check we can change and parsers will be reset.
        header_parser['0_2_8'] = (0, 1, 8, 3)
        assert header_parser.defaults['0_2_8'] == 3
        assert header_parser.parsers['0_2_8'](words) == (words[0] >> 1) & 0xff
        header_parser.update({'0_2_8': (0, 3, 8, 1)})
        assert header_parser.defaults['0_2_8'] == 1
        assert header_parser.parsers['0_2_8'](words) == (words[0] >> 3) & 0xff

        small_parser = HeaderParser((('0_2_8', (0, 2, 8, 4)),))
        header_parser2 = self.header_parser | small_parser
        assert header_parser2.parsers['0_2_8'](words) == (words[0] >> 2) & 0xff
        assert header_parser2.defaults['0_2_8'] == 4
        assert '0_2_8' not in self.header_parser


class TestMakeParserSetter:
    def test_parser(self):
        assert make_parser(0, 4, 4)([0xabcd]) == 0xc
        assert make_parser(0, 0, 4)([0xabcd]) == 0xd
        assert make_parser(0, 15, 1)([0xabcd]) is True
        assert make_parser(0, 14, 1)([0xabcd]) is False

    def test_setter(self):
        words = [0xabcd]
        make_setter(0, 4, 4)(words, 0x1)
        assert words == [0xab1d]
        make_setter(0, 14, 1)(words, True)
        assert words == [0xeb1d]
        make_setter(0, 15, 1)(words, False)
        assert words == [0x6b1d]
        make_setter(0, 0, 4, 0x9)(words, None)
        assert words == [0x6b19]
        with pytest.raises(ValueError):
            make_setter(0, 0, 4)(words, None)
        with pytest.raises(ValueError):
            make_setter(0, 0, 4)(words, 0x10)
        assert words == [0x6b19]
