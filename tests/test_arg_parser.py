"""Tests for glyph_cutter.core.arg_parser — rule, grid, rect and size strings."""

import pytest
from glyph_cutter.core.arg_parser import parse_grid, parse_point, parse_range, parse_rect, parse_rule, parse_size
from glyph_cutter.core.rules import is_match_any
from glyph_cutter.core.types import GridSpec, Rect


class TestParseRule:
    def test_target_and_tolerance(self):
        rule = parse_rule('FFFFFF:101010')
        assert rule.target == 'FFFFFF'
        assert rule.tolerance == '101010'
        assert rule.enabled is True

    def test_default_tolerance(self):
        rule = parse_rule('#00ff00', default_tolerance='050505')
        assert rule.target == '#00ff00'
        assert rule.tolerance == '050505'

    def test_disabled(self):
        rule = parse_rule('ff0000:000000:off')
        assert rule.enabled is False
        assert rule.tolerance == '000000'

    def test_disabled_without_tolerance(self):
        rule = parse_rule('ff0000::off', default_tolerance='111111')
        assert rule.enabled is False
        assert rule.tolerance == '111111'

    def test_malformed_colour_is_kept_and_never_matches(self):
        rule = parse_rule('purple:10')
        assert rule.target == 'purple'
        assert is_match_any(0xFF800080, [rule]) is False

    def test_each_rule_gets_an_id(self):
        assert parse_rule('FFFFFF').id != 0


class TestParseGrid:
    def test_four_values(self):
        assert parse_grid('1,2,10,12') == GridSpec(1, 2, 10, 12, 0, 0, 1, 1)

    def test_six_values(self):
        assert parse_grid('0,0,10,10,2,3') == GridSpec(0, 0, 10, 10, 2, 3, 1, 1)

    def test_eight_values(self):
        assert parse_grid('0, 0, 10, 10, 2, 0, 3, 1') == GridSpec(0, 0, 10, 10, 2, 0, 3, 1)

    def test_negative_values_accepted(self):
        assert parse_grid('-5,0,0,10').cell_w == 0

    @pytest.mark.parametrize('text', ['', '1,2,3', '1,2,3,4,5', 'a,b,c,d', '1,2,3,4,5,6,7,8,9'])
    def test_malformed(self, text):
        with pytest.raises(ValueError):
            parse_grid(text)


class TestParseRectAndFriends:
    def test_rect(self):
        assert parse_rect('10,10,40,24') == Rect(10, 10, 40, 24)

    def test_rect_is_normalised(self):
        assert parse_rect('40,24,10,10') == Rect(10, 10, 40, 24)

    def test_rect_malformed(self):
        with pytest.raises(ValueError):
            parse_rect('10,10,40')

    def test_point(self):
        assert parse_point('12, 7') == (12, 7)

    def test_size(self):
        assert parse_size('3x5') == (3, 5)
        assert parse_size('4X4') == (4, 4)

    def test_size_malformed(self):
        with pytest.raises(ValueError):
            parse_size('3,5')

    def test_range_ordered(self):
        assert parse_range('72,0') == (0, 72)
