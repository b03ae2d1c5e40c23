"""
Wire codec tests: 7-bit pairs, SysEx framing, analog scaling and strings.
"""

import pytest

from dynarta.dynarta import END_SYSEX, START_SYSEX, STRING_DATA
from dynarta.util import (frame_sysex, from_two_bytes, scale_analog, str_to_two_byte_iter,
                          to_two_bytes, two_byte_iter_to_str)


class TestTwoBytes:

    def test_round_trip(self):
        for value in range(0x4000):
            lsb, msb = to_two_bytes(value)
            assert from_two_bytes(lsb, msb) == value

    def test_split(self):
        assert to_two_bytes(1000) == bytearray([104, 7])
        assert to_two_bytes(0x3FFF) == bytearray([0x7F, 0x7F])

    def test_bytes_are_seven_bit(self):
        assert all(b < 0x80 for b in to_two_bytes(12345))

    @pytest.mark.parametrize('value', [-1, 0x4000, 32767])
    def test_out_of_range(self, value):
        with pytest.raises(ValueError):
            to_two_bytes(value)


class TestSysexFraming:

    def test_frame(self):
        msg = frame_sysex(STRING_DATA, [1, 2, 3])
        assert msg == bytearray([START_SYSEX, STRING_DATA, 1, 2, 3, END_SYSEX])

    def test_empty_payload(self):
        msg = frame_sysex(0x6B, [])
        assert msg == bytearray([START_SYSEX, 0x6B, END_SYSEX])

    def test_length(self):
        payload = bytearray(range(20))
        msg = frame_sysex(0x10, payload)
        assert len(msg) == len(payload) + 3
        assert msg[0] == START_SYSEX
        assert msg[1] == 0x10
        assert msg[-1] == END_SYSEX


class TestAnalogScaling:

    def test_full_scale(self):
        assert scale_analog(1023) == 1.0

    def test_zero(self):
        assert scale_analog(0) == 0.0

    def test_rounded_to_four_decimals(self):
        assert scale_analog(512) == 0.5005


class TestStrings:

    def test_decode(self):
        assert two_byte_iter_to_str([ord('H'), 0, ord('i'), 0]) == 'Hi'

    def test_decode_missing_msb(self):
        assert two_byte_iter_to_str([ord('A')]) == 'A'

    def test_decode_wide_char(self):
        assert two_byte_iter_to_str(to_two_bytes(0x00E9)) == u'é'

    def test_encode(self):
        assert str_to_two_byte_iter('Hi') == bytearray([ord('H'), 0, ord('i'), 0])
