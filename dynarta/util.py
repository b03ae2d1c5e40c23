from .dynarta import END_SYSEX, MAX_TWO_BYTE_VALUE, START_SYSEX


def to_two_bytes(integer):
    """
    Breaks an integer into two 7 bit bytes, least significant first.

    Raises a ``ValueError`` for anything outside ``0..16383``, which would
    otherwise silently lose its upper bits on the wire.
    """
    if integer < 0 or integer > MAX_TWO_BYTE_VALUE:
        raise ValueError("Can't send {0} as two 7-bit bytes (max {1})"
                         .format(integer, MAX_TWO_BYTE_VALUE))
    return bytearray([integer & 0x7F, integer >> 7])


def from_two_bytes(lsb, msb):
    """Returns the integer encoded by two 7 bit bytes."""
    return (msb << 7) | lsb


def frame_sysex(sysex_cmd, data):
    """Wraps ``data`` in a SysEx frame for ``sysex_cmd``."""
    msg = bytearray([START_SYSEX, sysex_cmd])
    msg.extend(data)
    msg.append(END_SYSEX)
    return msg


def scale_analog(raw):
    """Normalizes a 10-bit analog sample to 0..1, rounded to 4 decimals."""
    return round(float(raw) / 1023, 4)


def two_byte_iter_to_str(data):
    """
    Return a string made from a list of two byte chars. A missing most
    significant byte at the end counts as zero.
    """
    data = list(data)
    chars = []
    for i in range(0, len(data), 2):
        lsb = data[i]
        msb = data[i + 1] if i + 1 < len(data) else 0x00
        chars.append(chr(from_two_bytes(lsb, msb)))
    return ''.join(chars)


def str_to_two_byte_iter(string):
    """
    Return a bytearray holding ``string`` as two byte chars, as used by
    STRING_DATA.
    """
    bstring = bytearray()
    for char in string:
        bstring += to_two_bytes(ord(char))
    return bstring
