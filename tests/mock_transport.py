"""
In-memory transport for testing boards without hardware.
"""


class MockTransport(object):
    """
    Feeds scripted bytes to a board and records what it writes.

        transport = MockTransport([0xF9, 2, 5])
        board = Board('MOCK', layout='arduino', transport=transport, setup_wait_time=0)
        assert board.get_firmata_version() == (2, 5)
    """

    def __init__(self, data=()):
        self.port = 'MOCK'
        self.closed = False
        self._input = bytearray(data)
        self.written = bytearray()

    def feed(self, data):
        self._input.extend(data)

    def read_byte(self):
        if not self._input:
            return None
        return self._input.pop(0)

    def write_bytes(self, data):
        self.written.extend(data)

    def bytes_available(self):
        return len(self._input)

    def close(self):
        self.closed = True

    def take_written(self):
        """Returns everything written so far and forgets it."""
        written = bytes(self.written)
        self.written = bytearray()
        return written
