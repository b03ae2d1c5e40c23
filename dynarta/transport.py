import logging

import serial

from .dynarta import DEFAULT_BAUDRATE

logger = logging.getLogger(__name__)


class SerialTransport(object):
    """
    The byte link a :class:`Board` talks over, backed by pyserial.

    Anything with ``read_byte``, ``write_bytes``, ``bytes_available`` and
    ``close`` can stand in for it.
    """

    def __init__(self, port, baudrate=DEFAULT_BAUDRATE, timeout=None):
        self.port = port
        self.sp = serial.Serial(port, baudrate, timeout=timeout)
        logger.info("Opened %s at %d baud", port, baudrate)

    def __str__(self):
        return self.port

    def read_byte(self):
        """Returns the next byte as an int, or None when the read timed out."""
        byte = self.sp.read()
        if not byte:
            return None
        return ord(byte)

    def write_bytes(self, data):
        self.sp.write(bytes(data))

    def bytes_available(self):
        return self.sp.in_waiting

    def close(self):
        if self.sp.is_open:
            self.sp.close()
            logger.info("Closed %s", self.port)
