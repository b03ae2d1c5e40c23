import pytest
import serial

from dynarta import Board, SerialTransport


class FakeSerial(object):

    def __init__(self, port, baudrate, timeout=None):
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self.is_open = True
        self.incoming = bytearray()
        self.outgoing = bytearray()

    def read(self, size=1):
        data = bytes(self.incoming[:size])
        del self.incoming[:size]
        return data

    def write(self, data):
        self.outgoing.extend(data)
        return len(data)

    @property
    def in_waiting(self):
        return len(self.incoming)

    def close(self):
        self.is_open = False


@pytest.fixture
def fake_serial(monkeypatch):
    monkeypatch.setattr(serial, 'Serial', FakeSerial)


def test_read_byte(fake_serial):
    transport = SerialTransport('/dev/ttyACM0', 57600)
    transport.sp.incoming.extend([0xF9, 2])
    assert transport.bytes_available() == 2
    assert transport.read_byte() == 0xF9
    assert transport.read_byte() == 2
    assert transport.read_byte() is None


def test_write_and_close(fake_serial):
    transport = SerialTransport('/dev/ttyACM0', 9600, timeout=1)
    assert transport.sp.baudrate == 9600
    transport.write_bytes(bytearray([0xF4, 13, 1]))
    assert transport.sp.outgoing == bytearray([0xF4, 13, 1])
    transport.close()
    transport.close()
    assert not transport.sp.is_open


def test_board_opens_serial_port(fake_serial):
    board = Board('/dev/ttyACM0', layout='arduino', baudrate=115200, setup_wait_time=0)
    assert isinstance(board.transport, SerialTransport)
    assert board.transport.sp.baudrate == 115200
    assert str(board) == 'Board /dev/ttyACM0 on /dev/ttyACM0'
    board.exit()
    assert not board.transport.sp.is_open
