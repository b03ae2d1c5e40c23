import pytest

from dynarta import Board

from mock_transport import MockTransport


@pytest.fixture
def transport():
    return MockTransport()


@pytest.fixture
def board(transport):
    """An Arduino Uno layout board with nothing written yet."""
    board = Board('MOCK', layout='arduino', transport=transport, setup_wait_time=0)
    transport.take_written()
    return board


@pytest.fixture
def port_board(transport):
    """A board with a single full port and no disabled pins."""
    layout = {'digital': range(8), 'analog': (), 'pwm': (), 'disabled': ()}
    board = Board('MOCK', layout=layout, transport=transport, setup_wait_time=0)
    transport.take_written()
    return board
