import logging

from .dynarta import *  # NOQA
from .board import Board  # NOQA
from .boards import BOARDS, BoardLayout  # NOQA
from .discovery import CapabilityDiscovery, parse_capability_response  # NOQA
from .excepts import (BoardDetectionError, InvalidModeError, InvalidPinDefError,  # NOQA
                      InvalidStateError, PinAlreadyTakenError, ProtocolError)
from .handlers import SYSEX_TERMINATED, CommandRegistry  # NOQA
from .pin import Pin  # NOQA
from .port import Port  # NOQA
from .transport import SerialTransport  # NOQA
from .util import from_two_bytes, to_two_bytes  # NOQA

__version__ = '0.1.0'

logging.getLogger(__name__).addHandler(logging.NullHandler())
