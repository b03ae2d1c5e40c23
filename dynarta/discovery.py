"""
Firmata "Capability Query" handshake.

The board answers CAPABILITY_QUERY with one group per pin, each a list of
``(mode, resolution)`` byte pairs closed by 0x7F. A pin without any group
entries can't be used through Firmata.
"""
import logging
import time

from .boards import BoardLayout
from .dynarta import CAPABILITY_PIN_END, CAPABILITY_QUERY, CAPABILITY_RESPONSE, DISCOVERY_TIMEOUT
from .excepts import BoardDetectionError
from .handlers import SYSEX_TERMINATED

logger = logging.getLogger(__name__)

IDLE = 'idle'
AWAITING_CAPABILITY_RESPONSE = 'awaiting_capability_response'
LAYOUT_DERIVED = 'layout_derived'
BOOTSTRAPPED = 'bootstrapped'


def parse_capability_response(data):
    """
    Splits a capability response payload into per pin groups of
    ``(mode, resolution)`` tuples.

    Bytes are read in pairs, so a resolution of 0x7F doesn't end a group.
    A trailing group without its 0x7F is dropped.
    """
    pin_specs = []
    spec = []
    i = 0
    while i < len(data):
        mode = data[i]
        if mode == CAPABILITY_PIN_END:
            pin_specs.append(spec)
            spec = []
            i += 1
            continue
        if i + 1 >= len(data):
            break
        spec.append((mode, data[i + 1]))
        i += 2
    if spec:
        logger.debug("Ignoring unterminated capability group %r", spec)
    return pin_specs


class CapabilityDiscovery(object):
    """
    Runs the capability handshake on a board whose layout isn't known.

    Only needs the board's ``add_cmd_handler``, ``send_sysex``,
    ``bytes_available`` and ``iterate``.
    """

    def __init__(self, board):
        self.board = board
        self.state = IDLE
        self.layout = None

    def start(self):
        self.board.add_cmd_handler(CAPABILITY_RESPONSE, self._handle_capability_response,
                                   SYSEX_TERMINATED)
        self.board.send_sysex(CAPABILITY_QUERY, [])
        self.state = AWAITING_CAPABILITY_RESPONSE

    def _handle_capability_response(self, *data):
        # A repeated response after discovery is harmless
        if self.state != AWAITING_CAPABILITY_RESPONSE:
            return
        pin_specs = parse_capability_response(data)
        self.layout = BoardLayout.from_pin_specs(pin_specs)
        self.state = LAYOUT_DERIVED
        logger.info("Board reported %d pins: %d analog, %d digital (%d pwm, %d disabled)",
                    len(pin_specs), len(self.layout.analog), len(self.layout.digital),
                    len(self.layout.pwm), len(self.layout.disabled))

    def run(self, timeout=DISCOVERY_TIMEOUT):
        """
        Queries the board and steps it until the response arrived. Returns
        the derived :class:`BoardLayout`.

        Raises ``BoardDetectionError`` when nothing arrived within
        ``timeout`` seconds.
        """
        if self.state == IDLE:
            self.start()
        deadline = time.time() + timeout
        while self.state == AWAITING_CAPABILITY_RESPONSE:
            # A board streaming other data still runs into the deadline
            if time.time() >= deadline:
                break
            if self.board.bytes_available():
                self.board.iterate()
            else:
                time.sleep(0.01)

        if self.state != LAYOUT_DERIVED:
            logger.warning("No capability response from %s", self.board.name)
            raise BoardDetectionError("Board detection failed.")
        return self.layout

    def bootstrapped(self):
        """Called by the board once the layout is applied."""
        self.state = BOOTSTRAPPED
