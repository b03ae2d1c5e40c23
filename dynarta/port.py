from .dynarta import DIGITAL, DIGITAL_MESSAGE, INPUT, OUTPUT, REPORT_DIGITAL
from .pin import Pin
from .util import to_two_bytes


class Port(object):
    """An 8-bit port on the board."""
    def __init__(self, board, port_number, num_pins=8):
        self.board = board
        self.port_number = port_number
        self.reporting = False

        self.pins = []
        for i in range(num_pins):
            pin_nr = i + self.port_number * 8
            self.pins.append(Pin(self.board, pin_nr, type=DIGITAL, port_number=port_number))

    def __str__(self):
        return "Digital Port {0.port_number} on {0.board}".format(self)

    def enable_reporting(self):
        """Enable reporting of values for the whole port."""
        self.reporting = True
        msg = bytearray([REPORT_DIGITAL + self.port_number, 1])
        self.board.transport.write_bytes(msg)

        for pin in self.pins:
            if pin.mode == INPUT:
                pin.reporting = True

    def disable_reporting(self):
        """Disable the reporting of the port."""
        self.reporting = False
        msg = bytearray([REPORT_DIGITAL + self.port_number, 0])
        self.board.transport.write_bytes(msg)

        for pin in self.pins:
            pin.reporting = False

    @property
    def mask(self):
        """Bitmask of the output pins currently driven high."""
        mask = 0
        for pin in self.pins:
            if pin.mode == OUTPUT and pin.value == 1:
                mask |= 1 << (pin.pin_number % 8)
        return mask

    def write(self):
        """Set the output pins of the port to the correct state."""
        msg = bytearray([DIGITAL_MESSAGE + self.port_number]) + to_two_bytes(self.mask)
        self.board.transport.write_bytes(msg)

    def update(self, mask):
        """Update the values for the pins marked as input with the mask."""
        if self.reporting:
            for pin in self.pins:
                if pin.mode == INPUT:
                    pin.value = int(mask & (1 << (pin.pin_number % 8)) > 0)
