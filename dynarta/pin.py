import logging

from .dynarta import (ANALOG, ANALOG_MESSAGE, DIGITAL, DIGITAL_MESSAGE, EXTENDED_ANALOG, INPUT,
                      OUTPUT, PIN_MODE_NAMES, PWM, REPORT_ANALOG, REPORT_DIGITAL, SERVO,
                      SET_PIN_MODE, UNAVAILABLE)
from .excepts import InvalidModeError, InvalidStateError
from .util import to_two_bytes

logger = logging.getLogger(__name__)


class Pin(object):
    """A Pin representation"""
    def __init__(self, board, pin_number, type=ANALOG, port_number=None):
        self.board = board
        self.pin_number = pin_number
        self.type = type
        # Resolved through the board, see ``port``
        self.port_number = port_number
        self.pwm_capable = False
        self._mode = (type == DIGITAL and OUTPUT or INPUT)
        self.reporting = False
        self.value = None

    def __str__(self):
        type = {ANALOG: 'Analog', DIGITAL: 'Digital'}[self.type]
        return "{0} pin {1}".format(type, self.pin_number)

    def __repr__(self):
        return "<{0} ({1})>".format(self, PIN_MODE_NAMES.get(self._mode, self._mode))

    @property
    def port(self):
        """The :class:`Port` this pin belongs to, or None."""
        if self.port_number is None:
            return None
        return self.board.digital_ports[self.port_number]

    def _set_mode(self, mode):
        if mode == UNAVAILABLE:
            self._mode = UNAVAILABLE
            return
        if self._mode == UNAVAILABLE:
            raise InvalidModeError("{0} can not be used through Firmata".format(self))
        if mode == PWM and not self.pwm_capable:
            raise InvalidModeError("{0} does not have PWM capabilities".format(self))
        if mode == SERVO:
            if self.type != DIGITAL:
                raise InvalidModeError("Only digital pins can drive servos! {0} is not "
                                       "digital".format(self))
            self.board.servo_config(self.pin_number)
            return

        # Set mode with SET_PIN_MODE message
        self._mode = mode
        self.board.transport.write_bytes(bytearray([SET_PIN_MODE, self.pin_number, mode]))
        logger.debug("%s set to %s", self, PIN_MODE_NAMES.get(mode, mode))
        if mode == INPUT:
            self.enable_reporting()

    def _get_mode(self):
        return self._mode

    mode = property(_get_mode, _set_mode)
    """
    Mode of operation for the pin. Can be one of the pin modes: INPUT, OUTPUT,
    ANALOG, PWM. or SERVO (or UNAVAILABLE).
    """

    def _check_reportable(self):
        if self._mode != INPUT:
            raise InvalidStateError("{0} is not an input and can therefore not report"
                                    .format(self))

    def enable_reporting(self):
        """Set an input pin to report values."""
        self._check_reportable()
        if self.type == ANALOG:
            self.reporting = True
            self.board.transport.write_bytes(bytearray([REPORT_ANALOG + self.pin_number, 1]))
        elif self.port_number is None:
            self.reporting = True
            self._report_digital(1)
        else:
            # Digital pins report per port
            self.port.enable_reporting()

    def disable_reporting(self):
        """Disable the reporting of an input pin."""
        self._check_reportable()
        if self.type == ANALOG:
            self.reporting = False
            self.board.transport.write_bytes(bytearray([REPORT_ANALOG + self.pin_number, 0]))
        elif self.port_number is None:
            self.reporting = False
            self._report_digital(0)
        else:
            self.port.disable_reporting()

    def _report_digital(self, enable):
        # Firmata reports digital inputs by the port the pin number falls in
        msg = bytearray([REPORT_DIGITAL + self.pin_number // 8, enable])
        self.board.transport.write_bytes(msg)

    def read(self):
        """
        Returns the last value received for the pin. This value is updated by
        the boards :meth:`Board.iterate` method. Analog values are in the
        range from 0.0 to 1.0.
        """
        if self._mode == UNAVAILABLE:
            raise InvalidStateError("Cannot read pin {0}".format(self))
        return self.value

    def write(self, value):
        """
        Output a voltage from the pin

        :arg value: Uses value as a boolean if the pin is in output mode, or
            expects a float from 0 to 1 if the pin is in PWM mode. If the pin
            is in SERVO the value should be in degrees.

        """
        if self._mode == UNAVAILABLE:
            raise InvalidStateError("{0} can not be used through Firmata".format(self))
        if self._mode == INPUT:
            raise InvalidStateError("{0} is set up as an INPUT and can therefore not be written to"
                                    .format(self))
        if value == self.value:
            return
        if self._mode == OUTPUT:
            self.value = value
            if self.port_number is not None:
                self.port.write()
            else:
                msg = bytearray([DIGITAL_MESSAGE, self.pin_number, int(value)])
                self.board.transport.write_bytes(msg)
        elif self._mode in (PWM, SERVO):
            if self._mode == PWM:
                raw = int(round(value * 255))
            else:
                raw = int(value)
            data = to_two_bytes(raw)
            self.value = value
            if self.pin_number > 0x0F:
                # ANALOG_MESSAGE only has a nibble for the pin
                self.board.send_sysex(EXTENDED_ANALOG, bytearray([self.pin_number]) + data)
            else:
                msg = bytearray([ANALOG_MESSAGE + self.pin_number]) + data
                self.board.transport.write_bytes(msg)
        else:
            self.value = value
