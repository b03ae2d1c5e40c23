from collections import namedtuple

from .dynarta import ANALOG, INPUT, OUTPUT, PWM, SERVO

_DIGITAL_MODES = frozenset([INPUT, OUTPUT, PWM, SERVO])


class BoardLayout(namedtuple('BoardLayout', 'analog digital pwm disabled pin_specs')):
    """
    Which pins a board has and what they can do.

    ``analog`` and ``digital`` hold the pin numbers to create, ``pwm`` and
    ``disabled`` are subsets of ``digital``. ``pin_specs`` is only filled for
    layouts read from a board's capability response: one tuple of
    ``(mode, resolution)`` pairs per Firmata pin.
    """
    __slots__ = ()

    def __new__(cls, analog=(), digital=(), pwm=(), disabled=(), pin_specs=()):
        return super(BoardLayout, cls).__new__(
            cls, tuple(analog), tuple(digital), tuple(pwm), tuple(disabled),
            tuple(tuple(spec) for spec in pin_specs))

    @classmethod
    def from_dict(cls, board_dict):
        """Accepts the ``{'analog': .., 'digital': .., 'pwm': .., 'disabled': ..}`` form."""
        return cls(analog=board_dict.get('analog', ()),
                   digital=board_dict.get('digital', ()),
                   pwm=board_dict.get('pwm', ()),
                   disabled=board_dict.get('disabled', ()),
                   pin_specs=board_dict.get('pin_specs', ()))

    @classmethod
    def from_pin_specs(cls, pin_specs):
        """
        Derives a layout from parsed capability groups.

        A pin without any mode can't be used through Firmata, it's kept as a
        disabled digital pin so the numbering of the following pins holds.
        Every pin supporting a digital mode keeps its Firmata pin number as
        a digital pin. Pins that can read analog values additionally get
        analog channel numbers counted from 0, like the board itself does in
        ANALOG_MESSAGE.
        """
        analog = []
        digital = []
        pwm = []
        disabled = []
        for pin_nr, spec in enumerate(pin_specs):
            modes = set(mode for mode, _ in spec)
            if not modes:
                digital.append(pin_nr)
                disabled.append(pin_nr)
                continue
            if modes & _DIGITAL_MODES:
                digital.append(pin_nr)
                if PWM in modes:
                    pwm.append(pin_nr)
            if ANALOG in modes:
                analog.append(len(analog))
        return cls(analog, digital, pwm, disabled, pin_specs)

    def to_dict(self):
        return {
            'analog': self.analog,
            'digital': self.digital,
            'pwm': self.pwm,
            'disabled': self.disabled,
        }


BOARDS = {
    'arduino': BoardLayout(
        digital=range(14),
        analog=range(6),
        pwm=(3, 5, 6, 9, 10, 11),
        disabled=(0, 1),  # Rx, Tx, Crystal
    ),
    'arduino_nano': BoardLayout(
        digital=range(14),
        analog=range(8),
        pwm=(3, 5, 6, 9, 10, 11),
        disabled=(0, 1),
    ),
    'arduino_mega': BoardLayout(
        digital=range(54),
        analog=range(16),
        pwm=range(2, 14),
        disabled=(0, 1),
    ),
    'arduino_due': BoardLayout(
        digital=range(54),
        analog=range(12),
        pwm=range(2, 14),
        disabled=(0, 1),
    ),
}
