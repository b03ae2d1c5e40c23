import logging
import time

from .boards import BOARDS, BoardLayout
from .discovery import CapabilityDiscovery
from .dynarta import (ANALOG_MESSAGE, BOARD_SETUP_WAIT_TIME, DEFAULT_BAUDRATE, DIGITAL,
                      DIGITAL_MESSAGE, DISCOVERY_TIMEOUT, END_SYSEX, INPUT, OUTPUT, PWM,
                      QUERY_FIRMWARE, REPORT_FIRMWARE, REPORT_VERSION, SAMPLING_INTERVAL, SERVO,
                      SERVO_CONFIG, SERVO_MAX_PULSE, SERVO_MIN_PULSE, START_SYSEX, STRING_DATA,
                      UNAVAILABLE)
from .excepts import InvalidModeError, InvalidPinDefError, PinAlreadyTakenError, ProtocolError
from .handlers import SYSEX_TERMINATED, CommandRegistry, is_channel_command
from .pin import Pin
from .port import Port
from .transport import SerialTransport
from .util import (frame_sysex, from_two_bytes, scale_analog, str_to_two_byte_iter,
                   to_two_bytes, two_byte_iter_to_str)

logger = logging.getLogger(__name__)

PIN_ROLES = {'i': INPUT, 'o': OUTPUT, 'p': PWM, 's': SERVO}


class Board(object):
    """The Base class for any board."""
    firmata_version = None
    firmware = None
    firmware_version = None

    def __init__(self, port, layout=None, baudrate=DEFAULT_BAUDRATE, name=None, timeout=None,
                 transport=None, setup_wait_time=BOARD_SETUP_WAIT_TIME,
                 discovery_timeout=DISCOVERY_TIMEOUT):
        """
        :arg port: device path of the serial port, e.g. ``/dev/ttyACM0``.
        :arg layout: a :class:`BoardLayout`, an equivalent dict or the name
            of one of the ``BOARDS``. Asks the board itself when left out.
        :arg transport: an already open transport to use instead of opening
            ``port`` with pyserial.
        """
        if transport is None:
            transport = SerialTransport(port, baudrate, timeout=timeout)
        self.transport = transport
        self.port = port
        self.name = name
        if not self.name:
            self.name = port

        self.analog = []
        self.digital = []
        self.digital_ports = []
        self.taken = {'analog': {}, 'digital': {}}
        self.string_data = []
        self._command_handlers = CommandRegistry()
        self._layout = None
        self._closed = False
        # Command byte that ended an interrupted frame, read first by iterate
        self._pending = None

        # Allow 5 secs for Arduino's auto-reset to happen
        # Alas, Firmata blinks its version before printing it to serial
        # For 2.3, even 5 seconds might not be enough.
        self.pass_time(setup_wait_time)

        try:
            if layout:
                self.setup_layout(layout)
            else:
                self.auto_setup(discovery_timeout)
        except Exception:
            self.exit()
            raise

        # Iterate over the first messages to get firmware data
        while self.bytes_available():
            self.iterate()

    def __str__(self):
        return "Board {0.name} on {0.port}".format(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.exit()

    def send_as_two_bytes(self, val):
        self.transport.write_bytes(to_two_bytes(val))

    def setup_layout(self, board_layout):
        """
        Setup the Pin instances based on the given board layout.
        """
        if isinstance(board_layout, str):
            board_layout = BOARDS[board_layout]
        elif not isinstance(board_layout, BoardLayout):
            board_layout = BoardLayout.from_dict(board_layout)
        self._layout = board_layout

        # Create pin instances based on board layout
        self.analog = []
        for i in board_layout.analog:
            self.analog.append(Pin(self, i))

        # Ports cover every pin number up to the highest digital one
        num_digital = max(board_layout.digital) + 1 if board_layout.digital else 0
        self.digital = []
        self.digital_ports = []
        for i in range(0, num_digital, 8):
            num_pins = min(8, num_digital - i)
            self.digital_ports.append(Port(self, i // 8, num_pins))

        # Allow to access the Pin instances directly
        for port in self.digital_ports:
            self.digital += port.pins

        # Setup PWM pins
        for i in board_layout.pwm:
            self.digital[i].pwm_capable = True

        # Disable certain ports like Rx/Tx and crystal ports
        unavailable = set(range(num_digital)) - set(board_layout.digital)
        unavailable.update(board_layout.disabled)
        for i in unavailable:
            self.digital[i].mode = UNAVAILABLE

        # Create a dictionary of 'taken' pins. Used by the get_pin method
        self.taken = {'analog': dict((p.pin_number, False) for p in self.analog),
                      'digital': dict((p.pin_number, False) for p in self.digital)}

        self._set_default_handlers()
        logger.info("%s set up with %d analog and %d digital pins",
                    self, len(self.analog), len(self.digital))

    def _set_default_handlers(self):
        # Setup default handlers for standard incoming commands
        self.add_cmd_handler(ANALOG_MESSAGE, self._handle_analog_message, 3)
        self.add_cmd_handler(DIGITAL_MESSAGE, self._handle_digital_message, 3)
        self.add_cmd_handler(REPORT_VERSION, self._handle_report_version, 2)
        self.add_cmd_handler(REPORT_FIRMWARE, self._handle_report_firmware)
        self.add_cmd_handler(STRING_DATA, self._handle_string_data)

    def auto_setup(self, timeout=DISCOVERY_TIMEOUT):
        """
        Automatic setup based on Firmata's "Capability Query"
        """
        # Version and firmware reports may arrive before the capability response
        self._set_default_handlers()
        discovery = CapabilityDiscovery(self)
        layout = discovery.run(timeout)
        self.setup_layout(layout)
        discovery.bootstrapped()

    def add_cmd_handler(self, cmd, func, arity=SYSEX_TERMINATED):
        """
        Adds a command handler for a command.

        :arg arity: how many data bytes ``func`` takes (including the
            channel for commands below START_SYSEX), or ``SYSEX_TERMINATED``
            for handlers taking everything up to END_SYSEX.
        """
        return self._command_handlers.register(cmd, func, arity)

    def get_pin(self, pin_def):
        """
        Returns the activated pin given by the pin definition.
        May raise an ``InvalidPinDefError`` or a ``PinAlreadyTakenError``.

        :arg pin_def: Pin definition as described below,
            but without the arduino name. So for example ``a:1:i``.

        'a' analog pin     Pin number   'i' for input
        'd' digital pin    Pin number   'o' for output
                                        'p' for pwm (Pulse-width modulation)
                                        's' for servo

        All seperated by ``:``.
        """
        if isinstance(pin_def, (list, tuple)):
            bits = list(pin_def)
        else:
            bits = pin_def.split(':')
        if len(bits) != 3 or bits[0] not in ('a', 'd') or bits[2] not in PIN_ROLES:
            raise InvalidPinDefError('Invalid pin definition: {0} on {1}'
                                     .format(pin_def, self.name))
        a_d = bits[0] == 'a' and 'analog' or 'digital'
        part = getattr(self, a_d)
        try:
            pin_nr = int(bits[1])
        except ValueError:
            raise InvalidPinDefError('Invalid pin number in definition: {0} on {1}'
                                     .format(pin_def, self.name))
        if pin_nr < 0 or pin_nr >= len(part):
            raise InvalidPinDefError('Invalid pin definition: {0} at position 3 on {1}'
                                     .format(pin_def, self.name))
        pin = part[pin_nr]
        if pin.mode == UNAVAILABLE:
            raise InvalidPinDefError('Invalid pin definition: '
                                     'UNAVAILABLE pin {0} at position on {1}'
                                     .format(pin_def, self.name))
        if self.taken[a_d][pin.pin_number]:
            raise PinAlreadyTakenError('{0} pin {1} is already taken on {2}'
                                       .format(a_d, bits[1], self.name))
        # ok, should be available
        if pin.type == DIGITAL:
            role = PIN_ROLES[bits[2]]
            if role != OUTPUT:
                pin.mode = role
        elif bits[2] != 'i':
            raise InvalidPinDefError('Analog pins can only be inputs: {0} on {1}'
                                     .format(pin_def, self.name))
        else:
            pin.enable_reporting()
        self.taken[a_d][pin.pin_number] = True
        return pin

    def pass_time(self, t):
        """Non-blocking time-out for ``t`` seconds."""
        cont = time.time() + t
        while time.time() < cont:
            time.sleep(0)

    def send_sysex(self, sysex_cmd, data):
        """
        Sends a SysEx msg.

        :arg sysex_cmd: A sysex command byte
        :arg data: a bytearray of 7-bit bytes of arbitrary data
        """
        self.transport.write_bytes(frame_sysex(sysex_cmd, data))

    def bytes_available(self):
        pending = 1 if self._pending is not None else 0
        return self.transport.bytes_available() + pending

    def _next_byte(self):
        if self._pending is not None:
            byte, self._pending = self._pending, None
            return byte
        return self.transport.read_byte()

    def _read_byte(self):
        """
        Reads a data byte of the current frame. A command byte showing up
        instead means the frame was cut short; it's kept for the next
        :meth:`iterate`.
        """
        byte = self.transport.read_byte()
        if byte is None:
            raise ProtocolError("frame cut short")
        if byte == END_SYSEX:
            # Stray or empty SysEx end, nothing to resume from
            raise ProtocolError("unexpected END_SYSEX")
        if byte & 0x80:
            self._pending = byte
            raise ProtocolError("frame interrupted by command 0x{0:02X}".format(byte))
        return byte

    def _read_sysex_data(self):
        data = []
        while True:
            byte = self.transport.read_byte()
            if byte is None:
                raise ProtocolError("frame cut short")
            if byte == END_SYSEX:
                return data
            if byte & 0x80:
                self._pending = byte
                raise ProtocolError("SysEx interrupted by command 0x{0:02X}".format(byte))
            data.append(byte)

    def _read_frame(self, command):
        """
        Collects the payload of the frame starting with ``command``. Returns
        the handler and its arguments, the handler is None for unknown
        commands.
        """
        received_data = []
        if is_channel_command(command):
            # These commands can have 'channel data' like a pin nummber appended.
            handler = self._command_handlers.lookup_channel(command)
            if handler is None:
                return None, received_data
            received_data.append(command & 0x0F)
        elif command == START_SYSEX:
            command = self._read_byte()
            handler = self._command_handlers.lookup(command)
            # Unknown SysEx messages are read up to the end as well, so the
            # stream stays in sync
            return handler, self._read_sysex_data()
        else:
            handler = self._command_handlers.lookup(command)
            if handler is None:
                return None, received_data

        if handler.terminated:
            received_data.extend(self._read_sysex_data())
        else:
            while len(received_data) < handler.bytes_needed:
                received_data.append(self._read_byte())
        return handler, received_data

    def iterate(self):
        """
        Reads and handles data from the microcontroller over the serial port.
        This method should be called in a main loop to keep this boards pin
        values up to date.
        """
        data = self._next_byte()
        if data is None:
            return
        try:
            handler, received_data = self._read_frame(data)
            if handler is None:
                logger.debug("No handler for command 0x%02X, frame dropped", data)
                return
            handler(*received_data)
        except ValueError as e:
            logger.debug("Dropped frame for command 0x%02X: %s", data, e)

    def get_firmata_version(self):
        """
        Returns a version tuple (major, minor) for the firmata firmware on the
        board.
        """
        return self.firmata_version

    def query_firmware(self):
        """Asks the board to report its firmware name and version."""
        self.send_sysex(QUERY_FIRMWARE, [])

    def set_sampling_interval(self, interval):
        """Sets how often the board samples its inputs, in milliseconds."""
        self.send_sysex(SAMPLING_INTERVAL, to_two_bytes(interval))

    def send_string(self, text):
        """Sends ``text`` to the board as STRING_DATA."""
        self.send_sysex(STRING_DATA, str_to_two_byte_iter(text))

    def servo_config(self, pin, min_pulse=SERVO_MIN_PULSE, max_pulse=SERVO_MAX_PULSE, angle=0):
        """
        Configure a pin as servo with min_pulse, max_pulse and first angle.
        ``min_pulse`` and ``max_pulse`` default to the arduino defaults.
        """
        if pin < 0 or pin >= len(self.digital) or self.digital[pin].mode == UNAVAILABLE:
            raise InvalidModeError("Pin {0} is not a valid servo pin".format(pin))

        data = bytearray([pin])
        data += to_two_bytes(min_pulse)
        data += to_two_bytes(max_pulse)
        self.send_sysex(SERVO_CONFIG, data)

        # set pin._mode to SERVO so that it sends analog messages
        # don't set pin.mode as that calls this method
        self.digital[pin]._mode = SERVO
        self.digital[pin].value = None
        self.digital[pin].write(angle)

    def exit(self):
        """Call this to exit cleanly."""
        if self._closed:
            return
        # First detach all servo's, otherwise it somehow doesn't want to close...
        try:
            for pin in self.digital:
                if pin.mode == SERVO:
                    pin.mode = OUTPUT
        finally:
            self._closed = True
            self.transport.close()

    # Command handlers
    def _handle_analog_message(self, pin_nr, lsb, msb):
        value = scale_analog(from_two_bytes(lsb, msb))
        try:
            pin = self.analog[pin_nr]
        except IndexError:
            raise ProtocolError("no analog pin {0}".format(pin_nr))
        # Only set the value if we are actually reporting
        if pin.reporting:
            pin.value = value

    def _handle_digital_message(self, port_nr, lsb, msb):
        """
        Digital messages always go by the whole port. This means we have a
        bitmask which we update the port.
        """
        mask = from_two_bytes(lsb, msb)
        try:
            port = self.digital_ports[port_nr]
        except IndexError:
            raise ProtocolError("no digital port {0}".format(port_nr))
        port.update(mask)

    def _handle_report_version(self, major, minor):
        self.firmata_version = (major, minor)

    def _handle_report_firmware(self, *data):
        if len(data) < 2:
            raise ProtocolError("firmware report without version")
        self.firmware_version = (data[0], data[1])
        self.firmware = two_byte_iter_to_str(data[2:])
        logger.info("%s runs %s %d.%d", self, self.firmware, data[0], data[1])

    def _handle_string_data(self, *data):
        text = two_byte_iter_to_str(data)
        self.string_data.append(text)
        logger.info("%s: %s", self, text)
