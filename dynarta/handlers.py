from collections import namedtuple

from .dynarta import START_SYSEX

# Arity of handlers that take everything up to END_SYSEX
SYSEX_TERMINATED = None


class FixedArity(namedtuple('FixedArity', 'bytes_needed func')):
    """
    A handler called once ``bytes_needed`` payload bytes are read. For
    channel commands the channel nibble counts as the first of them.
    """
    __slots__ = ()
    terminated = False

    def __call__(self, *data):
        return self.func(*data)


class SysexTerminated(namedtuple('SysexTerminated', 'func')):
    """A handler called with all bytes up to the closing END_SYSEX."""
    __slots__ = ()
    terminated = True
    bytes_needed = None

    def __call__(self, *data):
        return self.func(*data)


def is_channel_command(cmd):
    """Commands below START_SYSEX carry a pin or port number in their low nibble."""
    return cmd < START_SYSEX


class CommandRegistry(object):
    """Maps command bytes to the handlers consuming their payload."""

    def __init__(self):
        self._handlers = {}

    def __contains__(self, cmd):
        return cmd in self._handlers

    def __len__(self):
        return len(self._handlers)

    def register(self, cmd, func, arity=SYSEX_TERMINATED):
        """
        Adds ``func`` as handler for ``cmd``, replacing any earlier one.

        :arg arity: number of payload bytes to collect before calling
            ``func``, or ``SYSEX_TERMINATED`` to collect up to END_SYSEX.
        """
        if arity is SYSEX_TERMINATED:
            handler = SysexTerminated(func)
        elif isinstance(arity, int) and not isinstance(arity, bool) and arity >= 0:
            handler = FixedArity(arity, func)
        else:
            raise ValueError("Invalid arity {0!r} for command 0x{1:02X}".format(arity, cmd))
        self._handlers[cmd] = handler
        return handler

    def unregister(self, cmd):
        return self._handlers.pop(cmd, None)

    def lookup(self, cmd):
        """Returns the handler registered for exactly ``cmd``, or None."""
        return self._handlers.get(cmd)

    def lookup_channel(self, cmd):
        """Looks up a channel command without its channel nibble."""
        return self._handlers.get(cmd & 0xF0)
