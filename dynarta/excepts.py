class InvalidPinDefError(Exception):
    """Raised for a malformed pin definition, or one naming a missing or
    UNAVAILABLE pin."""
    pass


class PinAlreadyTakenError(Exception):
    pass


class InvalidModeError(IOError):
    """A pin was asked for a mode it can not take."""
    pass


class InvalidStateError(IOError):
    """An operation is not allowed in the pin's current mode."""
    pass


class BoardDetectionError(IOError):
    """The board never answered the capability query."""
    pass


class ProtocolError(ValueError):
    """
    An incoming frame refers to a pin or port the board doesn't have, or was
    cut short. :meth:`Board.iterate` drops frames raising this.
    """
    pass
