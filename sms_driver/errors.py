"""
Driver Exceptions

Errors raised by the SMS driver. Errors coming from the modem channel or
from gsmmodem are passed through unchanged, except where noted.
"""


class SmsDriverError(Exception):
    """Base class for all SMS driver errors."""


class ConfigurationError(SmsDriverError):
    """The driver configuration is inconsistent."""


class NotCapableError(SmsDriverError):
    """The modem does not advertise the GSM command set in its +GCAP reply."""

    def __init__(self, capabilities=()):
        self.capabilities = tuple(capabilities)
        super().__init__("modem is not GSM capable")


class WrongModeError(SmsDriverError):
    """The operation is not supported in the configured SMS mode."""

    def __init__(self, message="modem is in the wrong mode"):
        super().__init__(message)


class OverlengthError(SmsDriverError):
    """The message needs more than one PDU."""

    def __init__(self, parts):
        self.parts = parts
        super().__init__(f"message too long for one SMS ({parts} parts needed)")


class UnderlengthError(SmsDriverError):
    """Too few lines were provided to decode a PDU."""

    def __init__(self, lines):
        self.lines = list(lines)
        super().__init__(f"insufficient info: expected 2 lines, got {len(self.lines)}")


class MalformedResponseError(SmsDriverError):
    """The modem reply lacks the expected result line."""

    def __init__(self, prefix, lines):
        self.prefix = prefix
        self.lines = list(lines)
        super().__init__(f"modem returned malformed response: no {prefix} line in {self.lines}")


class MalformedNotificationError(SmsDriverError):
    """An unsolicited notification header could not be parsed."""


class LengthMismatchError(SmsDriverError):
    """The declared TPDU length differs from the decoded one."""

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f"length mismatch - expected {expected}, got {actual}")


class CodecError(SmsDriverError):
    """Hex, address or TPDU decoding failed."""


class ReassemblyError(SmsDriverError):
    """A TPDU cannot be placed in a concatenated message."""


class DuplicateSegmentError(ReassemblyError):
    """A part of a concatenated message arrived twice."""

    def __init__(self, key, part):
        self.key = key
        self.part = part
        super().__init__(f"duplicate part {part} for message {key}")


class ReassemblyTimeoutError(ReassemblyError):
    """A concatenated message did not complete in time."""

    def __init__(self, key, tpdus):
        self.key = key
        self.tpdus = list(tpdus)
        super().__init__(f"message {key} expired with {len(self.tpdus)} of {key[1]} parts")


class PartialSendError(SmsDriverError):
    """
    Sending a concatenated message failed part way through.

    The parts before the failing one have already been sent, and their
    message references are available in ``references``.
    """

    def __init__(self, references, part, total):
        self.references = list(references)
        self.part = part
        self.total = total
        super().__init__(f"failed to send part {part} of {total} "
                         f"({len(self.references)} parts already sent)")
