"""
SMS Driver Library
Sends and receives SMS through an AT command modem in PDU or text mode
"""

from .errors import (
    SmsDriverError, ConfigurationError, NotCapableError, WrongModeError, OverlengthError,
    UnderlengthError, MalformedResponseError, MalformedNotificationError, LengthMismatchError,
    CodecError, ReassemblyError, DuplicateSegmentError, ReassemblyTimeoutError, PartialSendError,
)
from .options import DriverConfig, PDU_MODE, TEXT_MODE
from .channel import CommandChannel, GsmModemChannel
from .gsm import GsmDriver, parse_notification
from .reassembly import Reassembler

__all__ = [
    'SmsDriverError',
    'ConfigurationError',
    'NotCapableError',
    'WrongModeError',
    'OverlengthError',
    'UnderlengthError',
    'MalformedResponseError',
    'MalformedNotificationError',
    'LengthMismatchError',
    'CodecError',
    'ReassemblyError',
    'DuplicateSegmentError',
    'ReassemblyTimeoutError',
    'PartialSendError',
    'DriverConfig',
    'PDU_MODE',
    'TEXT_MODE',
    'CommandChannel',
    'GsmModemChannel',
    'GsmDriver',
    'parse_notification',
    'Reassembler',
]
