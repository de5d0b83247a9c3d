"""
SMS Codec Module

Thin layer over gsmmodem.pdu: encodes text into SMS-SUBMIT TPDUs (split
into concatenated parts when needed) and decodes received TPDUs back
into text.
"""

import random
from collections import namedtuple

from gsmmodem.exceptions import EncodingError
from gsmmodem.pdu import encodeSmsSubmitPdu, decodeSmsPdu, Concatenation

from .errors import CodecError

# Concatenation header of one part: reference shared by all parts,
# total number of parts and the 1-based number of this part
Segment = namedtuple('Segment', ['reference', 'parts', 'number'])

ENCODER_OPTIONS = ('reference', 'validity', 'requestStatusReport', 'rejectDuplicates', 'sendFlash')


class Tpdu(namedtuple('Tpdu', ['data', 'type', 'number', 'text', 'segment'])):
    """
    One SMS TPDU.

    data is the binary TPDU (without SMSC field). number is the
    originating address for SMS-DELIVER and the destination address for
    SMS-SUBMIT. segment is None unless the TPDU is part of a
    concatenated message.
    """

    __slots__ = ()

    def marshal_binary(self):
        return self.data


def unmarshal_tpdu(data):
    """
    Decode a binary TPDU.

    Args:
        data: TPDU octets, without the SMSC address field

    Returns:
        Tpdu: The decoded TPDU

    Raises:
        CodecError: The octets are not a valid TPDU
    """
    data = bytes(data)
    try:
        # decodeSmsPdu expects the SMSC field; a zero length one is empty
        fields = decodeSmsPdu(bytearray(b'\x00' + data))
    except (EncodingError, StopIteration, ValueError, IndexError) as e:
        raise CodecError(f"invalid TPDU {data.hex().upper()}: {e!r}") from e
    segment = None
    for ie in fields.get('udh') or ():
        if isinstance(ie, Concatenation):
            segment = Segment(ie.reference, ie.parts, ie.number)
            break
    return Tpdu(data, fields.get('type'), fields.get('number'), fields.get('text'), segment)


def encode(message, number, options=()):
    """
    Encode a text message into one or more SMS-SUBMIT TPDUs.

    GSM 7-bit is used when every character fits, UCS2 otherwise. Long
    messages are split into parts carrying a concatenation header.

    Args:
        message: Message text
        number: Destination phone number
        options: Ordered (name, value) encoder options; later ones win

    Returns:
        list: Tpdu for each part, in part order
    """
    kwargs = {'reference': random.randint(0, 255), 'requestStatusReport': False}
    for name, value in options:
        if name not in ENCODER_OPTIONS:
            raise ValueError(f"unknown encoder option {name!r}")
        kwargs[name] = value
    tpdus = []
    for pdu in encodeSmsSubmitPdu(number, message, **kwargs):
        data = bytes(pdu.data)
        tpdus.append(unmarshal_tpdu(data[len(data) - pdu.tpduLength:]))
    return tpdus


def decode(tpdus):
    """
    Decode the ordered parts of a message into its text.

    Raises:
        CodecError: No parts were given or a part carries no text
    """
    if not tpdus:
        raise CodecError("no TPDUs to decode")
    texts = []
    for tpdu in tpdus:
        if tpdu.text is None:
            raise CodecError(f"{tpdu.type} TPDU carries no user data")
        texts.append(tpdu.text)
    return ''.join(texts)


# Encoder options, applied in order by encode()

def reference(ref):
    """Use a fixed message (and concatenation) reference instead of a random one."""
    return ('reference', ref)


def validity(period):
    """Validity period: a timedelta (relative) or datetime (absolute)."""
    return ('validity', period)


def request_status_report(flag=True):
    return ('requestStatusReport', flag)


def reject_duplicates(flag=True):
    return ('rejectDuplicates', flag)


def send_flash(flag=True):
    return ('sendFlash', flag)
