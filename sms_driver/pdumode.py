"""
PDU Mode Wire Format Module

In PDU mode the modem exchanges an SMSC address field followed by the
TPDU, hex encoded. An SMSC address length of zero means the modem uses
the SMSC stored on the SIM.
"""

from collections import namedtuple

from gsmmodem.pdu import encodeSemiOctets, decodeSemiOctets

from .errors import CodecError

TON_INTERNATIONAL = 0x91
TON_UNKNOWN = 0x81


def encode_smsc(number):
    """
    Encode an SMSC address field.

    Args:
        number: SMSC number (can include '+' for international), or None

    Returns:
        bytes: Length octet, type of number and swapped digits
    """
    if not number:
        return b'\x00'
    digits = ''.join(c for c in number if c.isdigit())
    ton = TON_INTERNATIONAL if number.startswith('+') else TON_UNKNOWN
    encoded = bytes(encodeSemiOctets(digits))
    return bytes([len(encoded) + 1, ton]) + encoded


def decode_smsc(data):
    """
    Split an SMSC address field from the front of a PDU.

    Args:
        data: Binary PDU as received from the modem

    Returns:
        tuple: (smsc_number or None, remaining bytes)
    """
    if not data:
        raise CodecError("empty PDU")
    length = data[0]
    if length == 0:
        return None, data[1:]
    if len(data) < length + 1:
        raise CodecError(f"SMSC address field overruns PDU ({length} octets declared)")
    ton = data[1]
    number = decodeSemiOctets(bytearray(data[2:length + 1]))
    if ton == TON_INTERNATIONAL:
        number = '+' + number
    return number, data[length + 1:]


class Pdu(namedtuple('Pdu', ['smsc', 'tpdu'])):
    """A TPDU together with the SMSC address it is routed through."""

    __slots__ = ()

    def marshal_binary(self):
        return encode_smsc(self.smsc) + bytes(self.tpdu)

    def to_hex(self):
        return self.marshal_binary().hex().upper()

    @classmethod
    def unmarshal_binary(cls, data):
        smsc, tpdu = decode_smsc(bytes(data))
        return cls(smsc, tpdu)

    @classmethod
    def from_hex(cls, text):
        """
        Parse a hex encoded PDU as emitted by the modem.

        Raises:
            CodecError: The text is not valid hex or the SMSC field is bad
        """
        try:
            data = bytes.fromhex(text.strip())
        except ValueError as e:
            raise CodecError(f"invalid PDU hex string: {e}") from e
        return cls.unmarshal_binary(data)
