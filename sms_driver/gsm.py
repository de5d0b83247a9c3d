"""
GSM SMS Driver Module

Sends and receives SMS messages through an AT command channel, in either
PDU or text mode. Long messages are split into concatenated PDUs when
sending and reassembled when receiving.
"""

import logging

from . import sms
from .errors import NotCapableError, WrongModeError, OverlengthError, UnderlengthError, \
    LengthMismatchError, PartialSendError, ReassemblyTimeoutError
from .options import DriverConfig
from .pdumode import Pdu
from .reassembly import Reassembler
from .responses import parse_reference, parse_capabilities, parse_length

# Get logger
logger = logging.getLogger('SMSGateway')

CMT_PREFIX = '+CMT:'


class GsmDriver:
    """
    SMS functionality on top of a CommandChannel.

    Args:
        channel: CommandChannel to the modem
        config: DriverConfig, defaults to PDU mode with the SIM's SMSC
    """

    def __init__(self, channel, config=None):
        self.channel = channel
        self.config = config if config is not None else DriverConfig()
        self._reassembler = None

    def initialize(self, **init_options):
        """
        Initialise the channel, check GSM support and select the SMS mode.

        Raises:
            NotCapableError: +CGSM missing from the +GCAP reply
        """
        self.channel.init(**init_options)
        # the GCAP query also confirms the modem is in sync
        capabilities = parse_capabilities(self.channel.run_command('+GCAP'))
        if '+CGSM' not in capabilities:
            raise NotCapableError(capabilities)
        for cmd in ('+CMGF=0' if self.config.pdu_mode else '+CMGF=1',  # message format
                    '+CMEE=2'):  # textual errors
            self.channel.run_command(cmd)
        logger.info(f"Modem initialised in {self.config.mode} mode")

    def send_short(self, number, message, **command_options):
        """
        Send a message that fits in a single SMS.

        Args:
            number: Destination phone number
            message: Message text

        Returns:
            str: Message reference assigned by the modem

        Raises:
            OverlengthError: PDU mode, and the message needs several PDUs
        """
        if self.config.pdu_mode:
            tpdus = sms.encode(message, number, self.config.encoder_options)
            if len(tpdus) > 1:
                raise OverlengthError(len(tpdus))
            return self.send_pdu(tpdus[0].marshal_binary(), **command_options)
        lines = self.channel.run_prompted_command(f'+CMGS="{number}"', message, **command_options)
        mr = parse_reference(lines)
        logger.debug(f"SMS to {number} sent in text mode, reference {mr}")
        return mr

    def send_long(self, number, message, **command_options):
        """
        Send a message, split into concatenated PDUs if necessary.

        Parts are sent one after another; a part is only sent once the
        previous one has been accepted.

        Returns:
            list: Message reference of each part, in order

        Raises:
            WrongModeError: Text mode is configured
            PartialSendError: A later part failed. Earlier parts are already
                on their way and their references are in the error. A failure
                of the first part is raised unchanged.
    """
        if not self.config.pdu_mode:
            raise WrongModeError()
        tpdus = sms.encode(message, number, self.config.encoder_options)
        if len(tpdus) > 1:
            logger.info(f"Sending as multipart SMS: {len(tpdus)} parts")
        references = []
        for i, tpdu in enumerate(tpdus, 1):
            try:
                references.append(self.send_pdu(tpdu.marshal_binary(), **command_options))
            except Exception as e:
                if not references:
                    raise
                raise PartialSendError(references, i, len(tpdus)) from e
        return references

    def send_pdu(self, tpdu, **command_options):
        """
        Send a binary TPDU.

        Args:
            tpdu: TPDU octets, without SMSC address

        Returns:
            str: Message reference assigned by the modem
        """
        if not self.config.pdu_mode:
            raise WrongModeError()
        pdu = Pdu(self.config.sca, bytes(tpdu))
        lines = self.channel.run_prompted_command(f'+CMGS={len(pdu.tpdu)}', pdu.to_hex(), **command_options)
        mr = parse_reference(lines)
        logger.debug(f"PDU sent ({len(pdu.tpdu)} octets), reference {mr}")
        return mr

    def start_receiving(self, handler, error_handler):
        """
        Have the modem forward received messages to handler.

        Concatenated messages are reassembled before handler is called.

        Args:
            handler: Called as handler(number, text) for each message
            error_handler: Called with each error met while receiving

        Raises:
            WrongModeError: Text mode is configured
        """
        if not self.config.pdu_mode:
            raise WrongModeError()
        reassembler = Reassembler(timeout=self.config.reassembly_timeout)

        def cmt_handler(lines):
            self._handle_cmt(lines, reassembler, handler, error_handler)

        self.channel.register_indication(CMT_PREFIX, cmt_handler, trailing_lines=1)
        # tell the modem to forward SMS-DELIVERs via +CMT indications...
        try:
            self.channel.run_command('+CNMI=1,2,0,0,0')
        except Exception:
            self.channel.cancel_indication(CMT_PREFIX)
            raise
        self._reassembler = reassembler
        logger.info("Receiving SMS messages")

    def stop_receiving(self):
        """Stop the message reception started by start_receiving."""
        # tell the modem to stop forwarding SMSs to us.
        try:
            self.channel.run_command('+CNMI=0,0,0,0,0')
        except Exception as e:
            logger.warning(f"Failed to disable SMS forwarding: {e}")
        # and detach the handler
        self.channel.cancel_indication(CMT_PREFIX)
        self._reassembler = None
        logger.info("Stopped receiving SMS messages")

    def pending_messages(self):
        """Number of long messages still waiting for parts, 0 when not receiving."""
        reassembler = self._reassembler
        return reassembler.pending() if reassembler is not None else 0

    def _handle_cmt(self, lines, reassembler, handler, error_handler):
        try:
            tpdu = parse_notification(lines)
        except Exception as e:
            error_handler(e)
            return
        self._acknowledge()
        for key, parts in reassembler.expire():
            error_handler(ReassemblyTimeoutError(key, parts))
        try:
            tpdus = reassembler.collect(tpdu)
        except Exception as e:
            error_handler(e)
            return
        if tpdus is None:
            return
        try:
            text = sms.decode(tpdus)
        except Exception as e:
            error_handler(e)
            return
        logger.debug(f"SMS received from {tpdus[0].number} ({len(tpdus)} parts)")
        try:
            handler(tpdus[0].number, text)
        except Exception as e:
            error_handler(e)

    def _acknowledge(self):
        # failures are logged only, never passed to the error handler
        try:
            self.channel.run_command('+CNMA')
        except Exception as e:
            logger.warning(f"Failed to acknowledge SMS: {e}")


def parse_notification(lines):
    """
    Convert +CMT notification lines into the corresponding TPDU.

    Args:
        lines: Header line with trailing TPDU length, then the hex PDU

    Returns:
        Tpdu: The received TPDU

    Raises:
        UnderlengthError: Fewer than two lines
        MalformedNotificationError: The length field is not a number
        CodecError: The PDU could not be decoded
        LengthMismatchError: The TPDU length differs from the declared one
    """
    if len(lines) < 2:
        raise UnderlengthError(lines)
    length = parse_length(lines[0])
    pdu = Pdu.from_hex(lines[1])
    if length != len(pdu.tpdu):
        raise LengthMismatchError(length, len(pdu.tpdu))
    return sms.unmarshal_tpdu(pdu.tpdu)
