"""
Driver Configuration Module

All settings of a GsmDriver live in one DriverConfig, fixed at
construction. Changing it while sends or receives are in flight is
undefined; the driver does not guard against it.
"""

from .errors import ConfigurationError

PDU_MODE = 'pdu'
TEXT_MODE = 'text'


class DriverConfig:
    """
    Args:
        mode: PDU_MODE (default) or TEXT_MODE
        sca: SMSC address used when sending PDUs, overriding the SIM.
            Only meaningful in PDU mode: giving one with TEXT_MODE raises
            ConfigurationError instead of switching to PDU mode.
        encoder_options: Ordered encoder options (see sms_driver.sms)
        reassembly_timeout: Seconds to wait for the missing parts of a
            concatenated message, or None to wait forever
    """

    def __init__(self, mode=PDU_MODE, sca=None, encoder_options=(), reassembly_timeout=None):
        if mode not in (PDU_MODE, TEXT_MODE):
            raise ConfigurationError(f"unknown SMS mode {mode!r}")
        # An SCA only exists in PDU mode
        if sca and mode != PDU_MODE:
            raise ConfigurationError("an SCA requires PDU mode")
        if reassembly_timeout is not None and reassembly_timeout <= 0:
            raise ConfigurationError("reassembly timeout must be positive")
        self.mode = mode
        self.sca = sca or None
        self.encoder_options = tuple(encoder_options)
        self.reassembly_timeout = reassembly_timeout

    @property
    def pdu_mode(self):
        return self.mode == PDU_MODE

    def __repr__(self):
        return (f"DriverConfig(mode={self.mode!r}, sca={self.sca!r}, "
                f"encoder_options={self.encoder_options!r}, "
                f"reassembly_timeout={self.reassembly_timeout!r})")
