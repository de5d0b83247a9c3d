"""
Modem Channel Module

CommandChannel is what the GSM driver needs from a modem: AT commands,
two-stage "prompted" commands and dispatch of unsolicited notifications.
GsmModemChannel provides it on top of python-gsmmodem's GsmModem, which
does the serial framing, timeouts and error parsing.
"""

import logging
import queue
import threading
from abc import ABC, abstractmethod

from gsmmodem.modem import GsmModem

# Get logger
logger = logging.getLogger('SMSGateway')

CTRLZ = '\x1a'


class CommandChannel(ABC):
    """Command and notification interface to an AT modem."""

    @abstractmethod
    def init(self, **options):
        """Bring the modem up (open port, reset, enter PIN, ...)."""

    @abstractmethod
    def run_command(self, command, **options):
        """
        Run one AT command.

        Args:
            command: Command without the 'AT' prefix, e.g. '+CMGF=0'

        Returns:
            list: Response lines
        """

    @abstractmethod
    def run_prompted_command(self, command, body, **options):
        """
        Run a command that answers with a '> ' prompt, then send the body.

        Returns:
            list: Response lines to the body
        """

    @abstractmethod
    def register_indication(self, prefix, handler, trailing_lines=0):
        """
        Call handler(lines) for each unsolicited line starting with prefix.

        lines holds the matching line plus the next trailing_lines lines.
        """

    @abstractmethod
    def cancel_indication(self, prefix):
        """Remove the handler registered for prefix, if any."""


class NotifyingGsmModem(GsmModem):
    """GsmModem that passes unsolicited lines on instead of handling them itself."""

    def __init__(self, port, baudrate, notification_callback, *args, **kwargs):
        self.notification_callback = notification_callback
        super().__init__(port, baudrate, *args, **kwargs)

    def _handleModemNotification(self, lines):
        self.notification_callback(lines)


class GsmModemChannel(CommandChannel):
    """
    CommandChannel over a serial GSM modem.

    Notifications are queued by the serial reader thread and dispatched
    one at a time on a worker thread, so a handler may itself run
    commands (e.g. acknowledge a message) without stalling the reader.

    Args:
        port: Serial port (e.g., 'COM6' or '/dev/ttyUSB0')
        baudrate: Baud rate (e.g., 9600, 115200)
        command_timeout: Default response timeout in seconds
        modem: Already constructed GsmModem-like object (mainly for tests)
    """

    def __init__(self, port, baudrate=115200, command_timeout=10, modem=None):
        self.port = port
        self.baudrate = baudrate
        self.command_timeout = command_timeout
        if modem is None:
            modem = NotifyingGsmModem(port, baudrate, self.queue_notification)
        self.modem = modem
        self._indications = {}
        self._lock = threading.Lock()
        # Held for a whole command exchange, prompt and body included
        self._command_lock = threading.RLock()
        self._notifications = queue.Queue()
        self._worker = None
        # Matched notification still waiting for trailing lines
        self._partial = None

    def init(self, pin=None, **options):
        logger.info(f"Connecting to modem on {self.port} at {self.baudrate} baud...")
        self.modem.connect(pin=pin, **options)
        if self._worker is None:
            self._worker = threading.Thread(target=self._run_worker, name='sms-notifications', daemon=True)
            self._worker.start()

    def close(self):
        """Stop notification dispatch and close the serial port."""
        if self._worker is not None:
            self._notifications.put(None)
            self._worker.join()
            self._worker = None
        self.modem.close()
        logger.info("Modem disconnected")

    def run_command(self, command, timeout=None):
        logger.debug(f"AT{command}")
        with self._command_lock:
            return self.modem.write('AT' + command, timeout=timeout or self.command_timeout)

    def run_prompted_command(self, command, body, timeout=None):
        logger.debug(f"AT{command} (prompted, {len(body)} chars)")
        with self._command_lock:
            self.modem.write('AT' + command, timeout=timeout or self.command_timeout, expectedResponseTermSeq='> ')
            return self.modem.write(body, timeout=timeout or self.command_timeout, writeTerm=CTRLZ)

    def register_indication(self, prefix, handler, trailing_lines=0):
        with self._lock:
            if prefix in self._indications:
                raise ValueError(f"indication {prefix} already registered")
            self._indications[prefix] = (handler, trailing_lines)

    def cancel_indication(self, prefix):
        with self._lock:
            self._indications.pop(prefix, None)
            # a header still waiting for its trailing lines goes too
            if self._partial is not None and self._partial[0] == prefix:
                self._partial = None

    def queue_notification(self, lines):
        """Called by the modem's reader thread with a group of unsolicited lines."""
        self._notifications.put(list(lines))

    def _run_worker(self):
        while True:
            lines = self._notifications.get()
            if lines is None:
                return
            try:
                self.dispatch(lines)
            except Exception:
                logger.exception(f"Notification handler failed for {lines!r}")

    def dispatch(self, lines):
        """
        Hand unsolicited lines to the registered handlers.

        A notification whose trailing lines have not arrived yet is
        completed by the first lines of the next call.
        """
        for line in lines:
            with self._lock:
                ready = self._collect_line(line)
            if ready is not None:
                handler, group = ready
                handler(group)

    def _collect_line(self, line):
        # Called with self._lock held. Returns (handler, lines) once a
        # notification is complete.
        if self._partial is not None:
            prefix, handler, group, remaining = self._partial
            group.append(line)
            if remaining > 1:
                self._partial = (prefix, handler, group, remaining - 1)
                return None
            self._partial = None
            return handler, group
        for prefix, (handler, trailing_lines) in self._indications.items():
            if line.startswith(prefix):
                if trailing_lines:
                    self._partial = (prefix, handler, [line], trailing_lines)
                    return None
                return handler, [line]
        logger.debug(f"Ignoring unsolicited line: {line!r}")
        return None
