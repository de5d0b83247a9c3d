"""
Concatenated SMS Reassembly Module

Collects the parts of concatenated messages, which may arrive in any
order and interleaved with parts of other messages, and releases each
message once all of its parts are present.
"""

import logging
import threading
import time

from .errors import ReassemblyError, DuplicateSegmentError

# Get logger
logger = logging.getLogger('SMSGateway')


class Reassembler:
    """
    Buffers partial messages keyed by (reference, parts, originating number).

    Args:
        timeout: Seconds a partial message may wait for its remaining
            parts, or None to wait forever
        clock: Monotonic time source
    """

    def __init__(self, timeout=None, clock=time.monotonic):
        self.timeout = timeout
        self.clock = clock
        self._lock = threading.Lock()
        self._pending = {}

    def collect(self, tpdu):
        """
        Add a received TPDU.

        Args:
            tpdu: Tpdu from an SMS-DELIVER

        Returns:
            list: All parts in order once the message is complete, else None

        Raises:
            ReassemblyError: The concatenation header is not sensible
            DuplicateSegmentError: This part was already collected
        """
        segment = tpdu.segment
        if segment is None:
            return [tpdu]
        if segment.parts < 1 or not 1 <= segment.number <= segment.parts:
            raise ReassemblyError(f"invalid part {segment.number} of {segment.parts} "
                                  f"for reference {segment.reference}")
        if segment.parts == 1:
            return [tpdu]

        key = (segment.reference, segment.parts, tpdu.number)
        with self._lock:
            entry = self._pending.get(key)
            if entry is None:
                entry = self._pending[key] = (self.clock(), {})
            parts = entry[1]
            if segment.number in parts:
                raise DuplicateSegmentError(key, segment.number)
            parts[segment.number] = tpdu
            logger.debug(f"Collected part {segment.number}/{segment.parts} of message {key}")
            if len(parts) < segment.parts:
                return None
            del self._pending[key]
        return [parts[n] for n in range(1, segment.parts + 1)]

    def expire(self):
        """
        Drop partial messages that have waited longer than the timeout.

        Returns:
            list: (key, parts collected so far) for each dropped message
        """
        if self.timeout is None:
            return []
        now = self.clock()
        expired = []
        with self._lock:
            for key, (started, parts) in list(self._pending.items()):
                if now - started >= self.timeout:
                    del self._pending[key]
                    expired.append((key, [parts[n] for n in sorted(parts)]))
        return expired

    def pending(self):
        """Number of messages still waiting for parts."""
        with self._lock:
            return len(self._pending)
