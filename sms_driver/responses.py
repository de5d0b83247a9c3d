"""
Response Parsing Module

Extracts fields from modem response and notification lines. Lines that
do not carry the wanted prefix are skipped, since unsolicited messages
(e.g. ^RSSI) can be interleaved with command replies.
"""

from .errors import MalformedResponseError, MalformedNotificationError


def has_prefix(line, prefix):
    """Check if a line is an information line for the given command, e.g. '+CMGS: 12'."""
    return line.startswith(prefix + ':')


def trim_prefix(line, prefix):
    """
    Strip the command prefix and separator from an information line.

    Args:
        line: Response line, e.g. '+CMGS: 42'
        prefix: Command prefix, e.g. '+CMGS'

    Returns:
        str: The information text, e.g. '42'
    """
    return line[len(prefix) + 1:].strip()


def find_info(lines, prefix):
    """
    Find the first information line for a command.

    Returns:
        str: Information text, or None if no line carries the prefix
    """
    for line in lines:
        if has_prefix(line, prefix):
            return trim_prefix(line, prefix)
    return None


def parse_reference(lines, prefix='+CMGS'):
    """
    Get the message reference from the reply to a send command.

    Args:
        lines: Response lines returned by the channel
        prefix: Result line prefix

    Returns:
        str: The message reference

    Raises:
        MalformedResponseError: No well formed result line was found
    """
    info = find_info(lines, prefix)
    if info is None:
        raise MalformedResponseError(prefix, lines)
    return info


def parse_capabilities(lines):
    """Collect the capability tokens from all +GCAP lines."""
    capabilities = set()
    for line in lines:
        if has_prefix(line, '+GCAP'):
            for cap in trim_prefix(line, '+GCAP').split(','):
                capabilities.add(cap.strip())
    return capabilities


def parse_length(header):
    """
    Get the trailing length field of a PDU mode notification header.

    Args:
        header: Header line, e.g. '+CMT: ,24' or '+CMT: "alpha",24'

    Returns:
        int: Declared TPDU length in octets
    """
    field = header.split(',')[-1].strip()
    try:
        return int(field)
    except ValueError as e:
        raise MalformedNotificationError(f"invalid length field {field!r} in {header!r}") from e
