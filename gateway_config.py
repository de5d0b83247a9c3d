"""
Configuration file for the SMS Gateway Daemon
Edit these values according to your setup
"""

# Serial Port Configuration
SERIAL_PORT = 'COM6'  # Windows: COM1, COM2, etc. | Linux: /dev/ttyUSB0, /dev/ttyACM0, etc.
SERIAL_BAUD = 9600  # Baud rate (common: 9600, 115200)
SIM_PIN = None  # PIN of the SIM card, if it is locked

# SMS Settings
SMS_MODE = 'pdu'  # Options: 'pdu' (required for long and received messages), 'text'
SMSC_NUMBER = None  # SMS centre override, e.g. '+27831000113' (PDU mode only). None uses the SIM's SMSC
REQUEST_STATUS_REPORT = False  # Ask the network for delivery reports
REASSEMBLY_TIMEOUT = 600  # Seconds to wait for missing parts of a long message. None waits forever

# Daemon Settings
POLL_INTERVAL = 20  # Time in seconds between status checks
MODEM_RESPONSE_TIMEOUT = 30  # Maximum seconds to wait for modem response

# Logging Settings
LOG_LEVEL = 'INFO'  # Options: DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_TO_CONSOLE = True  # Set to False for pure background operation
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB per log file
LOG_BACKUP_COUNT = 10  # Keep 10 backup files
