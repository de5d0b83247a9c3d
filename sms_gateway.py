#!/usr/bin/env python3
"""
SMS Gateway Daemon - Main Module

Connects to a GSM modem, logs every SMS it receives (reassembling long
messages) and optionally sends one message given on the command line.
"""

import argparse
import logging
import os
import sys
import time
from logging.handlers import RotatingFileHandler

import serial
from gsmmodem.exceptions import TimeoutException, CmsError, CommandError

# Import configuration
from gateway_config import (
    SERIAL_PORT, SERIAL_BAUD, SIM_PIN, SMS_MODE, SMSC_NUMBER, REQUEST_STATUS_REPORT,
    REASSEMBLY_TIMEOUT, POLL_INTERVAL, MODEM_RESPONSE_TIMEOUT,
    LOG_LEVEL, LOG_TO_CONSOLE, LOG_MAX_BYTES, LOG_BACKUP_COUNT
)

# Import library modules
from sms_driver import GsmDriver, GsmModemChannel, DriverConfig, SmsDriverError, PartialSendError
from sms_driver.sms import request_status_report

logger = logging.getLogger('SMSGateway')


def setup_logging(log_dir='logs'):
    """Setup rotating file logging with UTF-8 support."""
    logger.setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO))

    # Create logs directory if it doesn't exist
    os.makedirs(log_dir, exist_ok=True)

    # Rotating file handler (supports UTF-8 for Unicode characters)
    file_handler = RotatingFileHandler(
        os.path.join(log_dir, 'gateway.log'),
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)

    # Formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Optional console handler
    if LOG_TO_CONSOLE:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO))
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def build_driver_config():
    """Create the driver configuration from gateway_config."""
    encoder_options = [request_status_report(REQUEST_STATUS_REPORT)]
    return DriverConfig(
        mode=SMS_MODE,
        sca=SMSC_NUMBER,
        encoder_options=encoder_options,
        reassembly_timeout=REASSEMBLY_TIMEOUT,
    )


def send_message(driver, number, text):
    """
    Send an SMS, as several parts if needed in PDU mode.

    Returns:
        tuple: (success: bool, message: str)
    """
    logger.debug(f"Sending SMS to {number}: {text[:50]}...")
    try:
        if driver.config.pdu_mode:
            references = driver.send_long(number, text)
        else:
            references = [driver.send_short(number, text)]
    except PartialSendError as e:
        error_msg = f"Sent {len(e.references)} of {e.total} parts, part {e.part} failed: {e.__cause__}"
        logger.error(error_msg)
        return False, error_msg
    except TimeoutException as e:
        error_msg = f"Timeout sending SMS: {str(e)}"
        logger.warning(error_msg)
        return False, error_msg
    except CmsError as e:
        error_msg = f"CMS Error {e.code}: {e}"
        logger.error(error_msg)
        return False, error_msg
    except (CommandError, SmsDriverError) as e:
        error_msg = f"Error sending SMS: {str(e)}"
        logger.error(error_msg)
        return False, error_msg

    logger.info(f"SMS sent to {number}, reference(s): {', '.join(references)}")
    return True, "SMS sent successfully"


def log_message(number, text):
    logger.info(f"SMS from {number}: {text}")


def log_error(error):
    logger.error(f"Receive error: {error}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Receive SMS messages from a GSM modem and optionally send one."
    )
    parser.add_argument("--port", default=SERIAL_PORT, help=f"Serial port (default {SERIAL_PORT})")
    parser.add_argument("--baud", type=int, default=SERIAL_BAUD, help=f"Baud rate (default {SERIAL_BAUD})")
    parser.add_argument("--send", nargs=2, metavar=("NUMBER", "TEXT"), help="Send TEXT to NUMBER after start up")
    parser.add_argument("--once", action="store_true", help="Exit after start up (and sending) instead of receiving")
    return parser.parse_args(argv)


def main(argv=None):
    """Main daemon loop."""
    args = parse_args(argv)
    setup_logging()

    logger.info("=" * 60)
    logger.info("SMS Gateway Starting")
    logger.info("=" * 60)

    channel = GsmModemChannel(args.port, args.baud, MODEM_RESPONSE_TIMEOUT)
    driver = GsmDriver(channel, build_driver_config())
    try:
        driver.initialize(pin=SIM_PIN)
    except (serial.SerialException, TimeoutException, CommandError, SmsDriverError) as e:
        logger.critical(f"Cannot initialise modem on {args.port}: {e}")
        sys.exit(1)

    receiving = False
    try:
        if driver.config.pdu_mode and not args.once:
            driver.start_receiving(log_message, log_error)
            receiving = True
        else:
            logger.info("Not receiving messages")

        if args.send:
            send_message(driver, *args.send)

        if receiving:
            logger.info(f"Waiting for messages, status every {POLL_INTERVAL} seconds...")
            while True:
                time.sleep(POLL_INTERVAL)
                logger.debug(f"{driver.pending_messages()} long message(s) awaiting parts")

    except KeyboardInterrupt:
        logger.info("Daemon stopped by user (Ctrl+C)")
    except Exception as e:
        logger.critical(f"Fatal error: {e}", exc_info=True)
    finally:
        logger.info("Closing connections...")
        if receiving:
            driver.stop_receiving()
        channel.close()
        logger.info("SMS Gateway stopped")


if __name__ == "__main__":
    main()
