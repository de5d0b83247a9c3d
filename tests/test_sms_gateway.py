""" Tests for the gateway daemon helpers """

import unittest

from gsmmodem.exceptions import TimeoutException

import sms_gateway
from sms_driver import GsmDriver, DriverConfig, TEXT_MODE
from sms_driver import sms

from .fakes import FakeChannel, ChannelError


class TestBuildDriverConfig(unittest.TestCase):

    def test_from_gateway_config(self):
        config = sms_gateway.build_driver_config()
        self.assertEqual(config.mode, sms_gateway.SMS_MODE)
        self.assertEqual(config.sca, sms_gateway.SMSC_NUMBER)
        self.assertEqual(config.reassembly_timeout, sms_gateway.REASSEMBLY_TIMEOUT)
        self.assertEqual(config.encoder_options,
                         (sms.request_status_report(sms_gateway.REQUEST_STATUS_REPORT),))


class TestSendMessage(unittest.TestCase):

    def setUp(self):
        self.channel = FakeChannel()

    def test_pdu_mode(self):
        driver = GsmDriver(self.channel)
        success, message = sms_gateway.send_message(driver, '+1555123', 'x' * 200)
        self.assertTrue(success)
        self.assertEqual(len(self.channel.prompted), 2)

    def test_text_mode(self):
        driver = GsmDriver(self.channel, DriverConfig(mode=TEXT_MODE))
        success, _ = sms_gateway.send_message(driver, '+1555123', 'hi')
        self.assertTrue(success)
        self.assertEqual(self.channel.prompted, [('+CMGS="+1555123"', 'hi')])

    def test_partial_send(self):
        driver = GsmDriver(self.channel)
        self.channel.prompted_responses = [['+CMGS: 1', 'OK'], ['ERROR']]
        with self.assertLogs('SMSGateway', level='ERROR'):
            success, message = sms_gateway.send_message(driver, '+1555123', 'x' * 200)
        self.assertFalse(success)
        self.assertIn('Sent 1 of 2 parts', message)

    def test_first_part_timeout(self):
        driver = GsmDriver(self.channel)
        self.channel.prompted_responses = [TimeoutException()]
        with self.assertLogs('SMSGateway', level='WARNING'):
            success, message = sms_gateway.send_message(driver, '+1555123', 'hi')
        self.assertFalse(success)
        self.assertTrue(message.startswith('Timeout sending SMS'))

    def test_driver_error(self):
        driver = GsmDriver(self.channel, DriverConfig(mode=TEXT_MODE))
        self.channel.prompted_responses = [['OK']]
        with self.assertLogs('SMSGateway', level='ERROR'):
            success, _ = sms_gateway.send_message(driver, '+1555123', 'hi')
        self.assertFalse(success)

    def test_other_errors_propagate(self):
        driver = GsmDriver(self.channel, DriverConfig(mode=TEXT_MODE))
        self.channel.prompted_responses = [ChannelError('unexpected')]
        self.assertRaises(ChannelError, sms_gateway.send_message, driver, '+1555123', 'hi')


class TestParseArgs(unittest.TestCase):

    def test_defaults(self):
        args = sms_gateway.parse_args([])
        self.assertEqual(args.port, sms_gateway.SERIAL_PORT)
        self.assertEqual(args.baud, sms_gateway.SERIAL_BAUD)
        self.assertIsNone(args.send)
        self.assertFalse(args.once)

    def test_send(self):
        args = sms_gateway.parse_args(['--port', '/dev/ttyUSB0', '--send', '+1555123', 'hello there', '--once'])
        self.assertEqual(args.port, '/dev/ttyUSB0')
        self.assertEqual(args.send, ['+1555123', 'hello there'])
        self.assertTrue(args.once)


class TestLogging(unittest.TestCase):

    def test_received_message_logged(self):
        with self.assertLogs('SMSGateway', level='INFO') as cm:
            sms_gateway.log_message('+1555123', 'hi')
            sms_gateway.log_error(ValueError('bad'))
        self.assertEqual(cm.output, ['INFO:SMSGateway:SMS from +1555123: hi',
                                     'ERROR:SMSGateway:Receive error: bad'])


if __name__ == "__main__":
    unittest.main()
