""" Tests for DriverConfig """

import unittest

from sms_driver import sms
from sms_driver.errors import ConfigurationError
from sms_driver.options import DriverConfig, PDU_MODE, TEXT_MODE


class TestDriverConfig(unittest.TestCase):

    def test_defaults(self):
        config = DriverConfig()
        self.assertEqual(config.mode, PDU_MODE)
        self.assertTrue(config.pdu_mode)
        self.assertIsNone(config.sca)
        self.assertEqual(config.encoder_options, ())
        self.assertIsNone(config.reassembly_timeout)

    def test_text_mode(self):
        self.assertFalse(DriverConfig(mode=TEXT_MODE).pdu_mode)

    def test_sca(self):
        config = DriverConfig(sca='+2782913593')
        self.assertEqual(config.sca, '+2782913593')
        self.assertTrue(config.pdu_mode)

    def test_sca_requires_pdu_mode(self):
        self.assertRaises(ConfigurationError, DriverConfig, mode=TEXT_MODE, sca='+2782913593')

    def test_unknown_mode(self):
        self.assertRaises(ConfigurationError, DriverConfig, mode='binary')

    def test_bad_timeout(self):
        self.assertRaises(ConfigurationError, DriverConfig, reassembly_timeout=0)

    def test_encoder_options_kept_in_order(self):
        options = [sms.request_status_report(), sms.reference(3)]
        config = DriverConfig(encoder_options=options)
        options.append(sms.send_flash())
        self.assertEqual(config.encoder_options, (('requestStatusReport', True), ('reference', 3)))


if __name__ == "__main__":
    unittest.main()
