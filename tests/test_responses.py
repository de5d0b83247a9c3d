""" Tests for sms_driver.responses """

import unittest

from sms_driver.errors import MalformedResponseError, MalformedNotificationError
from sms_driver.responses import parse_reference, parse_capabilities, parse_length, find_info


class TestParseReference(unittest.TestCase):

    def test_reference(self):
        self.assertEqual(parse_reference(['+CMGS: 42', 'OK']), '42')

    def test_unrelated_lines_ignored(self):
        lines = ['^RSSI: 12', '+CMGS 99', '+CMGS: 7', 'OK']
        self.assertEqual(parse_reference(lines), '7')

    def test_missing(self):
        with self.assertRaises(MalformedResponseError) as cm:
            parse_reference(['^RSSI: 12', 'OK'])
        self.assertEqual(cm.exception.prefix, '+CMGS')
        self.assertEqual(cm.exception.lines, ['^RSSI: 12', 'OK'])

    def test_find_info_none(self):
        self.assertIsNone(find_info([], '+CMGS'))


class TestParseCapabilities(unittest.TestCase):

    def test_capabilities(self):
        lines = ['+GCAP: +CGSM,+DS, +ES', 'OK']
        self.assertEqual(parse_capabilities(lines), {'+CGSM', '+DS', '+ES'})

    def test_several_lines(self):
        lines = ['+GCAP: +FCLASS', 'junk', '+GCAP: +CGSM', 'OK']
        self.assertIn('+CGSM', parse_capabilities(lines))

    def test_none(self):
        self.assertEqual(parse_capabilities(['OK']), set())


class TestParseLength(unittest.TestCase):

    def test_lengths(self):
        tests = (('+CMT: ,24', 24),
                 ('+CMT: ,,,7', 7),
                 ('+CMT: "Alice",23', 23),
                 ('+CMT: , 31', 31))
        for header, length in tests:
            self.assertEqual(parse_length(header), length, header)

    def test_not_numeric(self):
        for header in ('+CMT: ,', '+CMT: ,abc', '+CMT: 24'):
            self.assertRaises(MalformedNotificationError, parse_length, header)


if __name__ == "__main__":
    unittest.main()
