""" Tests for the PDU mode wire format """

import unittest

from sms_driver.errors import CodecError
from sms_driver.pdumode import Pdu, encode_smsc, decode_smsc


class TestSmsc(unittest.TestCase):

    def test_encode(self):
        tests = ((None, '00'),
                 ('', '00'),
                 ('+2782913593', '06917228195339'),
                 ('+987654321', '069189674523F1'),
                 ('12345', '04812143F5'))
        for number, expected in tests:
            self.assertEqual(encode_smsc(number).hex().upper(), expected, number)

    def test_decode(self):
        number, rest = decode_smsc(bytes.fromhex('06917228195339AABB'))
        self.assertEqual(number, '+2782913593')
        self.assertEqual(rest, b'\xaa\xbb')

    def test_decode_default(self):
        self.assertEqual(decode_smsc(b'\x00\x01'), (None, b'\x01'))

    def test_decode_overrun(self):
        self.assertRaises(CodecError, decode_smsc, bytes.fromhex('0691722819'))

    def test_decode_empty(self):
        self.assertRaises(CodecError, decode_smsc, b'')


class TestPdu(unittest.TestCase):

    def test_to_hex(self):
        pdu = Pdu('+2782913593', bytes.fromhex('0102'))
        self.assertEqual(pdu.to_hex(), '069172281953390102')
        self.assertEqual(Pdu(None, b'\x01').to_hex(), '0001')

    def test_from_hex(self):
        pdu = Pdu.from_hex('06917228195339040B91\r\n')
        self.assertEqual(pdu.smsc, '+2782913593')
        self.assertEqual(pdu.tpdu, bytes.fromhex('040B91'))

    def test_from_hex_invalid(self):
        for text in ('0G', 'ABC', 'AFSDSDF LJJ'):
            self.assertRaises(CodecError, Pdu.from_hex, text)

    def test_immutable(self):
        pdu = Pdu(None, b'\x01')
        with self.assertRaises(AttributeError):
            pdu.tpdu = b'\x02'


if __name__ == "__main__":
    unittest.main()
