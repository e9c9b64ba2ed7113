#!/usr/bin/env python3
"""
Tests for the public and private key blobs and the key material adapter.
"""

import unittest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from cryptography.hazmat.primitives.asymmetric import ec, rsa

from puttykey.blobs import (
    RsaKeyMaterial,
    build_public_blob,
    build_private_blob,
    int_to_magnitude,
)
from puttykey.errors import InvalidKeyMaterialError, MissingKeyMaterialError
from puttykey.wire import iter_fields


# p=241, q=233, e=65537, d=9473, iqmp=30
TOY_PUBLIC_BLOB = bytes.fromhex(
    '00000007' '7373682d727361'
    '00000003' '010001'
    '00000003' '00db59'
)
TOY_PRIVATE_BLOB = bytes.fromhex(
    '00000003' '002501'
    '00000002' '00f1'
    '00000002' '00e9'
    '00000002' '001e'
)


class TestPublicBlob(unittest.TestCase):

    def test_toy_key_layout(self):
        """Modulus 0xdb59 has its high bit set and gets padded; 0x010001 does not."""
        blob = build_public_blob(b'\x01\x00\x01', b'\xdb\x59')
        self.assertEqual(blob, TOY_PUBLIC_BLOB)

    def test_textbook_key_no_padding(self):
        blob = build_public_blob(b'\x11', b'\x0c\xa1')
        expected = bytes.fromhex('00000007' '7373682d727361' '00000001' '11' '00000002' '0ca1')
        self.assertEqual(blob, expected)

    def test_empty_magnitudes(self):
        """Degenerate key still produces three well-formed fields."""
        blob = build_public_blob(b'', b'')
        self.assertEqual(blob, b'\x00\x00\x00\x07ssh-rsa' + b'\x00' * 8)

    def test_none_magnitudes_are_degenerate(self):
        self.assertEqual(build_public_blob(None, None), build_public_blob(b'', b''))

    def test_non_bytes_rejected(self):
        with self.assertRaises(InvalidKeyMaterialError):
            build_public_blob(65537, b'\xdb\x59')

    def test_length_prefix_integrity(self):
        """Walking the prefixes consumes the whole blob exactly."""
        modulus = b'\xc3' + b'\x5a' * 255
        blob = build_public_blob(b'\x01\x00\x01', modulus)
        fields = [body for _, body in iter_fields(blob)]
        self.assertEqual(fields, [b'ssh-rsa', b'\x01\x00\x01', b'\x00' + modulus])
        self.assertEqual(sum(4 + len(f) for f in fields), len(blob))


class TestPrivateBlob(unittest.TestCase):

    def test_toy_key_layout(self):
        blob = build_private_blob(b'\x25\x01', b'\xf1', b'\xe9', b'\x1e')
        self.assertEqual(blob, TOY_PRIVATE_BLOB)

    def test_forced_padding_on_every_field(self):
        """Each field gains exactly one zero byte, high bit or not."""
        values = [b'\x7f\x01', b'\x80\x02', b'\x01', b'\xff\xff\xff']
        blob = build_private_blob(*values)
        fields = [body for _, body in iter_fields(blob)]
        self.assertEqual(fields, [b'\x00' + v for v in values])

    def test_field_order(self):
        blob = build_private_blob(b'\x01', b'\x02', b'\x03', b'\x04')
        self.assertEqual([body for _, body in iter_fields(blob)],
                         [b'\x00\x01', b'\x00\x02', b'\x00\x03', b'\x00\x04'])

    def test_missing_d(self):
        with self.assertRaises(MissingKeyMaterialError) as ctx:
            build_private_blob(None, b'\xf1', b'\xe9', b'\x1e')
        self.assertEqual(ctx.exception.missing, ('d',))

    def test_missing_several(self):
        with self.assertRaises(MissingKeyMaterialError) as ctx:
            build_private_blob(b'\x25\x01', None, b'\xe9', None)
        self.assertEqual(ctx.exception.missing, ('p', 'inverse_q'))
        self.assertIn('inverse_q', str(ctx.exception))

    def test_non_bytes_rejected(self):
        with self.assertRaises(InvalidKeyMaterialError):
            build_private_blob(b'\x25\x01', 241, b'\xe9', b'\x1e')


class TestIntToMagnitude(unittest.TestCase):

    def test_minimal_big_endian(self):
        self.assertEqual(int_to_magnitude(65537), b'\x01\x00\x01')
        self.assertEqual(int_to_magnitude(0xdb59), b'\xdb\x59')

    def test_zero_is_empty(self):
        self.assertEqual(int_to_magnitude(0), b'')

    def test_negative_rejected(self):
        with self.assertRaises(InvalidKeyMaterialError):
            int_to_magnitude(-1)

    def test_non_int_rejected(self):
        with self.assertRaises(InvalidKeyMaterialError):
            int_to_magnitude(b'\x01')


class TestRsaKeyMaterial(unittest.TestCase):

    def test_from_numbers_computes_iqmp(self):
        material = RsaKeyMaterial.from_numbers(e=65537, n=241 * 233, d=9473, p=241, q=233)
        self.assertEqual(material.exponent, b'\x01\x00\x01')
        self.assertEqual(material.modulus, b'\xdb\x59')
        self.assertEqual(material.d, b'\x25\x01')
        self.assertEqual(material.p, b'\xf1')
        self.assertEqual(material.q, b'\xe9')
        self.assertEqual(material.inverse_q, b'\x1e')
        self.assertTrue(material.has_private)

    def test_public_only(self):
        material = RsaKeyMaterial(exponent=b'\x01\x00\x01', modulus=b'\xdb\x59')
        self.assertFalse(material.has_private)

    def test_bytearray_copied_to_bytes(self):
        """Later changes to the caller's buffer do not leak into the material."""
        modulus = bytearray(b'\xdb\x59')
        material = RsaKeyMaterial(exponent=b'\x01\x00\x01', modulus=modulus)
        modulus[0] = 0
        self.assertEqual(material.modulus, b'\xdb\x59')
        self.assertIsInstance(material.modulus, bytes)

    def test_rejects_non_bytes(self):
        with self.assertRaises(InvalidKeyMaterialError):
            RsaKeyMaterial(exponent=65537, modulus=b'\xdb\x59')

    def test_from_private_key(self):
        key = rsa.generate_private_key(public_exponent=65537, key_size=1024)
        numbers = key.private_numbers()
        material = RsaKeyMaterial.from_private_key(key)
        self.assertEqual(int.from_bytes(material.modulus, 'big'), numbers.public_numbers.n)
        self.assertEqual(int.from_bytes(material.exponent, 'big'), 65537)
        self.assertEqual(int.from_bytes(material.d, 'big'), numbers.d)
        self.assertEqual(int.from_bytes(material.p, 'big'), numbers.p)
        self.assertEqual(int.from_bytes(material.q, 'big'), numbers.q)
        self.assertEqual(int.from_bytes(material.inverse_q, 'big'), numbers.iqmp)
        self.assertEqual(numbers.iqmp * numbers.q % numbers.p, 1)

    def test_from_private_key_rejects_ec(self):
        key = ec.generate_private_key(ec.SECP256R1())
        with self.assertRaises(InvalidKeyMaterialError):
            RsaKeyMaterial.from_private_key(key)


if __name__ == "__main__":
    unittest.main(verbosity=2)
