import os
import struct
import base64
import hashlib
import hmac

# Toy RSA key: p=241, q=233, e=65537. Small enough to check by hand,
# and the modulus has its high bit set so the public mpint gets padded.
TEST_KEY = {
    'e': bytes.fromhex('010001'),
    'n': bytes.fromhex('db59'),
    'd': bytes.fromhex('2501'),
    'p': bytes.fromhex('f1'),
    'q': bytes.fromhex('e9'),
    'iqmp': bytes.fromhex('1e'),
}
TEST_COMMENT = 'test'


def ssh_string(data: bytes) -> bytes:
    return struct.pack('>I', len(data)) + data


def ssh_mpint(data: bytes, force: bool = False) -> bytes:
    if data and (force or data[0] & 0x80):
        data = b'\x00' + data
    return ssh_string(data)


def reference_ppk(key: dict, comment: str) -> str:
    public_blob = ssh_string(b'ssh-rsa') + ssh_mpint(key['e']) + ssh_mpint(key['n'])
    private_blob = b''.join(ssh_mpint(key[k], force=True) for k in ('d', 'p', 'q', 'iqmp'))

    macdata = b''
    for s in [b'ssh-rsa', b'none', comment.encode('utf-8'), public_blob, private_blob]:
        macdata += ssh_string(s)
    mac_key = hashlib.sha1(b'putty-private-key-file-mac-key').digest()
    mac = hmac.new(mac_key, macdata, hashlib.sha1).hexdigest()

    public_repr = base64.b64encode(public_blob).decode('ascii')
    private_repr = base64.b64encode(private_blob).decode('ascii')

    out = 'PuTTY-User-Key-File-2: ssh-rsa\r\n'
    out += 'Encryption: none\r\n'
    out += f'Comment: {comment}\r\n'
    out += f'Public-Lines: {(len(public_repr) + 63) // 64}\r\n'
    for i in range(0, len(public_repr), 64):
        out += public_repr[i:i + 64] + '\r\n'
    out += f'Private-Lines: {(len(private_repr) + 63) // 64}\r\n'
    for i in range(0, len(private_repr), 64):
        out += private_repr[i:i + 64] + '\r\n'
    out += f'Private-MAC: {mac}\r\n'
    return out


def main():
    os.makedirs('testdata', exist_ok=True)
    path = os.path.join('testdata', 'reference_test.ppk')
    print(f"Generating {path}...")

    document = reference_ppk(TEST_KEY, TEST_COMMENT)
    with open(path, 'w', newline='') as f:
        f.write(document)

    print(document, end='')
    print(f"Wrote {len(document)} bytes")

if __name__ == "__main__":
    main()
