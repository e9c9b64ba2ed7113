import os
import sys
import struct

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from puttykey.blobs import RsaKeyMaterial, build_public_blob, build_private_blob
from puttykey.mac import MAC_KEY, ENCRYPTION_NONE, build_mac_input
from puttykey.wire import iter_fields

# p=241, q=233, e=65537
TEST_KEY = RsaKeyMaterial.from_numbers(e=65537, n=241 * 233, d=9473, p=241, q=233)


def dump_words(data: bytes, indent: str = "    ") -> None:
    for i in range(0, len(data), 4):
        chunk = data[i:i+4]
        byte_str = " ".join(f"{b:02x}" for b in chunk)
        if len(chunk) == 4:
            w = struct.unpack(">I", chunk)[0]
            print(f"{indent}w[{i//4:2d}] = 0x{w:08x}  // bytes {i}-{i+3}: {byte_str}")
        else:
            print(f"{indent}Remaining bytes {i}-{len(data)-1}: {byte_str}")


def dump_blob(title: str, blob: bytes, names: list) -> None:
    print(f"{title} ({len(blob)} bytes):")
    for name, (offset, body) in zip(names, iter_fields(blob)):
        print(f"  {name} @ {offset}: length {len(body)}")
        print(f"    body: {body.hex() or '(empty)'}")
    print("  Full blob by 32-bit words (big-endian):")
    dump_words(blob)
    print()


def main():
    public_blob = build_public_blob(TEST_KEY.exponent, TEST_KEY.modulus)
    private_blob = build_private_blob(TEST_KEY.d, TEST_KEY.p, TEST_KEY.q, TEST_KEY.inverse_q)

    dump_blob("Public blob", public_blob, ["key type", "e", "n"])
    dump_blob("Private blob", private_blob, ["d", "p", "q", "iqmp"])

    macdata = build_mac_input("ssh-rsa", ENCRYPTION_NONE, "test", public_blob, private_blob)
    dump_blob("MAC input", macdata, ["key type", "encryption", "comment", "public blob", "private blob"])

    print(f"MAC key (sha1): {MAC_KEY.hex()}")

if __name__ == "__main__":
    main()
