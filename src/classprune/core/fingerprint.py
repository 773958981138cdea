"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

fingerprint.py
Computes JaCoCo class ids: a CRC-64 (ISO polynomial, reflected, zero initial
value, no final xor) over the complete class file.

The coverage agent names every dumped class after this id, so the value here
must match it bit for bit.
"""

import crcmod.predefined

from classprune.core.interfaces import ClassIdAlgorithm

# Class file major versions (bytes 6..7 of the class file header)
JAVA_8_MAJOR = 0x34
JAVA_9_MAJOR = 0x35

_crc64 = crcmod.predefined.mkPredefinedCrcFun("crc-64")


# Use the same way to implement and use any other class id algorithm
class CRC64ClassIdAlgorithm(ClassIdAlgorithm):
    @staticmethod
    def class_id(data: bytes) -> int:
        """
        Early Java 9 support in the agent rewrote the class version to Java 8
        before hashing, so Java 9 classes are still fingerprinted as major 52.
        """
        data = bytes(data)
        if len(data) > 7 and data[6] == 0x00 and data[7] == JAVA_9_MAJOR:
            crc = _crc64(data[:7])
            crc = _crc64(bytes((JAVA_8_MAJOR,)), crc)
            return _crc64(data[8:], crc)
        return _crc64(data)


def class_id(data: bytes) -> int:
    return CRC64ClassIdAlgorithm.class_id(data)


def hex16(value: int) -> str:
    """Fixed-width lowercase hex, as used in classdump file names."""
    return f"{value:016x}"
