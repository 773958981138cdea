"""
Shared fixtures for pruning tests.
Creates isolated build output and classdump trees with controlled class files.
"""
import pytest
import zipfile
from pathlib import Path
from typing import Dict

# Bitwise reference of the coverage agent's CRC-64, independent of crcmod
POLY64REV = 0xD800000000000000
_TABLE = []
for _i in range(256):
    _v = _i
    for _ in range(8):
        _v = (_v >> 1) ^ POLY64REV if _v & 1 else _v >> 1
    _TABLE.append(_v)


def agent_crc64(data: bytes, crc: int = 0) -> int:
    for b in data:
        crc = (crc >> 8) ^ _TABLE[(crc ^ b) & 0xFF]
    return crc


def agent_class_id(data: bytes) -> int:
    if len(data) > 7 and data[6] == 0x00 and data[7] == 0x35:
        data = data[:7] + bytes((0x34,)) + data[8:]
    return agent_crc64(data)


def class_bytes(name: str, major: int = 52) -> bytes:
    """Fake class file: real header, opaque body derived from the name."""
    return b"\xca\xfe\xba\xbe" + b"\x00\x00" + bytes((0x00, major)) + name.encode("utf-8") * 4


def dump_name(binary_name: str, data: bytes) -> str:
    return f"{binary_name.replace('.', '/')}.{agent_class_id(data):016x}.class"


def write_class(root: Path, binary_name: str, data: bytes) -> Path:
    path = root.joinpath(*binary_name.split(".")).with_name(binary_name.split(".")[-1] + ".class")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


def write_dump(classdump: Path, binary_name: str, data: bytes) -> Path:
    path = classdump.joinpath(*dump_name(binary_name, data).split("/"))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


def write_jar(path: Path, classes: Dict[str, bytes]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as jar:
        for name, data in classes.items():
            jar.writestr(name.replace(".", "/") + ".class", data)
    return path


LOCAL_CLASSES = {
    "org.apache.cassandra.Klass": class_bytes("org.apache.cassandra.Klass"),
    "org.apache.cassandra.Klass$Inner": class_bytes("org.apache.cassandra.Klass$Inner"),
    "org.apache.cassandra.utils.Util": class_bytes("org.apache.cassandra.utils.Util", major=53),
}


@pytest.fixture
def build_classes(tmp_path) -> Path:
    """
    Local build output:
    - 3 classes (one compiled for Java 9)
    - 1 non-class resource (must be ignored)
    """
    root = tmp_path / "build" / "classes" / "main"
    for name, data in LOCAL_CLASSES.items():
        write_class(root, name, data)
    resource = root / "META-INF" / "services.properties"
    resource.parent.mkdir(parents=True)
    resource.write_text("key=value")
    return root


@pytest.fixture
def classdump(tmp_path) -> Dict[str, Path]:
    """
    Classdump written by the agent during a test run:
    - the 3 local classes with matching ids (kept)
    - a stale build of Klass (pruned)
    - a dependency class and a test class (pruned)
    - a non-class file (untouched, uncounted)
    """
    root = tmp_path / "build" / "jacoco" / "classdump"
    root.mkdir(parents=True)
    files = {"root": root}

    for name, data in LOCAL_CLASSES.items():
        files[name] = write_dump(root, name, data)

    files["stale"] = write_dump(root, "org.apache.cassandra.Klass", b"\xca\xfe\xba\xbe old build")
    files["dependency"] = write_dump(root, "com.google.common.Foo", class_bytes("com.google.common.Foo"))
    files["test"] = write_dump(root, "org.apache.cassandra.KlassTest", class_bytes("org.apache.cassandra.KlassTest"))

    files["readme"] = root / "README.txt"
    files["readme"].write_text("not a class")
    return files


@pytest.fixture
def exclusion_dir(tmp_path) -> Path:
    return tmp_path / "build" / "jacoco" / "exclclassdump"
