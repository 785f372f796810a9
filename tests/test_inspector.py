"""
Inspector CLI Tests
===================

Verifies the diagnostic commands against blobs on disk.
"""

import json
import logging

import pytest

from schemabridge.codec.envelope import decode_envelope
from schemabridge.inspector import main
from schemabridge.versioning.serializer import serialize_unversioned, serialize_versioned

from .versioning.fixtures import ada_v1, ada_v2


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("schemabridge")
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
    logger.propagate = True


class TestEnvelopeCommand:

    def test_versioned_blob(self, tmp_path, capsys):
        blob = tmp_path / "contact.bin"
        blob.write_bytes(serialize_versioned(ada_v2()))

        assert main(["envelope", str(blob)]) == 0

        out = capsys.readouterr().out
        assert "Version:        2" in out
        assert "Payload offset: 5" in out
        assert '"FirstName": "Ada"' in out

    def test_legacy_blob(self, tmp_path, capsys):
        blob = tmp_path / "legacy.bin"
        blob.write_bytes(serialize_unversioned(ada_v1()))

        assert main(["envelope", str(blob)]) == 0
        assert "legacy" in capsys.readouterr().out

    def test_corrupt_blob_fails(self, tmp_path, capsys):
        blob = tmp_path / "corrupt.bin"
        blob.write_bytes(b"\x00\x00\x00\x01\xaa\xc1")

        assert main(["envelope", str(blob)]) == 1
        assert "[FAIL]" in capsys.readouterr().out


class TestTypeNameCommands:

    def test_typename_prints_tree_and_round_trip(self, capsys):
        assert main(["typename", "Foo`1[[System.Int32, mscorlib]], Bar", ]) == 0

        out = capsys.readouterr().out
        tree_text, _, serialized = out.rstrip("\n").rpartition("\n")
        tree = json.loads(tree_text)
        assert tree["name"] == "Foo`1"
        assert tree["generic_parameters"][0]["name"] == "System.Int32"
        assert serialized == "Foo`1[[System.Int32, mscorlib]], Bar"

    def test_bind_rewrites_modules(self, capsys):
        name = "Foo`1[[Baz, Bar, Version=1.0.0.0]], Bar, Version=1.0.0.0"
        assert main(["bind", name, "--module", "Bar, Version=2.0.0.0"]) == 0

        out = capsys.readouterr().out.splitlines()
        assert out[0] == "Foo`1[[Baz, Bar, Version=2.0.0.0]], Bar, Version=2.0.0.0"
        assert not any(line.startswith("[WARN]") for line in out)

    def test_bind_reports_unloaded_module(self, capsys):
        assert main(["bind", "Foo, Missing, Version=1.0.0.0"]) == 0
        assert "[WARN] UNRESOLVED_MODULE" in capsys.readouterr().out


class TestWrapCommand:

    def test_wraps_legacy_blob(self, tmp_path):
        source = tmp_path / "legacy.bin"
        target = tmp_path / "wrapped.bin"
        legacy = serialize_unversioned(ada_v1())
        source.write_bytes(legacy)

        assert main(["wrap", str(source), "--version", "1", "--out", str(target)]) == 0

        data = target.read_bytes()
        assert decode_envelope(data) == (1, 5)
        assert data[5:] == legacy

    def test_refuses_versioned_blob(self, tmp_path):
        source = tmp_path / "versioned.bin"
        source.write_bytes(serialize_versioned(ada_v2()))

        assert main(["wrap", str(source), "--version", "3", "--out", str(tmp_path / "x")]) == 1

    def test_rejects_version_zero(self, tmp_path):
        source = tmp_path / "legacy.bin"
        source.write_bytes(serialize_unversioned(ada_v1()))

        assert main(["wrap", str(source), "--version", "0", "--out", str(tmp_path / "x")]) == 1


def test_no_command_prints_help(capsys):
    assert main([]) == 2
    assert "usage" in capsys.readouterr().out.lower()
