"""Scratch packages on disk for scanning tests."""

import importlib
import sys
import tempfile
import textwrap
import unittest
import uuid
from pathlib import Path


class ScratchPackageTestCase(unittest.TestCase):
    """Creates a uniquely named, importable package in a temporary directory."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.package = f"scratch_{uuid.uuid4().hex[:12]}"
        sys.path.insert(0, self._tmp.name)

    def tearDown(self) -> None:
        sys.path.remove(self._tmp.name)
        for name in list(sys.modules):
            if name == self.package or name.startswith(self.package + "."):
                del sys.modules[name]
        self._tmp.cleanup()

    def write(self, relative: str, source: str = "") -> Path:
        path = self.root / self.package / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source))
        importlib.invalidate_caches()
        return path
