"""
Pytest configuration

Shared fixtures: an in-memory file system, locale record factories and
settings builders.
"""

import json
import sys
import threading
from pathlib import Path

import pytest

# Make the src layout importable without installing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from d2r_tools.core.merger import make_record
from d2r_tools.data.items import LocaleFile
from d2r_tools.utils.common import GamePaths


class MemoryFileSystem:
    """FileSystem fake keeping files in a dict.

    ``fail_writes`` maps a path to the number of writes that should fail
    (``-1`` fails forever).
    """

    def __init__(self, files=None):
        self.files = {}
        self.reads = []
        self.writes = []
        self.fail_writes = {}
        self._lock = threading.Lock()
        for path, text in (files or {}).items():
            self.files[self._key(path)] = text

    @staticmethod
    def _key(path):
        return str(Path(path))

    def read_text(self, path):
        key = self._key(path)
        with self._lock:
            self.reads.append(key)
        if key not in self.files:
            raise FileNotFoundError(2, "No such file or directory", key)
        return self.files[key]

    def write_text(self, path, text):
        key = self._key(path)
        self.writes.append(key)
        remaining = self.fail_writes.get(key, 0)
        if remaining:
            if remaining > 0:
                self.fail_writes[key] = remaining - 1
            raise PermissionError(13, "Permission denied", key)
        self.files[key] = text

    def json(self, path):
        return json.loads(self.files[self._key(path)])

    def write_count(self, path):
        return self.writes.count(self._key(path))


@pytest.fixture
def memory_fs():
    return MemoryFileSystem()


@pytest.fixture
def game_home():
    return "/games/d2r"


@pytest.fixture
def game_paths(game_home):
    return GamePaths.from_home(game_home)


@pytest.fixture
def seed_locale_file(memory_fs, game_paths):
    """Put a locale file into the memory file system."""
    def _seed(locale_file: LocaleFile, records):
        path = game_paths.locale_file(locale_file.file_name)
        memory_fs.files[str(path)] = json.dumps(records, ensure_ascii=False)
        return path
    return _seed


@pytest.fixture
def record():
    """Locale record with every locale empty, then ``values`` applied."""
    def _record(record_id, key, **values):
        row = make_record(record_id, key)
        row.update(values)
        return row
    return _record


def level(enabled=True, **locales):
    return {"enabled": enabled, "locales": locales}


def group(*levels, enabled=True):
    return {"enabled": enabled, "levels": list(levels)}
