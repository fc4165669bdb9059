from datetime import date
from pathlib import PurePosixPath

import pytest

from statue.variables import TemplateVariables

SITE_CONFIG = {
    "site": {"name": "Acme", "url": "https://example.com", "author": "Ada"},
    "contact": {
        "email": "hello@example.com",
        "address": {
            "street": "1 Main St",
            "city": "Springfield",
            "state": "IL",
            "zipCode": "62701",
            "country": "US",
        },
    },
}


class DictSource:
    """In-memory content tree keyed by content-root-relative path."""

    def __init__(self, files, directories=(), exists=True):
        self.files = dict(files)
        self.directories = list(directories)
        self._exists = exists
        self.reads = 0

    def exists(self):
        return self._exists

    def iter_markdown(self):
        for name in self.files:
            yield PurePosixPath(name)

    def iter_directories(self):
        seen = dict.fromkeys(self.directories)
        for name in self.files:
            if "/" in name:
                seen.setdefault(name.split("/")[0], None)
        return iter(seen)

    def read_text(self, path):
        self.reads += 1
        value = self.files[path.as_posix()]
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def variables():
    return TemplateVariables(SITE_CONFIG, clock=lambda: date(2026, 3, 5))


@pytest.fixture
def make_source():
    return DictSource
