"""Fixtures for integration tests that work on C files on disk."""

from pathlib import Path

import pytest

SAMPLE_SOURCE = """#include <stdlib.h>

struct point {
        int x;
        int y;
};

int add(int a, int b)
{
        return a + b;
}

int *make(int n)
{
        int *buf = malloc(n);

        return buf;
}

int zero(void)
{
        return 0;
}
"""


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Write an undocumented but otherwise clean C file and return its path."""
    path = tmp_path / "sample.c"
    path.write_text(SAMPLE_SOURCE, encoding="utf-8")
    return path
