"""Test configuration for pytest.

Ensure the repository root is on sys.path so tests can import the `vmsim`
package without needing PYTHONPATH set externally, and provide backing
store files built in a temporary directory.
"""
import os
import sys

import pytest

# Compute project root: two directories above this file (vmsim/tests -> vmsim -> project root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

STORE_SIZE = 1 << 16


def store_byte(position: int) -> int:
    """Byte stored at absolute `position` of the test backing store."""
    # 251 is prime so neighbouring pages never line up byte-for-byte
    return position % 251


def expected_byte(page_number: int, offset: int, frame_size: int) -> int:
    return store_byte(page_number * frame_size + offset)


@pytest.fixture
def store_path(tmp_path):
    path = tmp_path / "BACKING_STORE.bin"
    path.write_bytes(bytes(store_byte(i) for i in range(STORE_SIZE)))
    return str(path)


@pytest.fixture
def short_store_path(tmp_path):
    # covers page 0 fully and only half of page 1 for 256-byte frames
    path = tmp_path / "short.bin"
    path.write_bytes(bytes(store_byte(i) for i in range(384)))
    return str(path)
