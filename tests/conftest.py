"""Global pytest configuration for exception_factory tests."""
import itertools
import sys

import pytest

from exception_factory.core.config import RegistryConfig
from exception_factory.core.registry import ExceptionRegistry

TEST_PREFIX_STEM = "lazytest_"

_prefix_counter = itertools.count()


def _drop_test_modules():
    for name in [n for n in sys.modules if n.split(".", 1)[0].startswith(TEST_PREFIX_STEM)]:
        del sys.modules[name]


@pytest.fixture
def import_state():
    """Restore sys.meta_path and drop test namespaces after the test."""
    saved_meta_path = list(sys.meta_path)
    yield
    sys.meta_path[:] = saved_meta_path
    _drop_test_modules()


@pytest.fixture
def prefix():
    """A top-level package name no other test uses."""
    return f"{TEST_PREFIX_STEM}{next(_prefix_counter)}"


@pytest.fixture
def registry(prefix, import_state):
    """An initialized registry managing only the per-test prefix."""
    reg = ExceptionRegistry(RegistryConfig(package_prefixes=(prefix,)))
    reg.initialize()
    return reg
