import pytest

import library_tree
from library_tree.registry import Registry
from library_tree.utils.logging import configure_logging


def make_units(names: str) -> list[type]:
    """Create one empty class per whitespace separated name."""
    return [type(name, (), {}) for name in names.split()]


@pytest.fixture(autouse=True)
def reset_default_registry():
    """Every test starts and ends with an empty process-wide registry."""
    library_tree.reset()
    yield
    library_tree.reset()


@pytest.fixture
def registry():
    """A private registry, isolated from the process-wide one."""
    return Registry()


@pytest.fixture
def units():
    """Factory for named unit classes: ``a, b = units("A B")``."""
    return make_units


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Importing library_tree configures nothing, so the suite does it once."""
    configure_logging(level="warn")
