"""Shared test fixtures for cohesion-report tests."""

import pytest

from cohesion_report.skeleton import AttributeRef, ClassInfo, Method, Skeleton


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def _make_class(name, attributes=(), methods=None):
    """Build a ClassInfo from ``{"method": ["attr", ("attr", "Owner"), ...]}``."""
    built = []
    for method_name, accesses in (methods or {}).items():
        refs = frozenset(
            AttributeRef(a[0], a[1]) if isinstance(a, tuple) else AttributeRef(a)
            for a in accesses
        )
        built.append(Method(name=method_name, accesses=refs))
    return ClassInfo(name=name, methods=tuple(built), attributes=tuple(attributes))


@pytest.fixture
def make_class():
    """Factory for ClassInfo objects, see _make_class."""
    return _make_class


@pytest.fixture
def cohesive_class():
    """Two methods sharing both attributes."""
    return _make_class("X", ["a", "b"], {"get": ["a", "b"], "set": ["a", "b"]})


@pytest.fixture
def scattered_class():
    """Two methods sharing nothing."""
    return _make_class("Y", ["a", "b"], {"get_a": ["a"], "get_b": ["b"]})


@pytest.fixture
def mixed_class():
    """Three methods: two share ``b``, the third only touches ``c``."""
    return _make_class(
        "Mixed",
        ["a", "b", "c"],
        {"m1": ["a", "b"], "m2": ["b"], "m3": ["c"]},
    )


@pytest.fixture
def two_class_skeleton(cohesive_class, scattered_class):
    """Cohesive X followed by scattered Y."""
    return Skeleton(classes=(cohesive_class, scattered_class))


@pytest.fixture
def mixed_skeleton(cohesive_class, scattered_class, mixed_class):
    """Three classes plus one without methods (not applicable)."""
    empty = _make_class("Empty", ["a"], {})
    return Skeleton(classes=(cohesive_class, scattered_class, mixed_class, empty))


@pytest.fixture
def related_skeleton():
    """Service reads Store's attribute; Store only reads its own."""
    store = _make_class("pkg.Store", ["items"], {"add": ["items"], "size": ["items"]})
    service = _make_class(
        "pkg.Service",
        ["store", "name"],
        {
            "run": ["store", ("items", "pkg.Store")],
            "label": ["name", ("missing", "pkg.Store"), ("x", "ext.Unknown")],
        },
    )
    return Skeleton(classes=(store, service))
