"""
Pytest configuration file.

This file ensures that the project root is in the Python path
so that test files can import lazysort, ordering, utils and app modules.
"""

import random
import sys
from pathlib import Path

# Add the parent directory to the Python path
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

import pytest


@pytest.fixture
def rng():
    """Seeded random generator so failures are reproducible"""
    return random.Random(20240601)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Start every test with empty performance metrics"""
    from utils import clear_performance_metrics
    clear_performance_metrics()
    yield
