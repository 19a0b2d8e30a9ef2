"""
Shared fixtures for the qrprint test suite.
"""

import io

import numpy as np
import pytest

from qrprint.config import PipelineConfig
from qrprint.encoder import QRCodeEncoder
from qrprint.symbol import Symbol


@pytest.fixture
def encoder():
    return QRCodeEncoder()


@pytest.fixture
def config(tmp_path):
    """Default pipeline settings writing into a per-test directory."""
    return PipelineConfig(output_dir=tmp_path)


@pytest.fixture
def console():
    return io.StringIO()


@pytest.fixture
def checker_symbol():
    """3x3 symbol with dark corners and centre."""
    return Symbol(np.array([
        [1, 0, 1],
        [0, 1, 0],
        [1, 0, 1],
    ], dtype=bool))
