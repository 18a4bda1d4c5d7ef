import os
import random

import matplotlib

matplotlib.use("Agg")

import pytest

from GlobalAlign.config import reset_config_loader


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Every test starts from the packaged default configuration."""
    for name in list(os.environ):
        if name.startswith("GLOBALALIGN_"):
            monkeypatch.delenv(name)
    reset_config_loader()
    yield
    reset_config_loader()


def random_dna(seed, length):
    rng = random.Random(seed)
    return "".join(rng.choice("ACGT") for _ in range(length))


@pytest.fixture
def dna_pairs():
    pairs = [(random_dna(seed, 3 + seed % 9), random_dna(seed + 100, 1 + seed % 13)) for seed in range(20)]
    pairs += [("GAATTC", "GATTA"), ("A", "A"), ("AAAA", "T"), ("ACACACTA", "AGCACACA")]
    return pairs


@pytest.fixture
def golden_scores():
    """Score grid for GAATTC (rows) against GATTA (columns), +2/-1/-2."""
    return [
        [0, -2, -4, -6, -8, -10],
        [-2, 2, 0, -2, -4, -6],
        [-4, 0, 4, 2, 0, -2],
        [-6, -2, 2, 3, 1, 2],
        [-8, -4, 0, 4, 5, 3],
        [-10, -6, -2, 2, 6, 4],
        [-12, -8, -4, 0, 4, 5],
    ]


@pytest.fixture
def golden_trace():
    # S=0 D=1 U=2 L=3
    return [
        [0, 2, 2, 2, 2, 2],
        [3, 1, 2, 2, 2, 2],
        [3, 3, 1, 2, 2, 1],
        [3, 3, 1, 1, 1, 1],
        [3, 3, 3, 1, 1, 2],
        [3, 3, 3, 1, 1, 1],
        [3, 3, 3, 3, 3, 1],
    ]
