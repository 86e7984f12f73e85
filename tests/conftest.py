"""Pytest configuration and fixtures for inferstat tests."""

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def separated_samples() -> tuple[list[float], list[float]]:
    """Return two samples with clearly different means and equal spread."""
    x = [10.1, 9.8, 10.3, 10.0, 9.9, 10.2]
    y = [12.0, 12.3, 11.8, 12.1, 11.9, 12.2]
    return x, y


@pytest.fixture
def paired_samples() -> tuple[list[float], list[float]]:
    """Return twenty paired observations with a noisy linear relationship."""
    x = [float(v) for v in range(1, 21)]
    noise = [0.8, -1.1, 2.3, -0.4, 1.7, -2.2, 0.3, 1.2, -1.6, 0.9,
             -0.7, 2.0, -1.3, 0.5, -2.4, 1.1, 0.2, -0.9, 1.8, -0.6]
    y = [0.5 * a + 3.0 * e for a, e in zip(x, noise)]
    return x, y


@pytest.fixture
def unbalanced_groups() -> list[list[float]]:
    """Return three groups of different sizes."""
    return [
        [4.2, 5.1, 3.9, 4.8, 5.5],
        [5.9, 6.3, 5.2, 6.8, 6.1, 5.7, 6.4],
        [4.9, 5.4, 6.0, 5.1],
    ]


@pytest.fixture
def observations_frame() -> pd.DataFrame:
    """Return a small table of observations with missing values."""
    return pd.DataFrame({
        "height": [1.62, 1.75, np.nan, 1.80, 1.68, 1.71, 1.59, 1.83, 1.77, 1.66, 1.74, 1.69],
        "weight": [58.0, 72.5, 80.1, 81.0, 63.2, 70.4, 55.8, 85.3, 75.0, 61.7, 71.9, 66.0],
        "age": [34, 41, 29, 52, 23, 37, 45, 31, 60, 27, 39, 48],
        "site": ["north", "south", "east"] * 4,
        "arm": ["control", "treatment"] * 6,
    })
