"""Synthetic observations and targets used to fit the forecast network."""

import numpy as np

from weather_client import Observation

# Multipliers applied to the current temperature for +1h..+5h
TARGET_DECAY = (1.10, 1.05, 1.00, 0.95, 0.90)


def generate_samples(count, temperature_range, humidity_range, wind_speed_range, rng=None):
    """
    Draw `count` independent Observations from uniform distributions.

    Parameters:
    -----------
    count : int
        Number of samples
    temperature_range, humidity_range, wind_speed_range : tuple
        (low, high) bounds of each uniform distribution
    rng : numpy.random.Generator, optional
        Source of randomness; a fresh unseeded generator when omitted

    Returns:
    --------
    samples : list of Observation
    """
    rng = rng if rng is not None else np.random.default_rng()
    temperatures = rng.uniform(*temperature_range, size=count)
    humidities = rng.uniform(*humidity_range, size=count)
    wind_speeds = rng.uniform(*wind_speed_range, size=count)
    return [
        Observation(float(t), float(h), float(w))
        for t, h, w in zip(temperatures, humidities, wind_speeds)
    ]


def samples_from_config(training_config, rng=None):
    return generate_samples(
        training_config['sample_count'],
        training_config['temperature_range'],
        training_config['humidity_range'],
        training_config['wind_speed_range'],
        rng=rng,
    )


def target_vector(temperature):
    return [temperature * factor for factor in TARGET_DECAY]


def to_arrays(samples):
    """Feature matrix (n, 3) and target matrix (n, 5) for a sample set."""
    X = np.array([s.as_features() for s in samples], dtype=float).reshape(-1, 3)
    y = np.array([target_vector(s.temperature) for s in samples], dtype=float).reshape(-1, len(TARGET_DECAY))
    return X, y
