import pytest

from weather_client import CurrentWeather, Observation


@pytest.fixture
def training_config():
    return {
        'sample_count': 100,
        'temperature_range': (20.0, 30.0),
        'humidity_range': (50.0, 80.0),
        'wind_speed_range': (5.0, 15.0),
        'hidden_layers': (32, 16),
        'epochs': 10,
        'batch_size': 32,
        'learning_rate': 0.01,
        'seed': 7,
    }


@pytest.fixture
def testville():
    return CurrentWeather(
        name="Testville",
        observation=Observation(18.0, 60.0, 4.0),
        condition="Clouds",
        description="overcast",
    )
