"""Configuration settings for the weather widget."""

import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _optional_int(name):
    value = os.getenv(name)
    return int(value) if value not in (None, "") else None


# ============================================================
# WEATHER SERVICE
# ============================================================
OPENWEATHER_API_KEY = os.getenv("OPENWEATHER_API_KEY")
OPENWEATHER_URL = os.getenv("OPENWEATHER_URL", "https://api.openweathermap.org/data/2.5/weather")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

# ============================================================
# FORECAST
# ============================================================
FORECAST_MODE = os.getenv("FORECAST_MODE", "network")  # "network" or "sine"
FORECAST_HORIZONS = ["1h", "2h", "3h", "4h", "5h"]

# Synthetic training set and network hyperparameters
TRAINING_CONFIG = {
    'sample_count': int(os.getenv("TRAINING_SAMPLES", "100")),
    'temperature_range': (20.0, 30.0),  # °C
    'humidity_range': (50.0, 80.0),  # %
    'wind_speed_range': (5.0, 15.0),  # km/h
    'hidden_layers': (32, 16),
    'epochs': int(os.getenv("TRAINING_EPOCHS", "50")),
    'batch_size': 32,
    'learning_rate': 0.01,
    'seed': _optional_int("TRAINING_SEED"),
}

# ============================================================
# PRESENTATION
# ============================================================
THEME_VARIANT = os.getenv("THEME_VARIANT", "sunset")

# ============================================================
# SERVER / LOGGING
# ============================================================
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "5000"))
DEBUG = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE")


def as_flask_config():
    """Settings in the shape create_app() copies into app.config."""
    return {
        'OPENWEATHER_API_KEY': OPENWEATHER_API_KEY,
        'OPENWEATHER_URL': OPENWEATHER_URL,
        'REQUEST_TIMEOUT': REQUEST_TIMEOUT,
        'FORECAST_MODE': FORECAST_MODE,
        'THEME_VARIANT': THEME_VARIANT,
        'TRAINING_CONFIG': dict(TRAINING_CONFIG),
        'START_TRAINING': True,
    }
