"""Client for the OpenWeatherMap current-weather endpoint."""

import logging
import math
from dataclasses import dataclass

import requests

import config
from errors import InvalidInputError, NetworkError, ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Observation:
    temperature: float  # °C
    humidity: float  # %
    wind_speed: float  # km/h

    def as_features(self):
        return [self.temperature, self.humidity, self.wind_speed]

    def is_finite(self):
        try:
            return all(math.isfinite(value) for value in self.as_features())
        except TypeError:
            return False


@dataclass(frozen=True)
class CurrentWeather:
    name: str
    observation: Observation
    condition: str
    description: str


def _reading(value, field):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"Field '{field}' is not a number: {value!r}")
    if not math.isfinite(value):
        raise ParseError(f"Field '{field}' is not finite: {value!r}")
    return float(value)


def parse_current_weather(data):
    """Turn a current-weather JSON body into a CurrentWeather record."""
    try:
        main = data['main']
        weather = data['weather'][0]
        return CurrentWeather(
            name=str(data['name']),
            observation=Observation(
                temperature=_reading(main['temp'], 'main.temp'),
                humidity=_reading(main['humidity'], 'main.humidity'),
                wind_speed=_reading(data['wind']['speed'], 'wind.speed'),
            ),
            condition=str(weather['main']),
            description=str(weather['description']),
        )
    except KeyError as e:
        raise ParseError(f"Unexpected weather response shape: missing field {e}") from e
    except IndexError as e:
        raise ParseError("Unexpected weather response shape: empty 'weather' list") from e
    except TypeError as e:
        raise ParseError(f"Unexpected weather response shape: {e}") from e


class WeatherClient:
    def __init__(self, api_key=None, base_url=None, timeout=None):
        self.api_key = api_key if api_key is not None else config.OPENWEATHER_API_KEY
        self.base_url = base_url or config.OPENWEATHER_URL
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT

    def fetch_current(self, city):
        """
        Fetch current conditions for a city.

        Raises InvalidInputError for a blank city name, NetworkError when the
        service can't be reached or answers with a non-2xx status, and
        ParseError when the body isn't the expected JSON.
        """
        city = (city or "").strip()
        if not city:
            raise InvalidInputError("City name must not be empty")

        params = {'units': 'metric', 'q': city, 'appid': self.api_key}
        logger.info("Fetching current weather for %s", city)
        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.warning("Weather service returned %s for %s", status, city)
            raise NetworkError(f"Weather service returned HTTP {status}", status_code=status) from e
        except requests.exceptions.RequestException as e:
            logger.error("Weather service unreachable: %s", e)
            raise NetworkError(f"Weather service unreachable: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ParseError("Weather service returned a non-JSON body") from e

        if not isinstance(data, dict):
            raise ParseError("Weather service returned a non-object JSON body")
        return parse_current_weather(data)

    def fetch(self, city):
        """Fetch just the Observation for a city."""
        return self.fetch_current(city).observation
