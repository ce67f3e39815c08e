from unittest.mock import MagicMock, patch

import pytest
import requests

from app import create_app
from errors import NetworkError, ParseError
from forecaster import ForecastEstimator, SineForecaster
from weather_client import WeatherClient


@pytest.fixture
def weather_client(testville):
    client = MagicMock()
    client.fetch_current.return_value = testville
    return client


def make_app(weather_client, forecaster, **overrides):
    settings = {'TESTING': True, 'START_TRAINING': False, 'FORECAST_MODE': 'sine', 'THEME_VARIANT': 'dynamic'}
    settings.update(overrides)
    return create_app(settings, weather_client=weather_client, forecaster=forecaster)


def test_weather_lookup(weather_client):
    app = make_app(weather_client, SineForecaster())

    res = app.test_client().post('/api/weather', json={'city': 'Testville'})

    assert res.status_code == 200
    body = res.get_json()
    assert body['success'] is True
    assert body['name'] == 'Testville'
    assert (body['temperature'], body['humidity'], body['wind_speed']) == (18, 60, 4)
    assert body['description'] == 'Overcast'
    assert body['tier'] == 'light jacket'
    assert len(body['forecast']) == 5
    assert body['labels'] == ['1h', '2h', '3h', '4h', '5h']
    assert body['theme']['start'].startswith('#')
    weather_client.fetch_current.assert_called_once_with('Testville')


@pytest.mark.parametrize("payload", [{}, {'city': '   '}, {'city': 42}])
def test_missing_city_is_rejected(weather_client, payload):
    app = make_app(weather_client, SineForecaster())

    res = app.test_client().post('/api/weather', json=payload)

    assert res.status_code == 400
    assert res.get_json()['success'] is False
    weather_client.fetch_current.assert_not_called()


def test_unknown_city_returns_404(weather_client):
    weather_client.fetch_current.side_effect = NetworkError("HTTP 404", status_code=404)
    app = make_app(weather_client, SineForecaster())

    res = app.test_client().post('/api/weather', json={'city': 'Atlantis'})

    assert res.status_code == 404
    assert res.get_json() == {"success": False, "error": "City not found"}


@pytest.mark.parametrize("error", [NetworkError("HTTP 500", status_code=500), ParseError("bad body")])
def test_upstream_failures_return_502(weather_client, error):
    weather_client.fetch_current.side_effect = error
    app = make_app(weather_client, SineForecaster())

    res = app.test_client().post('/api/weather', json={'city': 'Testville'})

    assert res.status_code == 502


def test_untrained_model_returns_503(weather_client):
    app = make_app(weather_client, ForecastEstimator(), FORECAST_MODE='network')
    client = app.test_client()

    res = client.post('/api/weather', json={'city': 'Testville'})

    assert res.status_code == 503
    assert client.get('/api/status').get_json()['model'] == 'idle'


def test_status_reports_training_progress(weather_client, training_config):
    app = create_app(
        {'TESTING': True, 'START_TRAINING': False, 'FORECAST_MODE': 'network', 'TRAINING_CONFIG': training_config},
        weather_client=weather_client,
    )
    trainer = app.extensions['trainer']
    client = app.test_client()
    try:
        assert client.get('/api/status').get_json()['model'] == 'idle'

        trainer.start()
        trainer.wait(timeout=60)

        body = client.get('/api/status').get_json()
        assert body == {"success": True, "model": "trained", "forecast_mode": "network"}
        res = client.post('/api/weather', json={'city': 'Testville'})
        assert res.status_code == 200
        assert len(res.get_json()['forecast']) == 5
    finally:
        trainer.shutdown()


def test_index_page_renders(weather_client):
    app = make_app(weather_client, SineForecaster(), THEME_VARIANT='sunset')

    res = app.test_client().get('/')

    assert res.status_code == 200
    assert b'#9333ea' in res.data


@patch("weather_client.requests.get")
def test_non_finite_upstream_reading_returns_502(mock_get):
    response = requests.Response()
    response.status_code = 200
    response._content = (
        b'{"name": "Testville", "main": {"temp": NaN, "humidity": 60}, '
        b'"wind": {"speed": 4}, "weather": [{"main": "Clouds", "description": "x"}]}'
    )
    mock_get.return_value = response
    client = WeatherClient(api_key="secret", base_url="https://weather.test/data/2.5/weather")
    app = make_app(client, SineForecaster())

    res = app.test_client().post('/api/weather', json={'city': 'Testville'})

    assert res.status_code == 502
    assert res.get_json() == {"success": False, "error": "Weather service error"}


@patch("app.atexit.register")
def test_trainer_is_shut_down_at_exit(mock_register, weather_client, training_config):
    app = create_app(
        {'TESTING': True, 'START_TRAINING': False, 'FORECAST_MODE': 'network', 'TRAINING_CONFIG': training_config},
        weather_client=weather_client,
    )
    trainer = app.extensions['trainer']
    try:
        mock_register.assert_called_once_with(trainer.shutdown, wait=False)
    finally:
        trainer.shutdown()
