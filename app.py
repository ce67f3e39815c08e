import atexit
import logging
import os

from flask import Flask, jsonify, render_template, request
from flask_cors import CORS

import config
from clothing import clothing_tier, recommend
from errors import InvalidInputError, NetworkError, NotTrainedError, ParseError
from forecaster import build_forecaster
from logging_config import setup_logging
from themes import background_for, validate_variant
from weather_client import WeatherClient

# Configure paths
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
TEMPLATES_DIR = os.path.join(BASE_DIR, 'templates')

logger = logging.getLogger(__name__)


def create_app(overrides=None, weather_client=None, forecaster=None, trainer=None):
    """
    Build the Flask app and the objects it owns.

    The forecaster (and its background trainer in "network" mode) is created
    here and kept in app.extensions; training starts right away unless
    START_TRAINING is false.
    """
    app = Flask(__name__, template_folder=TEMPLATES_DIR)
    app.config.update(config.as_flask_config())
    app.config.update(overrides or {})
    CORS(app)

    validate_variant(app.config['THEME_VARIANT'])

    if weather_client is None:
        weather_client = WeatherClient(
            api_key=app.config['OPENWEATHER_API_KEY'],
            base_url=app.config['OPENWEATHER_URL'],
            timeout=app.config['REQUEST_TIMEOUT'],
        )
    if forecaster is None:
        forecaster, trainer = build_forecaster(app.config['FORECAST_MODE'], app.config['TRAINING_CONFIG'])

    app.extensions['weather_client'] = weather_client
    app.extensions['forecaster'] = forecaster
    app.extensions['trainer'] = trainer

    if trainer is not None:
        atexit.register(trainer.shutdown, wait=False)
        if app.config['START_TRAINING']:
            trainer.start()

    def model_status():
        if trainer is not None:
            return trainer.status
        return 'trained' if forecaster.is_trained else 'idle'

    @app.route('/')
    def index():
        return render_template(
            'index.html',
            theme=background_for(app.config['THEME_VARIANT']),
            theme_variant=app.config['THEME_VARIANT'],
            forecast_mode=app.config['FORECAST_MODE'],
            labels=config.FORECAST_HORIZONS,
        )

    @app.route('/api/status', methods=['GET'])
    def status():
        return jsonify({
            "success": True,
            "model": model_status(),
            "forecast_mode": app.config['FORECAST_MODE'],
        })

    @app.route('/api/weather', methods=['POST'])
    def get_weather():
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get('city'), str) or not data['city'].strip():
            return jsonify({"success": False, "error": "City is required"}), 400

        try:
            current = weather_client.fetch_current(data['city'])
            forecast = forecaster.predict(current.observation)
        except InvalidInputError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except NetworkError as e:
            if e.status_code == 404:
                return jsonify({"success": False, "error": "City not found"}), 404
            logger.error("Weather lookup failed: %s", e)
            return jsonify({"success": False, "error": "Weather service error"}), 502
        except ParseError as e:
            logger.error("Weather lookup failed: %s", e)
            return jsonify({"success": False, "error": "Weather service error"}), 502
        except NotTrainedError:
            return jsonify({"success": False, "error": "Forecast model is still training, try again shortly"}), 503

        obs = current.observation
        return jsonify({
            "success": True,
            "name": current.name,
            "temperature": obs.temperature,
            "humidity": obs.humidity,
            "wind_speed": obs.wind_speed,
            "condition": current.condition,
            "description": current.description.capitalize(),
            "recommendation": recommend(obs.temperature, current.condition),
            "tier": clothing_tier(obs.temperature),
            "forecast": [round(value, 2) for value in forecast],
            "labels": config.FORECAST_HORIZONS,
            "theme": background_for(app.config['THEME_VARIANT'], current.condition),
        })

    return app


if __name__ == "__main__":
    setup_logging(config.LOG_LEVEL, config.LOG_FILE)
    if not config.OPENWEATHER_API_KEY:
        logger.warning("OPENWEATHER_API_KEY is not set; weather lookups will be rejected upstream")
    app = create_app()
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG, use_reloader=False)
