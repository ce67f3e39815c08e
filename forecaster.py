"""Five-hour temperature forecasters and the background trainer that fits them."""

import logging
import math
import threading
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from sklearn.neural_network import MLPRegressor

from errors import InvalidInputError, NotTrainedError, TrainingCancelled, TrainingError
from synthetic_data import TARGET_DECAY, samples_from_config, to_arrays

logger = logging.getLogger(__name__)

FORECAST_LENGTH = len(TARGET_DECAY)


def _check_observation(observation):
    if not observation.is_finite():
        raise InvalidInputError(f"Observation must have finite readings: {observation}")


class ForecastEstimator:
    """
    Feed-forward network mapping (temperature, humidity, wind speed) to the
    next five hourly temperatures.

    Lifecycle is create -> fit -> predict*. A fitted estimator cannot be
    fitted again; build a new one instead.
    """

    def __init__(self, hidden_layers=(32, 16), epochs=50, batch_size=32, learning_rate=0.01, seed=None):
        self.hidden_layers = tuple(hidden_layers)
        self.epochs = epochs
        self.batch_size = batch_size
        self.learning_rate = learning_rate
        self.seed = seed
        self._model = None
        self._fit_lock = threading.Lock()

    @classmethod
    def from_config(cls, training_config):
        return cls(
            hidden_layers=training_config['hidden_layers'],
            epochs=training_config['epochs'],
            batch_size=training_config['batch_size'],
            learning_rate=training_config['learning_rate'],
            seed=training_config.get('seed'),
        )

    @property
    def is_trained(self):
        return self._model is not None

    def _build_model(self, n_samples):
        return MLPRegressor(
            hidden_layer_sizes=self.hidden_layers,
            activation='relu',
            solver='adam',
            learning_rate_init=self.learning_rate,
            batch_size=min(self.batch_size, n_samples),
            shuffle=True,
            alpha=0.0,
            random_state=self.seed,
        )

    def fit(self, samples, cancel_event=None):
        """
        Fit the network on synthetic observations against the decay targets.

        Each pass over the data is one partial_fit call, so a set
        `cancel_event` stops training between passes. On any failure the
        estimator stays untrained.
        """
        if not self._fit_lock.acquire(blocking=False):
            raise TrainingError("A fit is already running for this estimator")
        try:
            if self.is_trained:
                raise TrainingError("Estimator is already trained")

            samples = list(samples)
            if not samples:
                raise TrainingError("Cannot fit on an empty sample set")

            X, y = to_arrays(samples)
            if not (np.isfinite(X).all() and np.isfinite(y).all()):
                raise TrainingError("Training samples contain non-finite values")

            model = self._build_model(len(samples))
            logger.info("Training forecast network on %d samples for %d passes", len(samples), self.epochs)

            for epoch in range(1, self.epochs + 1):
                if cancel_event is not None and cancel_event.is_set():
                    raise TrainingCancelled(f"Training cancelled after {epoch - 1} passes")
                try:
                    model.partial_fit(X, y)
                except (ValueError, FloatingPointError) as e:
                    raise TrainingError(f"Training failed on pass {epoch}: {e}") from e
                if not math.isfinite(model.loss_):
                    raise TrainingError(f"Training diverged on pass {epoch}")
                logger.debug("Pass %d/%d loss=%.4f", epoch, self.epochs, model.loss_)

            self._model = model
            logger.info("Forecast network trained, final loss=%.4f", model.loss_)
        finally:
            self._fit_lock.release()

    def predict(self, observation):
        model = self._model
        if model is None:
            raise NotTrainedError("Forecast model is not trained yet")
        _check_observation(observation)

        values = model.predict(np.array([observation.as_features()], dtype=float))
        return [float(v) for v in np.ravel(values)[:FORECAST_LENGTH]]


class SineForecaster:
    """Placeholder curve: current temperature plus a small sine bump."""

    is_trained = True

    def predict(self, observation):
        _check_observation(observation)
        return [observation.temperature + math.sin(i / FORECAST_LENGTH) * 2 for i in range(FORECAST_LENGTH)]


class BackgroundTrainer:
    """Runs ForecastEstimator.fit on a worker thread so requests never wait on it."""

    def __init__(self, estimator, sample_factory):
        self.estimator = estimator
        self._sample_factory = sample_factory
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="forecast-fit")
        self._cancel_event = threading.Event()
        self._lock = threading.Lock()
        self._future = None
        self._status = 'idle'
        self.error = None

    @property
    def status(self):
        if self.estimator.is_trained:
            return 'trained'
        return self._status

    def start(self):
        """Start fitting unless a fit is already running; returns its future."""
        with self._lock:
            if self._future is not None and not self._future.done():
                return self._future
            if self.estimator.is_trained:
                return self._future
            self._cancel_event.clear()
            self._status = 'training'
            self.error = None
            self._future = self._executor.submit(self._run)
            return self._future

    def _run(self):
        try:
            samples = self._sample_factory()
            self.estimator.fit(samples, cancel_event=self._cancel_event)
        except TrainingCancelled as e:
            self._status = 'cancelled'
            logger.info("%s", e)
        except TrainingError as e:
            self._status = 'failed'
            self.error = e
            logger.error("Forecast training failed: %s", e)
        except Exception as e:
            self._status = 'failed'
            self.error = e
            logger.exception("Unexpected error while training forecast network")
            raise
        else:
            self._status = 'trained'
        return self._status

    def cancel(self):
        self._cancel_event.set()

    def wait(self, timeout=None):
        """Block until the current fit finishes and return the trainer status."""
        future = self._future
        if future is not None:
            future.exception(timeout=timeout)
        return self.status

    def shutdown(self, wait=True):
        self.cancel()
        self._executor.shutdown(wait=wait)


def build_forecaster(mode, training_config):
    """
    Create the forecaster for `mode` ("network" or "sine").

    Returns:
    --------
    (forecaster, trainer) : the trainer is None when no fitting is needed
    """
    if mode == 'sine':
        return SineForecaster(), None
    if mode != 'network':
        raise InvalidInputError(f"Unknown forecast mode: {mode!r}")

    estimator = ForecastEstimator.from_config(training_config)
    seed = training_config.get('seed')

    def sample_factory():
        rng = np.random.default_rng(seed)
        return samples_from_config(training_config, rng=rng)

    return estimator, BackgroundTrainer(estimator, sample_factory)
