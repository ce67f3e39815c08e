"""Exception types raised by the weather widget."""


class WeatherAppError(Exception):
    """Base class for every error the app raises on purpose."""


class InvalidInputError(WeatherAppError, ValueError):
    """Blank city name, unknown theme or a non-finite observation."""


class NetworkError(WeatherAppError):
    """The weather service was unreachable or answered with a non-2xx status."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(WeatherAppError):
    """The weather service answered with a body we could not understand."""


class TrainingError(WeatherAppError):
    """Fitting the forecast network failed; the estimator stays untrained."""


class TrainingCancelled(TrainingError):
    """Fitting was stopped between passes by a cancel request."""


class NotTrainedError(WeatherAppError):
    """predict() was called before the estimator finished fitting."""
