"""Background gradients for the page."""

from errors import InvalidInputError

DEFAULT_GRADIENT = {'start': '#9333ea', 'end': '#ec4899'}  # purple to pink

THEMES = {
    'sunset': DEFAULT_GRADIENT,
    'ocean': {'start': '#2563eb', 'end': '#06b6d4'},
}

# Used by the "dynamic" variant, keyed by the API's weather[0].main
CONDITION_GRADIENTS = {
    'Clear': {'start': '#f59e0b', 'end': '#f97316'},
    'Clouds': {'start': '#64748b', 'end': '#94a3b8'},
    'Rain': {'start': '#1e3a8a', 'end': '#475569'},
    'Drizzle': {'start': '#3b82f6', 'end': '#64748b'},
    'Thunderstorm': {'start': '#111827', 'end': '#4c1d95'},
    'Snow': {'start': '#bfdbfe', 'end': '#e0f2fe'},
    'Mist': {'start': '#9ca3af', 'end': '#d1d5db'},
}

VARIANTS = set(THEMES) | {'dynamic'}


def validate_variant(variant):
    if variant not in VARIANTS:
        raise InvalidInputError(f"Unknown theme variant {variant!r}, expected one of {sorted(VARIANTS)}")
    return variant


def background_for(variant, condition=None):
    validate_variant(variant)
    if variant == 'dynamic':
        return dict(CONDITION_GRADIENTS.get(condition, DEFAULT_GRADIENT))
    return dict(THEMES[variant])
