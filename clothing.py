"""Canned clothing advice from the current temperature."""

# (upper bound exclusive in °C, tier, advice); the last tier has no upper bound
CLOTHING_TIERS = [
    (0, "winter gear", "Freezing out: heavy winter coat, gloves, a hat and thermal layers"),
    (10, "heavy coat", "Heavy coat, scarf, and warm layers recommended"),
    (20, "light jacket", "Light jacket or sweater would be comfortable"),
    (25, "layers", "T-shirt with a light layer you can take off"),
    (None, "light clothing", "Light clothing suitable for warm weather"),
]

WET_CONDITIONS = {"Rain", "Drizzle", "Thunderstorm"}


def _tier_for(temp):
    for upper, tier, advice in CLOTHING_TIERS:
        if upper is None or temp < upper:
            return tier, advice


def clothing_tier(temp):
    return _tier_for(temp)[0]


def recommend(temp, condition=None):
    """Clothing advice for `temp` °C, with a hint for rain or snow when `condition` calls for it."""
    advice = _tier_for(temp)[1]
    if condition in WET_CONDITIONS:
        advice += ". Don't forget an umbrella"
    elif condition == "Snow":
        advice += ". Waterproof boots recommended"
    return advice
