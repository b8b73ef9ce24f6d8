from types import MappingProxyType

DEFAULT_KEY = "Default"

# Condition keyword -> background image. "Default" is used whenever no keyword matches.
BACKGROUNDS = MappingProxyType({
    "Clear": "https://media1.tenor.com/m/FGENNXlTSZkAAAAd/aesthetic-nature.gif",
    "Clouds": "https://media1.tenor.com/m/kKrPCty2eogAAAAd/anime-bird-art.gif",
    "Rain": "https://media1.tenor.com/m/TUN36wlxyhMAAAAC/aesthetic-raining.gif",
    "cloudy": "https://media.tenor.com/m/WhD4AWN30YkAAAAM/clouds-moving.gif",
    "Partly cloudy": "https://media1.tenor.com/m/pjzL4LNhIpEAAAAd/clouds-nature.gif",
    "Snow": "https://media1.tenor.com/m/jgyzLqeM3S4AAAAC/whenu.gif",
    "Overcast": "https://media1.tenor.com/m/f14xUacYc1oAAAAd/storm-world-meteorological-day.gif",
    "Sunny": "https://media1.tenor.com/m/WMmF-dfb2ZsAAAAd/ngan-pham-kitten.gif",
    "Thunderstorm": "https://media1.tenor.com/m/4kHp8IZiBu8AAAAC/dragon-ball-cinematography.gif",
    "Mist": "https://media1.tenor.com/m/Gwv12BigCYcAAAAC/foggy-fog.gif",
    DEFAULT_KEY: "https://media1.tenor.com/m/K0hea_K-qfYAAAAC/rain-nature.gif",
})


def select_background_key(condition_text, known_keys=BACKGROUNDS) -> str:
    """Pick the background key for a condition text such as "Partly cloudy".

    An exact (case-insensitive) match wins outright.  Otherwise the longest key
    contained in the text wins, so "Partly cloudy" beats "cloudy".  Keys of
    equal length keep their original order.
    """
    if not condition_text or not isinstance(condition_text, str):
        return DEFAULT_KEY
    lowered = condition_text.lower()
    keys = [k for k in known_keys if isinstance(k, str) and k]

    for key in keys:
        if key.lower() == lowered:
            return key

    for key in sorted(keys, key=len, reverse=True):
        if key.lower() in lowered:
            return key
    return DEFAULT_KEY


def background_url(key) -> str:
    return BACKGROUNDS.get(key, BACKGROUNDS[DEFAULT_KEY])
