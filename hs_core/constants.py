"""Core constants shared across configuration helpers."""

DEFAULT_RUNTIME_PATHS = {
    "cache_dir": "~/.cache/hockeystick",
    "out_dir": "output",
}
DEFAULT_CACHE_SETTINGS = {
    "use_cache": True,
    "write_cache": False,
}
DEFAULT_PROBE_URL = "https://www.google.com"
DEFAULT_CONNECTIVITY_SETTINGS = {
    "probe_url": DEFAULT_PROBE_URL,
}
DEFAULT_PLOT_TEXT = {
    'title': 'Paleoclimate: The Link Between CO$_2$ and Temperature',
    'subtitle': '420,000 years from the Vostok ice core, Antarctica.',
    'caption': 'Source: U.S. Department of Energy ESS-DIVE',
    'co2_label': 'CO$_2$ concentration',
    'temp_label': 'Temperature (C°)',
    'x_label': 'Millennia before present',
}
NO_CONNECTIVITY_MESSAGE = "Retrieving remote data requires internet connectivity."
