from .state import WeatherState, classify_condition, classify_precipitation_kind, wind_direction_label
from .readout import build_readout, celsius_to_fahrenheit
from .binding import ParameterBinding
