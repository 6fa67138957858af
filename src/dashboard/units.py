"""Temperature and pollutant unit conversion and display formatting."""

from typing import Literal

TemperatureUnit = Literal["C", "F"]


def convert_temperature(celsius: float, unit: TemperatureUnit = "C") -> int:
    """Convert a Celsius reading to the display unit, rounded to a whole degree."""
    if unit == "F":
        return round(celsius * 9 / 5 + 32)
    return round(celsius)


def temperature_symbol(unit: TemperatureUnit = "C") -> str:
    return "°F" if unit == "F" else "°C"


def format_temperature(celsius: float | None, unit: TemperatureUnit = "C") -> str:
    """Display string such as ``21°C``; ``--`` when the reading is absent."""
    if celsius is None:
        return "--"
    return f"{convert_temperature(celsius, unit)}{temperature_symbol(unit)}"


def unit_name(unit: TemperatureUnit) -> str:
    return "Fahrenheit" if unit == "F" else "Celsius"


CONCENTRATION_UNITS = {
    "MICROGRAMS_PER_CUBIC_METER": "μg/m³",
    "PARTS_PER_BILLION": "ppb",
}


def format_concentration(value: float | None, units: str | None) -> str:
    """Pollutant concentration such as ``8.2 μg/m³``."""
    if value is None:
        return "--"
    if not units:
        return f"{value:.1f}"
    label = CONCENTRATION_UNITS.get(units, units.replace("_", " ").lower())
    return f"{value:.1f} {label}"
