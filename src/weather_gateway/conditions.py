# Copyright 2025 Amazon.com, Inc. and its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Weather condition codebook.

Maps the integer weather codes returned by the forecast service to English
condition labels.
"""

from types import MappingProxyType

UNKNOWN_CONDITION = "Unknown"

WEATHER_CONDITIONS = MappingProxyType(
    {
        0: "Clear sky",
        1: "Mainly clear",
        2: "Partly cloudy",
        3: "Overcast",
        45: "Foggy",
        48: "Depositing rime fog",
        51: "Light drizzle",
        53: "Moderate drizzle",
        55: "Dense drizzle",
        56: "Light freezing drizzle",
        57: "Dense freezing drizzle",
        61: "Slight rain",
        63: "Moderate rain",
        65: "Heavy rain",
        66: "Light freezing rain",
        67: "Heavy freezing rain",
        71: "Slight snow fall",
        73: "Moderate snow fall",
        75: "Heavy snow fall",
        77: "Snow grains",
        80: "Slight rain showers",
        81: "Moderate rain showers",
        82: "Violent rain showers",
        85: "Slight snow showers",
        86: "Heavy snow showers",
        95: "Thunderstorm",
        96: "Thunderstorm with slight hail",
        99: "Thunderstorm with heavy hail",
    }
)


def describe_weather_code(code) -> str:
    """
    Return the condition label for a weather code.

    Args:
        code: Weather code as reported by the forecast service.

    Returns:
        The English label, or "Unknown" for codes outside the codebook.
    """
    # bool is an int subclass but never a weather code
    if isinstance(code, bool) or not isinstance(code, int):
        return UNKNOWN_CONDITION
    return WEATHER_CONDITIONS.get(code, UNKNOWN_CONDITION)
