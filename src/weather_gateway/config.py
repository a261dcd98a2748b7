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

"""Gateway configuration loaded from environment variables."""

import os
from dataclasses import dataclass

from weather_gateway.weather import DEFAULT_TIMEOUT, FORECAST_URL, GEOCODING_URL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class GatewaySettings:
    """Process-wide settings, immutable after startup."""

    host: str = "0.0.0.0"
    port: int = 3001
    upstream_timeout: float = DEFAULT_TIMEOUT
    geocoding_url: str = GEOCODING_URL
    forecast_url: str = FORECAST_URL
    model_id: str = "anthropic.claude-3-5-sonnet-20241022-v2:0"
    region: str = "us-east-1"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None) -> "GatewaySettings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Raises:
            ValueError: When PORT or UPSTREAM_TIMEOUT is not a number
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        return cls(
            host=env.get("HOST", defaults.host),
            port=_parse_number(env, "PORT", defaults.port, int),
            upstream_timeout=_parse_number(
                env, "UPSTREAM_TIMEOUT", defaults.upstream_timeout, float
            ),
            geocoding_url=env.get("GEOCODING_URL", defaults.geocoding_url),
            forecast_url=env.get("FORECAST_URL", defaults.forecast_url),
            model_id=env.get("BEDROCK_MODEL_ID", defaults.model_id),
            region=env.get("AWS_REGION", defaults.region),
            log_level=env.get("LOG_LEVEL", defaults.log_level).upper(),
        )


def _parse_number(env, name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value
