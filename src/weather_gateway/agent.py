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
Agent Proxy.

The gateway talks to a conversational agent only through a single
`generate(prompt)` call. Any object with that method and a result carrying a
`text` attribute can be plugged in, which keeps the agent runtime out of the
gateway and lets tests inject stubs.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from weather_gateway.exceptions import AgentError, InvalidInputError, error_message

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response from agent"


@dataclass(frozen=True)
class AgentResult:
    """Result of one agent generation."""

    text: str | None = None


class AgentCollaborator(Protocol):
    """An external agent capable of answering a text prompt."""

    def generate(self, prompt: str) -> AgentResult: ...


class AgentProxy:
    """Thin adapter around an agent collaborator with error normalization."""

    def __init__(self, collaborator: AgentCollaborator | None):
        """
        Initialize the proxy.

        Args:
            collaborator: The agent to delegate to. None means the agent could
                not be created at startup; every call then fails with AgentError.
        """
        self.collaborator = collaborator

    @property
    def available(self) -> bool:
        return self.collaborator is not None

    def ask(self, prompt: str) -> str:
        """
        Ask the agent a question.

        Args:
            prompt: Non-empty prompt text

        Returns:
            The reply text, or "No response from agent" when the agent
            returned no text.

        Raises:
            InvalidInputError: When the prompt is empty
            AgentError: When the agent is unavailable or raised
        """
        if not isinstance(prompt, str) or not prompt:
            raise InvalidInputError("Message is required")
        if self.collaborator is None:
            raise AgentError("Agent is not available")

        logger.info(f"Asking agent: {prompt[:100]}")
        try:
            result = self.collaborator.generate(prompt)
        except Exception as e:
            logger.error(f"Agent generation failed: {e}")
            raise AgentError(error_message(e)) from e

        text = getattr(result, "text", None)
        return text or NO_RESPONSE
