#!/usr/bin/env python3
"""
Text-generation integration for hair advice.

Two interchangeable backends produce report text from a prompt:
- AdviceClient calls the Together AI chat completions endpoint through the
  OpenAI-compatible SDK.
- EdgeFunctionAdviceClient posts the prompt to the hosted
  "get-ai-hair-advice" function, which holds the API key server-side.

Both return an AdviceResult instead of raising on service failures.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import openai
import requests
from openai import OpenAI

from ..core.config import DEFAULT_ADVICE_MODEL, TOGETHER_BASE_URL
from ..core.exceptions import AdviceServiceError, AdviceTimeoutError, ConfigurationError

logger = logging.getLogger(__name__)

EMPTY_PROMPT_ERROR = "Prompt cannot be empty."
PARSE_ERROR = "Failed to parse AI response."
EDGE_FUNCTION_NAME = "get-ai-hair-advice"


@dataclass(frozen=True)
class AdviceResult:
    """Outcome of one text-generation call: text on success, message on failure."""
    success: bool
    data: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, text: str) -> 'AdviceResult':
        return cls(success=True, data=text)

    @classmethod
    def fail(cls, message: str) -> 'AdviceResult':
        return cls(success=False, error=message)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {'success': True, 'data': self.data}
        return {'success': False, 'error': self.error}


def _valid_prompt(prompt: Any) -> bool:
    return isinstance(prompt, str) and bool(prompt.strip())


class AdviceClient:
    """Client for the Together AI chat completions API."""

    def __init__(self, api_key: Optional[str] = None,
                 model: str = DEFAULT_ADVICE_MODEL,
                 base_url: str = TOGETHER_BASE_URL,
                 timeout: int = 60,
                 client: Optional[Any] = None):
        """
        Initialize Together AI client.

        Args:
            api_key: Together AI API key
            model: Chat model name
            base_url: OpenAI-compatible endpoint
            timeout: Request timeout in seconds
            client: Pre-built OpenAI-compatible client (tests)
        """
        if client is None and not api_key:
            raise ConfigurationError('TOGETHER_API_KEY', "API key not provided")

        self.model = model
        self.timeout = timeout
        self.client = client or OpenAI(api_key=api_key, base_url=base_url, timeout=timeout)

    @classmethod
    def from_config(cls, integration_config) -> 'AdviceClient':
        return cls(
            api_key=integration_config.together_api_key,
            model=integration_config.advice_model,
            base_url=integration_config.together_base_url,
            timeout=integration_config.advice_timeout,
        )

    def get_advice(self, prompt: str) -> AdviceResult:
        """
        Send one user prompt and return the model's reply.

        Args:
            prompt: Complete prompt text

        Returns:
            AdviceResult with the reply text or an error message
        """
        if not _valid_prompt(prompt):
            return AdviceResult.fail(EMPTY_PROMPT_ERROR)

        messages: List[Dict[str, str]] = [{"role": "user", "content": prompt}]
        logger.info(f"Sending prompt to Together AI ({len(prompt)} chars, model={self.model})")
        logger.debug(f"Prompt: {prompt[:500]}")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
            )
        except openai.APITimeoutError as e:
            error = AdviceTimeoutError('together', self.timeout)
            logger.error(f"{error.message}: {e}")
            return AdviceResult.fail(error.message)
        except openai.OpenAIError as e:
            error = AdviceServiceError('together', self.model, e)
            logger.error(f"{error.message}: {e}")
            return AdviceResult.fail(str(e) or "An unknown error occurred with the AI service.")

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError):
            content = None

        if not content:
            logger.error(f"Unexpected response structure from Together AI: {response!r}")
            return AdviceResult.fail(PARSE_ERROR)

        usage = getattr(response, 'usage', None)
        if usage is not None:
            logger.info(f"Together AI call successful - tokens: {usage.prompt_tokens} prompt + "
                        f"{usage.completion_tokens} completion = {usage.total_tokens} total")
        else:
            logger.info("Together AI call successful")
        return AdviceResult.ok(content)


class EdgeFunctionAdviceClient:
    """Client for the hosted hair advice function."""

    def __init__(self, supabase_url: Optional[str], anon_key: Optional[str],
                 timeout: int = 60, function_name: str = EDGE_FUNCTION_NAME):
        if not supabase_url or not anon_key:
            raise ConfigurationError('SUPABASE_ANON_KEY', "Supabase URL and anon key are required for the edge function backend")

        self.function_url = f"{supabase_url.rstrip('/')}/functions/v1/{function_name}"
        self.anon_key = anon_key
        self.timeout = timeout

    @classmethod
    def from_config(cls, integration_config) -> 'EdgeFunctionAdviceClient':
        return cls(
            supabase_url=integration_config.supabase_url,
            anon_key=integration_config.supabase_anon_key,
            timeout=integration_config.advice_timeout,
        )

    def get_advice(self, prompt: str) -> AdviceResult:
        """
        POST the prompt to the function and read ``aiResponse`` or ``error``.

        Returns:
            AdviceResult with the reply text or an error message
        """
        if not _valid_prompt(prompt):
            return AdviceResult.fail(EMPTY_PROMPT_ERROR)

        logger.info(f"Invoking {self.function_url} ({len(prompt)} chars)")
        try:
            response = requests.post(
                self.function_url,
                json={"prompt": prompt},
                timeout=self.timeout,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.anon_key}",
                    "apikey": self.anon_key,
                }
            )
        except requests.Timeout:
            error = AdviceTimeoutError('edge_function', self.timeout)
            logger.error(error.message)
            return AdviceResult.fail(error.message)
        except requests.RequestException as e:
            logger.error(f"Failed to invoke hair advice function: {e}")
            return AdviceResult.fail(str(e))

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not isinstance(body, dict):
            body = {}

        if response.status_code != 200 or body.get('error'):
            message = body.get('error') or f"Function call failed with status {response.status_code}"
            logger.error(f"Hair advice function error ({response.status_code}): {message}")
            return AdviceResult.fail(message)

        ai_response = body.get('aiResponse')
        if not ai_response:
            logger.error("Hair advice function returned no aiResponse")
            return AdviceResult.fail(PARSE_ERROR)

        logger.info("Hair advice function call successful")
        return AdviceResult.ok(ai_response)


def create_advice_client(integration_config):
    """Build the client for the configured ADVICE_BACKEND."""
    if integration_config.advice_backend == 'edge_function':
        return EdgeFunctionAdviceClient.from_config(integration_config)
    return AdviceClient.from_config(integration_config)
