"""
OpenAI-compatible vision client for the RHK Engine.

Gemini is reached through its OpenAI-compatible endpoint, so the stock
`openai` SDK handles transport, timeouts and retries. The client sends one
system prompt, one user turn (text plus an optional image data URL) and an
optional JSON schema as the structured-output constraint.
"""

from typing import Any, Dict, List, Optional

from loguru import logger
from openai import OpenAI


class ConfigurationError(ValueError):
    """Missing or unusable analyzer configuration; retrying will not help."""


class LLMClient:
    """Thin wrapper over the Chat Completions API, the single analyzer entry point."""

    def __init__(
        self,
        api_key: str,
        model_name: str,
        base_url: Optional[str] = None,
        timeout: float = 120.0,
        max_retries: int = 2,
        client: Optional[Any] = None,
    ):
        """
        Initialize the client and keep the connection details.

        Args:
            api_key: credential for the analyzer service
            model_name: model id, e.g. gemini-2.5-flash
            base_url: OpenAI-compatible endpoint; the SDK default when empty
            timeout: per-request timeout in seconds
            max_retries: retries performed by the SDK on transient errors
            client: prebuilt OpenAI-compatible client (tests)
        """
        if not api_key:
            raise ConfigurationError("Analyzer API key is required.")
        if not model_name:
            raise ConfigurationError("Analyzer model name is required.")

        self.api_key = api_key
        self.base_url = base_url
        self.model_name = model_name
        self.timeout = timeout

        if client is None:
            client_kwargs: Dict[str, Any] = {
                "api_key": api_key,
                "max_retries": max_retries,
                "timeout": timeout,
            }
            if base_url:
                client_kwargs["base_url"] = base_url
            client = OpenAI(**client_kwargs)
        self.client = client

    def invoke_vision(
        self,
        system_prompt: str,
        user_prompt: str,
        image: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> str:
        """
        Call the model once, non-streaming.

        Args:
            system_prompt: system role prompt
            user_prompt: user instruction text
            image: image as a `data:` URL, attached after the text
            response_schema: JSON schema the answer must follow
            **kwargs: sampling parameters (temperature, top_p)

        Returns:
            The response text stripped of surrounding whitespace.
        """
        content: List[Dict[str, Any]] = [{"type": "text", "text": user_prompt}]
        if image:
            content.append({"type": "image_url", "image_url": {"url": image}})

        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": content},
        ]

        allowed_keys = {"temperature", "top_p"}
        extra_params = {key: value for key, value in kwargs.items() if key in allowed_keys and value is not None}
        if response_schema is not None:
            extra_params["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": "rhk_analysis",
                    "schema": response_schema,
                },
            }

        logger.debug(f"analyzer request: model={self.model_name}, image={'yes' if image else 'no'}")
        response = self.client.chat.completions.create(
            model=self.model_name,
            messages=messages,
            **extra_params,
        )

        if response.choices and response.choices[0].message:
            return self.validate_response(response.choices[0].message.content)
        return ""

    @staticmethod
    def validate_response(response: Optional[str]) -> str:
        """Normalize None or whitespace-padded responses."""
        if response is None:
            return ""
        return response.strip()

    def get_model_info(self) -> Dict[str, Any]:
        return {
            "provider": "gemini" if self.base_url and "googleapis" in self.base_url else "openai-compatible",
            "model": self.model_name,
            "api_base": self.base_url or "default",
        }


__all__ = ["LLMClient", "ConfigurationError"]
