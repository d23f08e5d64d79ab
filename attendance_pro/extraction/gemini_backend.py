"""
Gemini Extraction Backend.

This module provides the GeminiGateway class that sends pasted chat text
and screenshots to the Google Generative Language REST API and parses
the structured JSON it returns.

Approach:
    A single generateContent call with the learned rules in the system
    instruction, the chat text and every image as request parts, and a
    response schema that forces a {records, uncertainties} object.

Author: ML Engineering Team
"""

import os
import time
from typing import Any, Dict, List, Optional, Sequence

import requests

from config import get_config
from attendance_pro.utils.logger import get_logger
from attendance_pro.utils.exceptions import (
    GatewayConfigurationError,
    GatewayError,
    GatewayRequestError,
    GatewayResponseError,
)
from .extraction_response import ExtractionResponse
from .gateway import ExtractionGateway
from .prompts import RESPONSE_SCHEMA, build_system_prompt, build_user_text

logger = get_logger(__name__)


class GeminiGateway(ExtractionGateway):
    """
    Extraction gateway backed by a Gemini model.

    Transport errors, non-200 answers and unparseable bodies are logged
    and turned into ExtractionResponse.fallback(); extract() itself never
    raises for them.

    Attributes:
        model_name: Gemini model identifier
        base_url: REST API base URL
        timeout: Transport timeout in seconds
        image_mime_type: MIME type declared for every image part

    Example:
        >>> gateway = GeminiGateway(api_key="...")
        >>> response = gateway.extract("Ravi full day 800", [], [])
        >>> print(response.records)
    """

    name = "gemini"

    DEFAULT_MODEL = "gemini-3-flash-preview"
    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ) -> None:
        """
        Initialize the Gemini gateway.

        Args:
            api_key: API key. If None, uses gateway.api_key from config,
                    then the environment variable named by
                    gateway.api_key_env.
            model_name: Model identifier. If None, uses config.
            base_url: API base URL. If None, uses config.
            timeout: Transport timeout in seconds. If None, uses config.
            session: Optional requests session (shared connection pool).

        Raises:
            GatewayConfigurationError: If no API key can be found.
        """
        api_key_env = get_config("gateway.api_key_env", "GEMINI_API_KEY")
        self.api_key = api_key or get_config("gateway.api_key") or os.environ.get(api_key_env)

        if not self.api_key:
            raise GatewayConfigurationError(
                "gateway.api_key",
                f"set gateway.api_key in settings.yaml or the {api_key_env} environment variable"
            )

        self.model_name = model_name or get_config("gateway.model", self.DEFAULT_MODEL)
        self.base_url = (base_url or get_config("gateway.base_url", self.DEFAULT_BASE_URL)).rstrip('/')
        self.timeout = timeout or get_config("gateway.timeout_seconds", 120)
        self.image_mime_type = get_config("gateway.image_mime_type", "image/png")
        self.session = session or requests.Session()

        logger.info(f"GeminiGateway initialized with model: {self.model_name}")

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model_name}:generateContent"

    def extract(
        self,
        text: str,
        images: Sequence[str],
        rules: Sequence[Dict[str, str]]
    ) -> ExtractionResponse:
        """
        Extract candidate records from chat text and screenshots.

        Args:
            text: Pasted chat text (may be empty).
            images: Ordered base64 image blobs, with or without a data-URL prefix.
            rules: Ordered learned rules as {pattern, explanation}.

        Returns:
            Parsed ExtractionResponse, or the fallback response on failure.
        """
        start_time = time.time()
        body = self.build_request(text, images, rules)

        logger.debug(
            f"Sending extraction request: {len(text or '')} chars, "
            f"{len(images)} images, {len(rules)} rules"
        )

        try:
            payload = self._post(body)
            response = ExtractionResponse.from_json(self._response_text(payload))
        except GatewayError as e:
            logger.error(f"Extraction failed: {e}")
            response = ExtractionResponse.fallback()

        response.model_name = self.model_name
        response.processing_time = time.time() - start_time

        logger.info(
            f"Extraction complete: {len(response.records)} records, "
            f"{len(response.uncertainties)} uncertainties, "
            f"time: {response.processing_time:.2f}s"
        )
        return response

    def build_request(
        self,
        text: str,
        images: Sequence[str],
        rules: Sequence[Dict[str, str]]
    ) -> Dict[str, Any]:
        """
        Build the generateContent request body.

        Returns:
            JSON-serialisable request body.
        """
        parts: List[Dict[str, Any]] = [{"text": build_user_text(text or "")}]

        for image in images:
            parts.append({
                "inlineData": {
                    "mimeType": self.image_mime_type,
                    "data": self.strip_data_url(image)
                }
            })

        return {
            "systemInstruction": {"parts": [{"text": build_system_prompt(rules)}]},
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA
            }
        }

    @staticmethod
    def strip_data_url(image: str) -> str:
        """
        Remove a "data:<mime>;base64," prefix if present.

        Example:
            >>> GeminiGateway.strip_data_url("data:image/png;base64,AAAA")
            'AAAA'
        """
        if image.startswith("data:") and "," in image:
            return image.split(",", 1)[1]
        return image

    def _post(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST the request body and decode the JSON answer.

        Raises:
            GatewayRequestError: On transport errors or non-200 status.
            GatewayResponseError: If the answer is not JSON.
        """
        try:
            http_response = self.session.post(
                self.endpoint,
                headers={
                    "x-goog-api-key": self.api_key,
                    "content-type": "application/json"
                },
                json=body,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise GatewayRequestError(self.endpoint, str(e))

        if http_response.status_code != 200:
            raise GatewayRequestError(
                self.endpoint,
                http_response.text[:500],
                status_code=http_response.status_code
            )

        try:
            return http_response.json()
        except ValueError as e:
            raise GatewayResponseError(f"response is not JSON: {e}")

    @staticmethod
    def _response_text(payload: Dict[str, Any]) -> str:
        """
        Concatenate the text parts of the first candidate.

        Raises:
            GatewayResponseError: If the payload has no candidate text.
        """
        try:
            parts = payload["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError):
            raise GatewayResponseError("no candidate content in response")

        text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
        if not text:
            raise GatewayResponseError("candidate content has no text")
        return text
