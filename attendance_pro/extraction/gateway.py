"""
Extraction Gateway Interface.

Every provider implements extract(text, images, rules) and must never
raise for transport or parse failures: those come back as
ExtractionResponse.fallback(). The session relies on this contract but
still guards the call.

Usage:
    from attendance_pro.extraction import create_gateway

    gateway = create_gateway()
    response = gateway.extract(text, images, rules)

Author: ML Engineering Team
"""

from typing import Dict, List, Optional, Sequence

from config import get_config
from attendance_pro.utils.logger import get_logger
from attendance_pro.utils.exceptions import GatewayConfigurationError
from .extraction_response import ExtractionResponse

logger = get_logger(__name__)


class ExtractionGateway:
    """
    Base class for extraction providers.

    Attributes:
        name: Provider name used in logs.
    """

    name = "base"

    def extract(
        self,
        text: str,
        images: Sequence[str],
        rules: Sequence[Dict[str, str]]
    ) -> ExtractionResponse:
        """
        Extract candidate records from text and images.

        Args:
            text: Pasted chat text (may be empty).
            images: Ordered base64-encoded image blobs.
            rules: Ordered learned rules as {pattern, explanation}.

        Returns:
            ExtractionResponse with records and uncertainties.
        """
        raise NotImplementedError


SUPPORTED_PROVIDERS: List[str] = ['gemini']


def create_gateway(provider: Optional[str] = None, **kwargs) -> ExtractionGateway:
    """
    Build the configured extraction gateway.

    Args:
        provider: Provider name. If None, uses gateway.provider from config.
        **kwargs: Passed to the provider constructor.

    Returns:
        ExtractionGateway instance.

    Raises:
        GatewayConfigurationError: If the provider is unknown or cannot
            be configured.
    """
    provider = (provider or get_config("gateway.provider", "gemini")).lower()

    if provider == "gemini":
        from .gemini_backend import GeminiGateway
        gateway = GeminiGateway(**kwargs)
    else:
        raise GatewayConfigurationError(
            "gateway.provider",
            f"unknown provider '{provider}', supported: {SUPPORTED_PROVIDERS}"
        )

    logger.info(f"Extraction gateway initialized with provider: {provider}")
    return gateway
