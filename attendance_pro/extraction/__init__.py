"""
Extraction Module for Attendance Pro.

This module talks to the external model service that turns chat text
and screenshots into candidate attendance records.

Features:
    - Narrow gateway contract: extract(text, images, rules)
    - Learned rules rendered into the system prompt
    - Structured JSON response schema
    - Total fallback on transport or parse failures

Providers:
    - gemini: Google Generative Language REST API (default)

Author: ML Engineering Team
"""

from .extraction_response import ExtractionResponse
from .gateway import ExtractionGateway, create_gateway
from .gemini_backend import GeminiGateway

__all__ = ['ExtractionResponse', 'ExtractionGateway', 'GeminiGateway', 'create_gateway']
