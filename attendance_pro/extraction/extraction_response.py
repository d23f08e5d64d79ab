"""
Extraction Response Data Class.

This module defines the structure returned by every extraction gateway:
a list of partial candidate records plus a list of uncertainty strings.

Author: ML Engineering Team
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional
import json

from config import get_config
from attendance_pro.utils.exceptions import GatewayResponseError

DEFAULT_FALLBACK_UNCERTAINTY = (
    "Failed to parse the provided information. Please check the format."
)


@dataclass
class ExtractionResponse:
    """
    Represents one answer from the extraction gateway.

    Candidate records are kept as the raw dictionaries the model returned
    (camelCase keys, any key may be absent). Turning them into
    AttendanceRecord objects is the calculator's job.

    Attributes:
        records: Partial candidate records
        uncertainties: Free-text questions about ambiguous input
        model_name: Name of the model that answered
        processing_time: Seconds spent in the gateway call
        is_fallback: True when this is the diagnostic fallback response

    Example:
        >>> response = ExtractionResponse.from_json(
        ...     '{"records": [{"labourName": "Ravi"}], "uncertainties": []}'
        ... )
        >>> response.records[0]["labourName"]
        'Ravi'
    """
    records: List[Dict[str, Any]] = field(default_factory=list)
    uncertainties: List[str] = field(default_factory=list)
    model_name: Optional[str] = None
    processing_time: float = 0.0
    is_fallback: bool = False

    @property
    def has_uncertainties(self) -> bool:
        return len(self.uncertainties) > 0

    @classmethod
    def fallback(cls, message: Optional[str] = None) -> 'ExtractionResponse':
        """
        Build the diagnostic response used whenever extraction fails.

        Args:
            message: Uncertainty text. Defaults to the configured message.

        Returns:
            Response with no records and exactly one uncertainty.
        """
        if message is None:
            message = get_config("gateway.fallback_uncertainty", DEFAULT_FALLBACK_UNCERTAINTY)
        return cls(records=[], uncertainties=[message], is_fallback=True)

    @classmethod
    def from_payload(cls, payload: Any) -> 'ExtractionResponse':
        """
        Validate a decoded JSON payload.

        The payload must be an object with a "records" list. The
        "uncertainties" list may be omitted. Non-object entries in
        "records" are dropped.

        Args:
            payload: Decoded JSON value.

        Returns:
            ExtractionResponse instance.

        Raises:
            GatewayResponseError: If the payload has the wrong shape.
        """
        if not isinstance(payload, dict):
            raise GatewayResponseError(f"expected an object, got {type(payload).__name__}")

        if 'records' not in payload:
            raise GatewayResponseError("missing 'records'")

        records = payload.get('records')
        uncertainties = payload.get('uncertainties') or []

        if not isinstance(records, list):
            raise GatewayResponseError("'records' is not a list")
        if not isinstance(uncertainties, list):
            raise GatewayResponseError("'uncertainties' is not a list")

        return cls(
            records=[r for r in records if isinstance(r, dict)],
            uncertainties=['' if u is None else str(u) for u in uncertainties]
        )

    @classmethod
    def from_json(cls, text: Optional[str]) -> 'ExtractionResponse':
        """
        Parse the JSON text produced by the model.

        Markdown code fences around the JSON are tolerated.

        Raises:
            GatewayResponseError: If the text is empty or not valid JSON.
        """
        if not text or not text.strip():
            raise GatewayResponseError("empty response body")

        cleaned = text.strip()
        if cleaned.startswith("```json"):
            cleaned = cleaned[7:]
        if cleaned.startswith("```"):
            cleaned = cleaned[3:]
        if cleaned.endswith("```"):
            cleaned = cleaned[:-3]

        try:
            payload = json.loads(cleaned.strip())
        except json.JSONDecodeError as e:
            raise GatewayResponseError(f"invalid JSON: {e}")

        return cls.from_payload(payload)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'records': self.records,
            'uncertainties': self.uncertainties,
            'model_name': self.model_name,
            'processing_time': self.processing_time,
            'is_fallback': self.is_fallback
        }

    def __repr__(self) -> str:
        return (
            f"ExtractionResponse("
            f"records={len(self.records)}, "
            f"uncertainties={len(self.uncertainties)}, "
            f"fallback={self.is_fallback})"
        )
