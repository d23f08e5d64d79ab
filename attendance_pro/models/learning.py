"""
Learning Rule and Clarification Request Data Classes.

A ClarificationRequest is an open question raised by one extraction.
Answering it produces a LearningRule, which is sent back to the model
on every later extraction.
"""

from dataclasses import dataclass, field
from typing import Dict, Any

from attendance_pro.utils.helpers import generate_id, now_millis

STATUS_PENDING = 'pending'
STATUS_RESOLVED = 'resolved'


@dataclass(frozen=True)
class LearningRule:
    """
    A durable interpretation hint for the extraction gateway.

    Attributes:
        pattern: The original ambiguous text (the clarification question)
        explanation: The human-supplied resolution
        id: Unique identifier
        created_at: Creation instant in epoch milliseconds
    """
    pattern: str
    explanation: str
    id: str = field(default_factory=generate_id)
    created_at: int = field(default_factory=now_millis)

    def to_prompt_dict(self) -> Dict[str, str]:
        """The part of the rule that is sent to the gateway."""
        return {'pattern': self.pattern, 'explanation': self.explanation}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'pattern': self.pattern,
            'explanation': self.explanation,
            'createdAt': self.created_at,
        }


@dataclass
class ClarificationRequest:
    """
    An open question raised by the last extraction call.

    Attributes:
        content: Question text from the gateway
        context: The text and images that produced the question
        id: Unique identifier
        status: 'pending' or 'resolved'
    """
    content: str
    context: Dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=generate_id)
    status: str = STATUS_PENDING

    @property
    def is_pending(self) -> bool:
        return self.status == STATUS_PENDING

    def mark_resolved(self) -> None:
        self.status = STATUS_RESOLVED

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'content': self.content,
            'context': self.context,
            'status': self.status,
        }
