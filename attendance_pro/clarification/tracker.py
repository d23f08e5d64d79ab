"""
Clarification Tracker.

Lifecycle of a ClarificationRequest:

    pending --resolve(answer)--> resolved (removed from the active set)

Every resolution appends exactly one LearningRule whose pattern is the
question and whose explanation is the answer. Rules are append-only:
similar patterns are never merged, and a rule only disappears through
remove_rule().

Author: ML Engineering Team
"""

from typing import Any, Dict, Iterable, List, Optional

from attendance_pro.utils.logger import get_logger
from attendance_pro.models import ClarificationRequest, LearningRule

logger = get_logger(__name__)


class ClarificationTracker:
    """
    Owns the pending clarification requests and the learned rules.

    Attributes:
        pending: Open requests, oldest first (read-only copy)
        rules: Learned rules, oldest first (read-only copy)

    Example:
        >>> tracker = ClarificationTracker()
        >>> opened = tracker.open_requests(["Is Ravi's rate 800 or 850?"], {})
        >>> rule = tracker.resolve(opened[0].id, "Always 800 unless stated")
        >>> rule.pattern
        "Is Ravi's rate 800 or 850?"
    """

    def __init__(self) -> None:
        self._pending: List[ClarificationRequest] = []
        self._rules: List[LearningRule] = []

    @property
    def pending(self) -> List[ClarificationRequest]:
        return list(self._pending)

    @property
    def rules(self) -> List[LearningRule]:
        return list(self._rules)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def open_requests(
        self,
        uncertainties: Iterable[str],
        context: Optional[Dict[str, Any]] = None
    ) -> List[ClarificationRequest]:
        """
        Open one pending request per uncertainty string.

        Args:
            uncertainties: Questions returned by the gateway.
            context: The text and images that produced them, kept for
                    traceability. Shared by every request in the batch.

        Returns:
            The newly opened requests, in gateway order.
        """
        context = context or {}
        opened = [ClarificationRequest(content=question, context=context) for question in uncertainties]
        self._pending.extend(opened)

        if opened:
            logger.info(f"Opened {len(opened)} clarification requests ({len(self._pending)} pending)")
        return opened

    def find(self, request_id: str) -> Optional[ClarificationRequest]:
        for request in self._pending:
            if request.id == request_id:
                return request
        return None

    def resolve(self, request_id: str, answer: str) -> Optional[LearningRule]:
        """
        Answer a pending request and turn it into a learning rule.

        An unknown id is a silent no-op.

        Args:
            request_id: Id of a pending request.
            answer: Human explanation of the ambiguity.

        Returns:
            The new LearningRule, or None if the id is not pending.
        """
        request = self.find(request_id)
        if request is None:
            logger.debug(f"Ignoring resolve for unknown clarification: {request_id}")
            return None

        rule = LearningRule(pattern=request.content, explanation=answer)
        self._rules.append(rule)

        request.mark_resolved()
        self._pending = [r for r in self._pending if r.id != request_id]

        logger.info(f"Learned rule {rule.id} from clarification {request_id}")
        return rule

    def remove_rule(self, rule_id: str) -> bool:
        """
        Delete a learned rule. Records already extracted are not touched.

        Returns:
            True if a rule was removed, False if the id was unknown.
        """
        remaining = [rule for rule in self._rules if rule.id != rule_id]
        removed = len(remaining) != len(self._rules)
        self._rules = remaining

        if removed:
            logger.info(f"Removed learning rule {rule_id}")
        else:
            logger.debug(f"Ignoring removal of unknown rule: {rule_id}")
        return removed

    def rules_for_prompt(self) -> List[Dict[str, str]]:
        """Rules in creation order, as sent to the extraction gateway."""
        return [rule.to_prompt_dict() for rule in self._rules]
