import os
import sys
from typing import Any, Dict, List

import pytest

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from config import ConfigurationManager  # noqa: E402
from attendance_pro.calculator import DerivedFieldCalculator  # noqa: E402
from attendance_pro.extraction import ExtractionGateway, ExtractionResponse  # noqa: E402
from attendance_pro.models import AttendanceRecord  # noqa: E402
from attendance_pro.session import AttendanceSession  # noqa: E402


RAVI = {
    "date": "2024-01-01",
    "labourName": "Ravi",
    "siteName": "Site A",
    "baseSalary": 800,
    "day": 1,
    "otHours": 2,
}


class StubGateway(ExtractionGateway):
    """Deterministic gateway replaying canned responses in order.

    The last response is repeated once the queue runs out. An Exception
    instance in the queue is raised instead of returned.
    """

    name = "stub"

    def __init__(self, *responses: Any):
        self.responses: List[Any] = list(responses) or [{"records": [], "uncertainties": []}]
        self.calls: List[Dict[str, Any]] = []

    def extract(self, text, images, rules):
        self.calls.append({"text": text, "images": list(images), "rules": list(rules)})
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        if isinstance(item, dict):
            return ExtractionResponse.from_payload(item)
        return item


@pytest.fixture(autouse=True)
def fresh_config():
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()


@pytest.fixture
def calculator():
    return DerivedFieldCalculator()


@pytest.fixture
def make_record(calculator):
    counter = {"n": 0}

    def _make(**fields) -> AttendanceRecord:
        counter["n"] += 1
        candidate = dict(RAVI)
        candidate.update(fields)
        return calculator.calculate(candidate, record_id=f"rec-{counter['n']}")

    return _make


@pytest.fixture
def stub_gateway():
    return StubGateway()


@pytest.fixture
def make_session():
    def _make(*responses: Any) -> AttendanceSession:
        return AttendanceSession(StubGateway(*responses))

    return _make
