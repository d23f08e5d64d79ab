"""
Prompt and schema definitions for the extraction model.

The overtime and total formulas appear in the prompt for context only.
DerivedFieldCalculator is the only place they are actually computed.
"""

from typing import Dict, Iterable, Any

NO_RULES_TEXT = "No previous rules. Use your best judgement."

SYSTEM_PROMPT_TEMPLATE = """
You are an expert data analyst for a construction company.
Your task is to extract labour attendance from WhatsApp messages (text or screenshots).

Fields to extract:
- Date
- Labour Name
- Site Name
- Base Salary (Daily rate)
- Day (1 for full day, 0.5 for half day/4 hours)
- OT Hours

SPECIAL LOGIC:
- If a message says "half day", set day to 0.5.
- If a message says "full day" or just lists the person, set day to 1.0.
- 8 hours is considered 1 full day.

CRITICAL CALCULATION RULE:
For every record, the application will calculate:
OT Amount = (Base Salary / 8) * OT Hours.
Total = (Base Salary * Day) + OT Amount.

LEARNED RULES FROM PREVIOUS HUMAN FEEDBACK:
{rules}

If data is missing or ambiguous, add a specific question to the 'uncertainties' array.
If you see repeated messages, parse them anyway; the application logic will handle deduplication.
Return the data in the specified JSON format.
"""

# Generative Language API schema (OpenAPI subset, upper-case type names)
RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "records": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "date": {"type": "STRING", "description": "Date of attendance (YYYY-MM-DD)"},
                    "labourName": {"type": "STRING", "description": "Full name of the labour"},
                    "siteName": {"type": "STRING", "description": "Name of the construction/work site"},
                    "baseSalary": {"type": "NUMBER", "description": "Daily base salary amount for a full day"},
                    "day": {"type": "NUMBER", "description": "Attendance units: 1.0 for full day, 0.5 for half day (4 hours)"},
                    "otHours": {"type": "NUMBER", "description": "Number of Overtime hours worked beyond the day's base"},
                },
                "required": ["date", "labourName", "siteName", "baseSalary", "day", "otHours"],
            },
        },
        "uncertainties": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Any questions or ambiguities found in the data that need human clarification",
        },
    },
    "required": ["records", "uncertainties"],
}


def render_rules(rules: Iterable[Dict[str, str]]) -> str:
    """
    Render learned rules one per line, in the order given.

    Example:
        >>> render_rules([{"pattern": "HD", "explanation": "half day"}])
        'Rule: HD -> Interpretation: half day'
    """
    lines = [
        f"Rule: {rule['pattern']} -> Interpretation: {rule['explanation']}"
        for rule in rules
    ]
    return "\n".join(lines) or NO_RULES_TEXT


def build_system_prompt(rules: Iterable[Dict[str, str]]) -> str:
    """Build the system instruction with the learned rules filled in."""
    return SYSTEM_PROMPT_TEMPLATE.format(rules=render_rules(rules))


def build_user_text(text: str) -> str:
    """Build the text part that carries the pasted messages."""
    return f"Process the following content:\n\nTEXT:\n{text}"
