"""
Attendance Pro - Source Package.

Turns informal attendance messages (chat text and screenshots) into a
reviewed attendance sheet. Each module has a single responsibility.

Modules:
    - models: Attendance records, learning rules, clarification requests
    - input_handler: Screenshot encoding
    - extraction: Model gateway and response parsing
    - calculator: Defaults and derived pay fields
    - reconciliation: Natural-key merge of new records
    - clarification: Open questions and learned rules
    - session: Controller owning the in-memory state
    - output_handler: CSV and Excel export
    - utils: Logging, exceptions, helpers

Architecture:
    Input -> Extraction -> Calculator -> Reconciliation -> Output
                 ^              |
                 |        Clarifications
                 +---- Learning rules
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

__all__ = [
    'models',
    'input_handler',
    'extraction',
    'calculator',
    'reconciliation',
    'clarification',
    'session',
    'output_handler',
    'utils'
]
