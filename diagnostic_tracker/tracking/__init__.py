"""Consumers of the document store: answer flow and report hand-off."""

from .question_bank import QuestionBank
from .diagnostic_flow import DiagnosticFlow
from .report_builder import build_report_payload, display_name, score_message

__all__ = [
    'QuestionBank',
    'DiagnosticFlow',
    'build_report_payload',
    'display_name',
    'score_message',
]
