#!/usr/bin/env python3
"""
Diagnostic Progress Tracker Demo

Demonstrates the complete flow:
1. Answer a diagnostic, one question at a time
2. Resume it from a fresh session
3. Request and download the report
4. Show dashboard metrics and recent activity

Usage:
    python demo.py [data_dir]
    python demo.py  # Uses an in-memory store
"""

import json
import sys

from diagnostic_tracker.metrics import DashboardMetrics
from diagnostic_tracker.storage import DocumentStore, FileKeyValueStore, MemoryKeyValueStore
from diagnostic_tracker.tracking import DiagnosticFlow, QuestionBank, build_report_payload
from diagnostic_tracker.utils.constants import DIAGNOSTIC_MARKETING
from diagnostic_tracker.utils.time_format import format_timestamp

MARKETING_QUESTIONS = [
    {"id": "m1", "text": "Do you have a documented marketing strategy?"},
    {"id": "m2", "text": "Do you know your customer acquisition cost?"},
    {"id": "m3", "text": "Do you track return on ad spend per channel?"},
    {"id": "m4", "text": "Is your ideal customer profile written down?"},
    {"id": "m5", "text": "Do you run a regular email campaign?"},
    {"id": "m6", "text": "Do you review marketing results monthly?"},
    {"id": "m7", "text": "Do you collect customer testimonials?"},
    {"id": "m8", "text": "Is your website optimized for conversions?"},
    {"id": "m9", "text": "Do you have a marketing budget?"},
    {"id": "m10", "text": "Do you attribute sales to their lead source?"},
]


def main(data_dir: str = None):
    """Run the demo flow."""
    print("=" * 50)
    print("Diagnostic Progress Tracker Demo")
    print("=" * 50)
    print()

    if data_dir is None:
        backing = MemoryKeyValueStore()
        print("Using in-memory store")
    else:
        backing = FileKeyValueStore(data_dir)
        print(f"Using file store at: {data_dir}")

    bank = QuestionBank({DIAGNOSTIC_MARKETING: MARKETING_QUESTIONS})
    answers = ["Yes"] * 9 + ["No"]

    # =========================================================================
    # Step 1: Answer the first half
    # =========================================================================
    print()
    print("[1] Answering first half...")

    flow = DiagnosticFlow(DocumentStore(backing), bank)
    for value in answers[:5]:
        progress = flow.answer(DIAGNOSTIC_MARKETING, value)
    print(f"    -> Saved at question {progress.current_question}/{progress.total_questions}")

    # =========================================================================
    # Step 2: Resume in a new session
    # =========================================================================
    print()
    print("[2] Resuming in a new session...")

    store = DocumentStore(backing)
    flow = DiagnosticFlow(store, bank)
    resume = flow.start(DIAGNOSTIC_MARKETING)
    print(f"    -> Resuming at question {resume.current_question + 1}")

    for value in answers[resume.current_question:]:
        progress = flow.answer(DIAGNOSTIC_MARKETING, value)
    print(f"    -> Completed with score {progress.score}%")

    # =========================================================================
    # Step 3: Report
    # =========================================================================
    print()
    print("[3] Requesting report...")

    store.add_report_request(DIAGNOSTIC_MARKETING, "Ada Lovelace", "ada@example.com", progress.score)
    store.mark_report_downloaded(DIAGNOSTIC_MARKETING)

    payload = build_report_payload(store.load(), DIAGNOSTIC_MARKETING)
    print(f"    -> {payload.display_name}: {payload.score_message}")

    # =========================================================================
    # Step 4: Dashboard
    # =========================================================================
    print()
    print("[4] Dashboard...")

    doc = store.load()
    summary = DashboardMetrics(doc, clock=store.clock).summary()
    print(f"    -> Completed: {summary.completed}/{summary.total_diagnostics}")
    print(f"    -> Average score: {summary.average_score}%")
    print(f"    -> Last active: {summary.last_active_label}")

    print()
    print("Recent activity:")
    for activity in store.recent_activities():
        print(f"    {format_timestamp(activity.timestamp)}  {activity.description}")

    print()
    print("Summary (JSON):")
    print("-" * 30)
    print(json.dumps(summary.to_dict(), indent=2))

    return 0


if __name__ == "__main__":
    data_dir = sys.argv[1] if len(sys.argv) > 1 else None
    sys.exit(main(data_dir))
