"""
AI Mode: natural-language access to the media and food diaries.

Entry point: ai_mode.orchestrator.process_request() - classifies intent, then either
answers with a guarded SQL query or proposes validated actions awaiting confirmation.
"""
