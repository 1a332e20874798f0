"""Result storage"""

from .sink import InMemoryResultSink, ResultSink, MAX_ASSESSMENT_HISTORY

__all__ = ["InMemoryResultSink", "ResultSink", "MAX_ASSESSMENT_HISTORY"]
