"""
AI Mode: error taxonomy for the natural-language pipeline.

Validation failures and unresolved update/delete targets are not exceptions:
they are recorded as errors on the action's ValidationVerdict.
"""


class AIModeError(Exception):
    """Base class for pipeline errors that are converted to user-facing messages."""


class GenerationError(AIModeError):
    """The text-to-SQL / text-to-JSON oracle was unreachable or returned unparsable output."""


class QueryRejectedError(AIModeError):
    """A generated statement failed the read-only allow-list and never reached the store."""


class QueryExecutionError(AIModeError):
    """An allowed statement failed while running against the store."""


class ExecutionError(AIModeError):
    """The store rejected a single create/update/delete."""


class UserInputError(AIModeError):
    """The user asked for something that cannot be done as given (e.g. nothing selected)."""
