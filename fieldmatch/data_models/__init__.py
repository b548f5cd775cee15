from .match_result import FieldMismatch, MatchResult

__all__ = [
    "FieldMismatch",
    "MatchResult",
]
