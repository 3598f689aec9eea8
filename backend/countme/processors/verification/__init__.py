from .matcher import match, evaluate, price_matches, same_calendar_day, VerificationResult

__all__ = ["match", "evaluate", "price_matches", "same_calendar_day", "VerificationResult"]
