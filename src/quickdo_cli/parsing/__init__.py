"""Natural-language parsing stages: markers, dates, priority."""

from .dates import (
    ChainedDateResolver,
    DateparserResolver,
    DateResolver,
    RuleBasedDateResolver,
    get_date_resolver,
)
from .priority import infer_priority
from .tokens import TokenExtractor, collapse_whitespace, extract_tokens

__all__ = [
    "TokenExtractor",
    "extract_tokens",
    "collapse_whitespace",
    "DateResolver",
    "RuleBasedDateResolver",
    "DateparserResolver",
    "ChainedDateResolver",
    "get_date_resolver",
    "infer_priority",
]
