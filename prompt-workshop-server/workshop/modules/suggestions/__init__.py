"""Category and tag suggestions for prompt drafts (services live in ``.service``)."""

from .models import Suggestion, SuggestionSource

__all__ = ["Suggestion", "SuggestionSource"]
