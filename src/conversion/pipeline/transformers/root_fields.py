"""Root field transformer.

Removes top-level request fields the backend cannot accept.
"""

from src.conversion.pipeline.base import RequestTransformer, SanitizeContext
from src.core.constants import Constants


class RootFieldTransformer(RequestTransformer):
    """Deletes denylisted top-level keys (cache, citation, tiering, logprob ...)."""

    def __init__(self, fields: tuple[str, ...] = Constants.UNSUPPORTED_ROOT_FIELDS) -> None:
        self.fields = fields

    def transform(self, context: SanitizeContext) -> SanitizeContext:
        present = [field for field in self.fields if field in context.request]
        if not present:
            return context

        new_request = {k: v for k, v in context.request.items() if k not in present}
        return context.with_request(new_request, removed=len(present))
