"""Request sanitization transformers.

Each transformer handles a single, focused transformation of the request.
Transformers are executed in sequence by the RequestPipeline.
"""

from src.conversion.pipeline.transformers.empty_messages import EmptyMessageTransformer
from src.conversion.pipeline.transformers.message_annotations import (
    MessageAnnotationTransformer,
)
from src.conversion.pipeline.transformers.message_content import MessageContentTransformer
from src.conversion.pipeline.transformers.root_fields import RootFieldTransformer
from src.conversion.pipeline.transformers.system_message import (
    SystemAnnotationTransformer,
    SystemMessageTransformer,
)
from src.conversion.pipeline.transformers.tool_calls import ToolCallTransformer
from src.conversion.pipeline.transformers.tool_choice import ToolChoiceTransformer
from src.conversion.pipeline.transformers.tool_schema import ToolSchemaTransformer

__all__ = [
    "RootFieldTransformer",
    "ToolChoiceTransformer",
    "MessageAnnotationTransformer",
    "ToolSchemaTransformer",
    "ToolCallTransformer",
    "MessageContentTransformer",
    "EmptyMessageTransformer",
    "SystemMessageTransformer",
    "SystemAnnotationTransformer",
]
