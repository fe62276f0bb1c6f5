"""Request pipeline factory.

Builds the default request sanitization pipeline with all transformers.
"""

from src.conversion.pipeline.base import RequestPipeline, RequestTransformer
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


class RequestPipelineFactory:
    """Factory for creating request sanitization pipelines.

    Provides a default pipeline configuration with all transformers in the
    correct order. Can be extended to create custom pipeline configurations.
    """

    @staticmethod
    def create_default() -> RequestPipeline:
        """Create the default request sanitization pipeline.

        Transformers are executed in the following order:
        1. RootFieldTransformer - Drop unsupported top-level fields
        2. ToolChoiceTransformer - Map tool_choice
        3. MessageAnnotationTransformer - Strip cache_control/name from messages
        4. ToolSchemaTransformer - Prune tool parameter schemas
        5. ToolCallTransformer - Convert tool_use/tool_result blocks
        6. MessageContentTransformer - Flatten text segment arrays
        7. EmptyMessageTransformer - Repair or drop empty assistant messages
        8. SystemMessageTransformer - Relocate system for thinking models
        9. SystemAnnotationTransformer - Strip cache_control from system blocks

        Tool call conversion must run before flattening, since flattening would
        otherwise discard the tool_use blocks it needs.

        Returns:
            A configured RequestPipeline ready for execution.
        """
        transformers: list[RequestTransformer] = [
            RootFieldTransformer(),
            ToolChoiceTransformer(),
            MessageAnnotationTransformer(),
            ToolSchemaTransformer(),
            ToolCallTransformer(),
            MessageContentTransformer(),
            EmptyMessageTransformer(),
            SystemMessageTransformer(),
            SystemAnnotationTransformer(),
        ]
        return RequestPipeline(transformers)

    @staticmethod
    def create_custom(transformers: list[RequestTransformer]) -> RequestPipeline:
        """Create a custom pipeline with specified transformers.

        Args:
            transformers: Ordered list of transformers to execute.

        Returns:
            A configured RequestPipeline with custom transformers.
        """
        return RequestPipeline(transformers)
