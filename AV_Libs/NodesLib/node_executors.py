"""
Node executor registry and chain runner.

Each avatar stage is registered under its node type name together with the
number of images it consumes. Every executor has the signature
``executor(node_dict, inputs) -> result``.

Classes:
    NodeExecutorRegistry: Node type name -> executor and input count

Functions:
    get_default_registry: Global registry with the built-in nodes (singleton)
    register_default_executors: Register Image Import, the avatar stages and Output
    execute_chain: Run a linear list of nodes, feeding each result forward
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple
import logging

from AV_Libs.constants import (
    NODE_TYPE_AVATAR,
    NODE_TYPE_IMAGE_IMPORT,
    NODE_TYPE_OUTPUT,
    NODE_TYPE_RESIZE_CROP,
    NODE_TYPE_ROUNDED_CORNERS,
)

logger = logging.getLogger(__name__)

ExecutorFunction = Callable[[Dict[str, Any], List[Any]], Any]


class NodeExecutorRegistry:
    """
    Registry of node executors keyed by node type.

    Example:
        >>> registry = NodeExecutorRegistry()
        >>> registry.register("Avatar", execute_avatar_node, input_count=1)
        >>> avatar = registry.execute("Avatar", node_dict, [image])
    """

    def __init__(self):
        self._entries: Dict[str, Tuple[ExecutorFunction, int]] = {}

    def register(self, node_type: str, executor: ExecutorFunction, input_count: int = 1) -> None:
        """
        Register the executor for a node type.

        Args:
            node_type: Node type name (e.g., "Avatar")
            executor: Callable accepting (node_dict, inputs)
            input_count: Number of inputs the node consumes (0 for sources)

        Raises:
            ValueError: If node_type is empty, executor is not callable or
                input_count is negative
            RuntimeError: If node_type is already registered
        """
        node_type = str(node_type).strip()

        if not node_type:
            raise ValueError("node_type cannot be empty")
        if not callable(executor):
            raise ValueError(f"executor must be callable, got {type(executor)}")
        if input_count < 0:
            raise ValueError(f"input_count must be >= 0, got {input_count}")
        if node_type in self._entries:
            raise RuntimeError(f"Node type '{node_type}' is already registered")

        self._entries[node_type] = (executor, int(input_count))
        logger.debug(f"Registered executor for node type: {node_type}")

    def get_executor(self, node_type: str) -> ExecutorFunction:
        """
        Look up the executor of a node type.

        Raises:
            KeyError: If node_type is not registered
        """
        return self._entry(node_type)[0]

    def execute(self, node_type: str, node_dict: Dict[str, Any], inputs: List[Any]) -> Any:
        """
        Run a node after checking it received the inputs it consumes.

        Raises:
            KeyError: If node_type is not registered
            ValueError: If the number of inputs does not match the node
        """
        executor, input_count = self._entry(node_type)

        if len(inputs) != input_count:
            raise ValueError(
                f"Node type '{str(node_type).strip()}' takes {input_count} input(s), "
                f"got {len(inputs)}"
            )
        return executor(node_dict, inputs)

    def list_node_types(self) -> List[str]:
        return sorted(self._entries)

    def _entry(self, node_type: str) -> Tuple[ExecutorFunction, int]:
        node_type = str(node_type).strip()
        if node_type not in self._entries:
            raise KeyError(
                f"No executor registered for node type '{node_type}'. "
                f"Available types: {', '.join(self.list_node_types())}"
            )
        return self._entries[node_type]


_default_registry: Optional[NodeExecutorRegistry] = None


def get_default_registry() -> NodeExecutorRegistry:
    """Global registry, created with the built-in nodes on first use."""
    global _default_registry

    if _default_registry is None:
        _default_registry = NodeExecutorRegistry()
        register_default_executors(_default_registry)

    return _default_registry


def register_default_executors(registry: NodeExecutorRegistry) -> None:
    """Register Image Import, Resize Crop, Rounded Corners, Avatar and Output."""
    from AV_Libs.NodesLib.avatar_node import (
        execute_avatar_node,
        execute_resize_crop_node,
        execute_rounded_corners_node,
    )
    from AV_Libs.NodesLib.image_import_node import execute_import_image_node
    from AV_Libs.NodesLib.output_node import execute_output_node

    registry.register(NODE_TYPE_IMAGE_IMPORT, execute_import_image_node, input_count=0)
    registry.register(NODE_TYPE_RESIZE_CROP, execute_resize_crop_node)
    registry.register(NODE_TYPE_ROUNDED_CORNERS, execute_rounded_corners_node)
    registry.register(NODE_TYPE_AVATAR, execute_avatar_node)
    registry.register(NODE_TYPE_OUTPUT, execute_output_node)

    logger.debug("Registered default node executors")


def execute_chain(
    nodes: Sequence[Dict[str, Any]],
    registry: Optional[NodeExecutorRegistry] = None,
    inputs: Optional[List[Any]] = None,
) -> Any:
    """
    Run nodes one after another, passing each result to the next node.

    Args:
        nodes: Node dictionaries, each with a 'type' key
        registry: Registry to use (default: the global registry)
        inputs: Inputs for the first node (default: none)

    Returns:
        Result of the last node (None for an empty chain)

    Raises:
        KeyError: If a node has no 'type' or its type is not registered
        ValueError: If a node receives the wrong number of inputs
    """
    registry = registry or get_default_registry()
    current_inputs: List[Any] = list(inputs or [])
    result: Any = None

    for node in nodes:
        if "type" not in node:
            raise KeyError(f"Node {node.get('id', '?')} has no 'type'")

        logger.debug(f"Executing node {node.get('id', '?')} ({node['type']})")
        result = registry.execute(node["type"], node, current_inputs)
        current_inputs = [result]

    return result
