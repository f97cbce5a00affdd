"""
Avatar Nodes Library.

This module contains the node implementations used to run the avatar
pipeline by name. Nodes are components that process data in a chain.

Modules:
    image_import_node: Decoding and downloading of source images
    avatar_node: Resize/crop, rounded corners and full avatar nodes
    output_node: Encoding and saving of finished avatars
    node_executors: Registry of node executors
"""

from AV_Libs.NodesLib.image_import_node import (
    load_image,
    decode_image,
    download_image,
    is_remote_source,
    execute_import_image_node,
    create_import_image_node,
)
from AV_Libs.NodesLib.avatar_node import (
    AvatarNodeConfig,
    execute_resize_crop_node,
    execute_rounded_corners_node,
    execute_avatar_node,
    create_avatar_node,
)
from AV_Libs.NodesLib.output_node import (
    OutputNodeConfig,
    OutputNodeHandler,
    encode_image,
    default_output_name,
    execute_output_node,
    create_output_node,
)
from AV_Libs.NodesLib.node_executors import (
    NodeExecutorRegistry,
    get_default_registry,
    execute_chain,
)

__all__ = [
    "load_image",
    "decode_image",
    "download_image",
    "is_remote_source",
    "execute_import_image_node",
    "create_import_image_node",
    "AvatarNodeConfig",
    "execute_resize_crop_node",
    "execute_rounded_corners_node",
    "execute_avatar_node",
    "create_avatar_node",
    "OutputNodeConfig",
    "OutputNodeHandler",
    "encode_image",
    "default_output_name",
    "execute_output_node",
    "create_output_node",
    "NodeExecutorRegistry",
    "get_default_registry",
    "execute_chain",
]
