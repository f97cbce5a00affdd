"""
Avatar stage nodes.

Wraps the resize/crop stage, the rounded corner compositor and the full
avatar pipeline for use through the node executor registry.

Example:
    >>> from PIL import Image
    >>> from AV_Libs.NodesLib.avatar_node import create_avatar_node
    >>> from AV_Libs.NodesLib.node_executors import get_default_registry
    >>>
    >>> node = create_avatar_node("avatar-1", width=128, height=128, corner_radius=16)
    >>> registry = get_default_registry()
    >>> avatar = registry.execute("Avatar", node, [Image.open("photo.jpg")])
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List

from AV_Libs.constants import (
    DEFAULT_ALPHA_RULE,
    DEFAULT_AVATAR_SIZE,
    DEFAULT_CORNER_RADIUS,
    DEFAULT_RESAMPLE,
    DEFAULT_SUPERSAMPLE,
    NODE_TYPE_AVATAR,
    NODE_TYPE_RESIZE_CROP,
    NODE_TYPE_ROUNDED_CORNERS,
)
from AV_Libs.ImageEditingLib.avatar_pipeline import make_avatar
from AV_Libs.ImageEditingLib.resize_crop import resize_crop
from AV_Libs.ImageEditingLib.rounded_corners import apply_rounded_corners


@dataclass
class AvatarNodeConfig:
    """Configuration shared by the avatar stage nodes.

    Attributes:
        width: Output width in pixels
        height: Output height in pixels
        corner_radius: Corner radius in pixels (>= 0)
        supersample: Coverage samples per pixel axis (1-16)
        alpha_rule: 'clamp' or 'scale' for partially covered pixels
        resample: Resampling filter name ('lanczos', 'bicubic', 'bilinear', 'nearest')
    """
    width: int = DEFAULT_AVATAR_SIZE[0]
    height: int = DEFAULT_AVATAR_SIZE[1]
    corner_radius: float = DEFAULT_CORNER_RADIUS
    supersample: int = DEFAULT_SUPERSAMPLE
    alpha_rule: str = DEFAULT_ALPHA_RULE
    resample: str = DEFAULT_RESAMPLE

    @property
    def size(self):
        return (self.width, self.height)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AvatarNodeConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)


def _single_image_input(inputs: List[Any], node_name: str) -> Any:
    if not inputs:
        raise ValueError(f"{node_name} node requires image input")

    image = inputs[0]
    if not hasattr(image, "mode"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")
    return image


def execute_resize_crop_node(node: Dict[str, Any], inputs: List[Any]) -> Any:
    """
    Execute resize/crop node.

    Inputs:
        - [0]: Source image (PIL Image)

    Returns:
        New RGBA PIL Image of the configured width x height
    """
    image = _single_image_input(inputs, NODE_TYPE_RESIZE_CROP)
    config = AvatarNodeConfig.from_dict(node)

    try:
        return resize_crop(image, config.width, config.height, config.resample)
    except (ValueError, TypeError) as e:
        raise type(e)(f"Resize crop node error: {str(e)}") from e


def execute_rounded_corners_node(node: Dict[str, Any], inputs: List[Any]) -> Any:
    """
    Execute rounded corners node.

    The input image is masked in place and returned; it must already be RGBA.

    Inputs:
        - [0]: RGBA image (PIL Image)

    Returns:
        The same PIL Image, with transparent corners
    """
    image = _single_image_input(inputs, NODE_TYPE_ROUNDED_CORNERS)
    config = AvatarNodeConfig.from_dict(node)

    try:
        apply_rounded_corners(image, config.corner_radius, config.supersample, config.alpha_rule)
    except (ValueError, TypeError) as e:
        raise type(e)(f"Rounded corners node error: {str(e)}") from e
    return image


def execute_avatar_node(node: Dict[str, Any], inputs: List[Any]) -> Any:
    """
    Execute avatar node (resize/crop then rounded corners).

    Inputs:
        - [0]: Source image (PIL Image)

    Returns:
        New RGBA avatar image
    """
    image = _single_image_input(inputs, NODE_TYPE_AVATAR)
    config = AvatarNodeConfig.from_dict(node)

    try:
        return make_avatar(
            image,
            config.size,
            config.corner_radius,
            supersample=config.supersample,
            alpha_rule=config.alpha_rule,
            resample=config.resample,
        )
    except (ValueError, TypeError) as e:
        raise type(e)(f"Avatar node error: {str(e)}") from e


def create_avatar_node(
    node_id: str,
    node_type: str = NODE_TYPE_AVATAR,
    **config_params: Any,
) -> Dict[str, Any]:
    """
    Create an avatar stage node for the registry.

    Args:
        node_id: Unique node identifier
        node_type: 'Avatar', 'Resize Crop' or 'Rounded Corners'
        **config_params: Any AvatarNodeConfig field (width, height, corner_radius, ...)

    Returns:
        Node dict with every config field filled in

    Example:
        >>> create_avatar_node("corners-1", "Rounded Corners", corner_radius=8)["corner_radius"]
        8
    """
    if node_type not in (NODE_TYPE_AVATAR, NODE_TYPE_RESIZE_CROP, NODE_TYPE_ROUNDED_CORNERS):
        raise ValueError(f"Not an avatar stage node type: {node_type}")

    node = {"id": node_id, "type": node_type}
    node.update(AvatarNodeConfig.from_dict(config_params).to_dict())
    return node
