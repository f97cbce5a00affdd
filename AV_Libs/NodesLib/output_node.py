"""
Output Node for the avatar maker.

Encodes avatars into a raster format with an alpha channel and writes them
to disk. The output file's extension always matches the encoded format, so
"photo.jpg" saved as PNG becomes "photo.png".

Classes:
    OutputNodeConfig: Configuration for output node
    OutputNodeHandler: Handles output naming and file I/O

Functions:
    encode_image: Encode an RGBA image into bytes
    default_output_name: Output file name derived from a source path or URL
    execute_output_node: Pipeline executor for output nodes
    create_output_node: Helper to create output node dictionary
"""

from dataclasses import dataclass, asdict
import io
import logging
from pathlib import Path
from typing import Any, Dict, List
from urllib.parse import unquote, urlparse

from AV_Libs.constants import (
    ALPHA_OUTPUT_FORMATS,
    DEFAULT_OUTPUT_FORMAT,
    DOWNLOAD_FALLBACK_NAME,
    NODE_TYPE_OUTPUT,
)
from AV_Libs.ImageEditingLib.image_models import BUFFER_MODE

logger = logging.getLogger(__name__)


def _normalize_format(save_format: str) -> str:
    fmt = str(save_format).upper()
    if fmt == "TIF":
        fmt = "TIFF"

    if fmt not in ALPHA_OUTPUT_FORMATS:
        raise ValueError(
            f"Format {save_format} cannot store transparency. "
            f"Use one of: {', '.join(sorted(ALPHA_OUTPUT_FORMATS))}"
        )
    return fmt


def encode_image(image: Any, save_format: str = DEFAULT_OUTPUT_FORMAT) -> bytes:
    """
    Encode an image into bytes of a format with an alpha channel.

    Args:
        image: PIL Image (converted to RGBA if needed)
        save_format: 'PNG', 'WEBP' or 'TIFF'

    Returns:
        Encoded image bytes

    Raises:
        TypeError: If image is not a PIL Image
        ValueError: If save_format cannot store an alpha channel
    """
    if not hasattr(image, "save") or not hasattr(image, "mode"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    fmt = _normalize_format(save_format)
    if image.mode != BUFFER_MODE:
        image = image.convert(BUFFER_MODE)

    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def default_output_name(source: str, save_format: str = DEFAULT_OUTPUT_FORMAT) -> str:
    """
    File name for an avatar built from ``source``.

    The source's file name is kept and its extension replaced by the one
    matching save_format.

    Example:
        >>> default_output_name("https://example.com/u/42/face.jpg?s=200")
        'face.png'
    """
    source = str(source)
    parsed = urlparse(source)
    if parsed.scheme.lower() in ("http", "https"):
        name = Path(unquote(parsed.path)).name
    else:
        name = Path(source).name

    suffix = ALPHA_OUTPUT_FORMATS[_normalize_format(save_format)]
    return Path(name or DOWNLOAD_FALLBACK_NAME).with_suffix(suffix).name


@dataclass
class OutputNodeConfig:
    """Configuration for output node execution.

    Attributes:
        output_path: Output file path; its extension is replaced to match save_format
        save_format: Image format with alpha support (PNG, WEBP, TIFF; default: PNG)
        create_directories: Create output directories if they don't exist (default: True)
        overwrite: Overwrite existing files (default: False)
    """
    output_path: str = "avatar.png"
    save_format: str = DEFAULT_OUTPUT_FORMAT
    create_directories: bool = True
    overwrite: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OutputNodeConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)


class OutputNodeHandler:
    """Handles output naming and file I/O for output nodes."""

    def __init__(self, config: OutputNodeConfig):
        """Initialize handler with configuration."""
        self.config = config
        self.save_format = _normalize_format(config.save_format)

    def resolve_filename(self) -> Path:
        """
        Resolve the output path with the format's extension.

        Returns:
            Absolute Path to the output file

        Raises:
            ValueError: If the path contains '..' components
        """
        path = Path(self.config.output_path)

        if ".." in path.parts:
            raise ValueError(
                f"Path traversal detected: output_path contains '..': {self.config.output_path}"
            )

        if not path.name:
            raise ValueError(f"output_path has no file name: {self.config.output_path}")

        path = path.with_suffix(ALPHA_OUTPUT_FORMATS[self.save_format])
        return path.resolve()

    def save_image(self, image: Any) -> Path:
        """
        Encode and save an image.

        Args:
            image: PIL Image to save

        Returns:
            Path where the image was saved

        Raises:
            TypeError: If image is not a PIL Image
            ValueError: If the file exists and overwrite=False
            OSError: If the file cannot be written
        """
        data = encode_image(image, self.save_format)
        output_file = self.resolve_filename()

        if self.config.create_directories:
            output_file.parent.mkdir(parents=True, exist_ok=True)

        if output_file.exists() and not self.config.overwrite:
            raise ValueError(
                f"Output file already exists: {output_file}. "
                f"Set overwrite=True to replace."
            )

        try:
            output_file.write_bytes(data)
        except OSError as e:
            raise OSError(f"Failed to save image to {output_file}: {str(e)}") from e

        logger.debug(f"Saved {len(data)} bytes to {output_file}")
        return output_file


def execute_output_node(node: Dict[str, Any], inputs: List[Any]) -> Path:
    """
    Pipeline executor for output nodes.

    Args:
        node: Node dictionary containing OutputNodeConfig fields
        inputs: Should contain exactly one element: the image to save

    Returns:
        Path where image was saved

    Raises:
        ValueError: If inputs empty, invalid config, or file already exists
        TypeError: If input is not a PIL Image
        OSError: If file cannot be written
    """
    if not inputs:
        raise ValueError("Output node requires 1 input image")

    handler = OutputNodeHandler(OutputNodeConfig.from_dict(node))
    return handler.save_image(inputs[0])


def create_output_node(
    node_id: str,
    output_path: str = "avatar.png",
    save_format: str = DEFAULT_OUTPUT_FORMAT,
    create_directories: bool = True,
    overwrite: bool = False,
) -> Dict[str, Any]:
    """
    Helper to create an output node dictionary.

    Args:
        node_id: Unique node identifier
        output_path: Output file path
        save_format: Image format (PNG, WEBP, TIFF)
        create_directories: Create output directories if missing
        overwrite: Overwrite existing files

    Returns:
        Node dictionary for execute_output_node
    """
    return {
        "id": node_id,
        "type": NODE_TYPE_OUTPUT,
        "output_path": output_path,
        "save_format": save_format,
        "create_directories": create_directories,
        "overwrite": overwrite,
    }
