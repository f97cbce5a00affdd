"""
Image Import Node for the avatar maker.

This module turns source bytes into RGBA pixel buffers. Sources can be raw
bytes, a file on disk, or an http(s) URL that is first downloaded into a
private temporary directory.

Functions:
    decode_image: Decode raw bytes into an RGBA PIL Image
    download_image: Download a URL into a local file
    load_image: Read and decode an image file
    execute_import_image_node: Pipeline executor for image import nodes
    create_import_image_node: Helper to create an import node dictionary
"""

import io
import logging
from pathlib import Path
import tempfile
from typing import Any, Dict, List, Optional, Union
from urllib.parse import unquote, urlparse

import requests
from PIL import Image

from AV_Libs.constants import (
    DOWNLOAD_DIR_PREFIX,
    DOWNLOAD_FALLBACK_NAME,
    DOWNLOAD_TIMEOUT_SECONDS,
    NODE_TYPE_IMAGE_IMPORT,
)
from AV_Libs.errors import DecodeFailure
from AV_Libs.ImageEditingLib.image_models import BUFFER_MODE

logger = logging.getLogger(__name__)


def decode_image(data: bytes) -> Any:
    """
    Decode raw image bytes into an RGBA PIL Image.

    Multi-frame formats contribute their first frame only.

    Args:
        data: Encoded image bytes (any format Pillow can read)

    Returns:
        New RGBA PIL Image

    Raises:
        DecodeFailure: If data is empty or cannot be decoded
    """
    if not data:
        raise DecodeFailure("No image data to decode")

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.seek(0)
            return img.convert(BUFFER_MODE)
    except Exception as e:
        raise DecodeFailure(f"Failed to decode image: {str(e)}") from e


def is_remote_source(source: str) -> bool:
    """True when source is an http(s) URL."""
    return urlparse(str(source)).scheme.lower() in ("http", "https")


def download_image(
    url: str,
    dest_dir: Optional[Union[str, Path]] = None,
    timeout: float = DOWNLOAD_TIMEOUT_SECONDS,
) -> Path:
    """
    Download an image into a local file named after the URL.

    Args:
        url: http(s) URL of the image
        dest_dir: Directory to write into (default: a new private directory
            under the system temp directory, so no existing file is replaced)
        timeout: Request timeout in seconds

    Returns:
        Path of the written file; the caller is responsible for deleting it
        and, when dest_dir was not given, its directory

    Raises:
        ValueError: If url is not an http(s) URL
        requests.RequestException: If the request fails or returns an error status
    """
    if not is_remote_source(url):
        raise ValueError(f"Not an http(s) URL: {url}")

    response = requests.get(url, timeout=timeout)
    response.raise_for_status()

    file_name = Path(unquote(urlparse(url).path)).name or DOWNLOAD_FALLBACK_NAME
    if dest_dir is None:
        dest_dir = tempfile.mkdtemp(prefix=DOWNLOAD_DIR_PREFIX)
    local_path = Path(dest_dir) / file_name
    local_path.write_bytes(response.content)

    logger.debug(f"Downloaded {len(response.content)} bytes from {url} to {local_path}")
    return local_path


def load_image(file_path: Union[str, Path]) -> Any:
    """
    Read and decode an image file.

    Raises:
        FileNotFoundError: If file_path does not exist
        ValueError: If file_path is not a file
        DecodeFailure: If the file is not a readable image
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")
    if not path.is_file():
        raise ValueError(f"Path is not a file: {path}")

    try:
        return decode_image(path.read_bytes())
    except DecodeFailure as e:
        raise DecodeFailure(f"Failed to load image from {path}: {str(e)}") from e


def execute_import_image_node(node: Dict[str, Any], inputs: List[Any]) -> Any:
    """
    Pipeline executor for image import nodes.

    Exactly one source key is used, checked in this order:
        - 'data': raw encoded bytes
        - 'url': http(s) URL, downloaded into a temporary directory that is
          removed afterwards
        - 'file_path': path to an image file

    Args:
        node: Node dictionary with one of the source keys above
        inputs: Should be empty list (import nodes have no inputs)

    Returns:
        RGBA PIL Image

    Raises:
        KeyError: If no source key is present
        FileNotFoundError: If file_path does not exist
        DecodeFailure: If the source cannot be decoded
        requests.RequestException: If the download fails
    """
    if node.get("data"):
        return decode_image(node["data"])

    url = node.get("url")
    if url:
        with tempfile.TemporaryDirectory(prefix=DOWNLOAD_DIR_PREFIX) as temp_dir:
            local_path = download_image(
                url,
                dest_dir=temp_dir,
                timeout=node.get("timeout", DOWNLOAD_TIMEOUT_SECONDS),
            )
            return decode_image(local_path.read_bytes())

    file_path = node.get("file_path")
    if not file_path:
        raise KeyError("Image import node needs one of 'data', 'url' or 'file_path'")

    return load_image(file_path)


def create_import_image_node(
    node_id: str,
    file_path: Optional[str] = None,
    url: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Helper to create an import node dictionary.

    Args:
        node_id: Unique node identifier
        file_path: Local image path
        url: Remote image URL (used when file_path is not given)

    Returns:
        Node dictionary for execute_import_image_node
    """
    node: Dict[str, Any] = {"id": node_id, "type": NODE_TYPE_IMAGE_IMPORT}
    if file_path:
        node["file_path"] = str(file_path)
    elif url:
        node["url"] = url
    return node
