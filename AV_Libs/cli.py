"""
Command-line entry point.

Usage:
    avatar SOURCE [--output PATH] [--size N] [--radius R]
                  [--supersample N] [--alpha-rule {clamp,scale}]
                  [--overwrite] [-v]

SOURCE is a local image path or an http(s) URL. Remote images are
downloaded into a private temporary directory that is removed once the
avatar is written. The avatar is saved as PNG in the current directory, named
after the source file unless --output is given.
"""

import argparse
import logging
from pathlib import Path
import tempfile
from typing import List, Optional

import requests

from AV_Libs import __version__
from AV_Libs.constants import (
    ALPHA_RULES,
    DEFAULT_ALPHA_RULE,
    DEFAULT_AVATAR_SIZE,
    DEFAULT_CORNER_RADIUS,
    DEFAULT_SUPERSAMPLE,
    DOWNLOAD_DIR_PREFIX,
    NODE_TYPE_AVATAR,
)
from AV_Libs.errors import AvatarError
from AV_Libs.NodesLib.avatar_node import create_avatar_node
from AV_Libs.NodesLib.image_import_node import (
    create_import_image_node,
    download_image,
    is_remote_source,
)
from AV_Libs.NodesLib.node_executors import execute_chain
from AV_Libs.NodesLib.output_node import (
    OutputNodeConfig,
    OutputNodeHandler,
    create_output_node,
    default_output_name,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="avatar",
        description="Make a square avatar with transparent rounded corners.",
    )
    parser.add_argument("source", help="image path or http(s) URL")
    parser.add_argument("-o", "--output", help="output file (default: source name with .png)")
    parser.add_argument("--size", type=int, default=DEFAULT_AVATAR_SIZE[0],
                        help="avatar width and height in pixels (default: %(default)s)")
    parser.add_argument("--radius", type=float, default=DEFAULT_CORNER_RADIUS,
                        help="corner radius in pixels (default: %(default)s)")
    parser.add_argument("--supersample", type=int, default=DEFAULT_SUPERSAMPLE,
                        help="coverage samples per pixel axis (default: %(default)s)")
    parser.add_argument("--alpha-rule", choices=ALPHA_RULES, default=DEFAULT_ALPHA_RULE,
                        help="how partially covered edge pixels lose alpha (default: %(default)s)")
    parser.add_argument("--overwrite", action="store_true", help="replace an existing output file")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    output = args.output or default_output_name(args.source)

    try:
        with tempfile.TemporaryDirectory(prefix=DOWNLOAD_DIR_PREFIX) as temp_dir:
            if is_remote_source(args.source):
                logger.info(f'> downloading "{args.source}"')
                image_path = download_image(args.source, dest_dir=temp_dir)
            else:
                image_path = Path(args.source)

            output_config = OutputNodeConfig(output_path=output, overwrite=args.overwrite)
            target = OutputNodeHandler(output_config).resolve_filename()

            avatar = execute_chain([
                create_import_image_node("source", file_path=str(image_path)),
                create_avatar_node(
                    "avatar",
                    NODE_TYPE_AVATAR,
                    width=args.size,
                    height=args.size,
                    corner_radius=args.radius,
                    supersample=args.supersample,
                    alpha_rule=args.alpha_rule,
                ),
            ])

            logger.info(f'> saving "{target.name}"')
            saved = execute_chain(
                [create_output_node("output", **output_config.to_dict())],
                inputs=[avatar],
            )
    except (AvatarError, ValueError, KeyError, OSError, requests.RequestException) as e:
        logger.error(f"error: {e}")
        return 1

    logger.debug(f"Wrote {saved}")
    return 0
