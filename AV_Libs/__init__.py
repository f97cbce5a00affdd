"""
AV_Libs - Rounded Avatar Library Modules

This package contains the core functionality for building rounded-corner
avatars, organized into specialized sub-packages:

- GeometryLib: Affine transforms and corner clip paths
- ImageEditingLib: Resize/crop, corner masking and the avatar pipeline
- NodesLib: Pipeline nodes (import, avatar stages, output) and their registry
"""

__version__ = "0.1.0"
