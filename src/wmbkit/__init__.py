"""wmbkit: decoder for WMB7 level files."""

from .api import inspect_directory, load_level, summarize_level, texture_rows
from .config import CoordinateSystem, DecodeOptions, load_options
from .format.constants import ObjectTag, TextureFormat
from .format.errors import (
    BadMagicError,
    ConfigError,
    LightmapSizeError,
    MissingEnvironmentError,
    ObjectTypeError,
    SeekRangeError,
    SourceError,
    TextureFormatError,
    TruncatedInputError,
    WmbError,
)
from .model import (
    Block,
    Color,
    Entity,
    EntityFlag,
    Euler,
    Info,
    Level,
    Light,
    Lightmap,
    Material,
    Path,
    PathEdge,
    PathNode,
    Position,
    Region,
    SceneObject,
    Skin,
    Sound,
    Texture,
    Triangle,
    Vec2,
    Vec3,
    Vertex,
)

__version__ = "0.1.0"

__all__ = [
    "load_level",
    "inspect_directory",
    "summarize_level",
    "texture_rows",
    "CoordinateSystem",
    "DecodeOptions",
    "load_options",
    "ObjectTag",
    "TextureFormat",
    "WmbError",
    "SourceError",
    "TruncatedInputError",
    "SeekRangeError",
    "BadMagicError",
    "TextureFormatError",
    "ObjectTypeError",
    "MissingEnvironmentError",
    "LightmapSizeError",
    "ConfigError",
    "Block",
    "Color",
    "Entity",
    "EntityFlag",
    "Euler",
    "Info",
    "Level",
    "Light",
    "Lightmap",
    "Material",
    "Path",
    "PathEdge",
    "PathNode",
    "Position",
    "Region",
    "SceneObject",
    "Skin",
    "Sound",
    "Texture",
    "Triangle",
    "Vec2",
    "Vec3",
    "Vertex",
]
