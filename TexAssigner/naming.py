import re
import logging
from enum import Enum
from typing import Optional
from dataclasses import dataclass, field
from . import helpers

logging.basicConfig()
logger = logging.getLogger('TexAssigner.naming')
logger.setLevel(logging.INFO)


##### HOW TEXTURE NAMES ARE READ #####
# Only the base filename is ever looked at, never the pixels.
#   wood_floor_normal_01   -> normal map for "wood_floor" (everything from the first "_normal" is cut off)
#   wood_floor_color_dark  -> color variant for "wood_floor" (everything before the last "_color_")
#   wood_floor             -> plain, it can only ever be an exact match for a material called "wood_floor"
# A name containing "_normal" is always a normal map, even if it also looks like a color variant.
######################################

NORMAL_MAP_MARKER = "_normal"
COLOR_VARIANT_REGEX = re.compile(r"^(.+)_color_(.+)$")


class TextureRole(Enum):
    PLAIN = "plain"
    COLOR_VARIANT = "color_variant"
    NORMAL_MAP = "normal_map"


@dataclass(frozen=True)
class TextureClassification:
    """What a texture name says about the texture. base_key is None for plain textures."""
    role: TextureRole
    base_key: Optional[str] = None


PLAIN = TextureClassification(TextureRole.PLAIN)


def classify_texture_name(name: str) -> TextureClassification:
    """
    Classifies a texture by its base filename (no extension).

    Args:
        name: The base filename of the texture.

    Returns:
        TextureClassification: NORMAL_MAP or COLOR_VARIANT with the material key it belongs to, or PLAIN.
    """
    marker_index = name.find(NORMAL_MAP_MARKER)
    if marker_index != -1:
        return TextureClassification(TextureRole.NORMAL_MAP, name[:marker_index])

    match = COLOR_VARIANT_REGEX.match(name)
    if match:
        return TextureClassification(TextureRole.COLOR_VARIANT, match.group(1))

    return PLAIN


@dataclass(frozen=True)
class TextureAsset:
    """A discovered texture. Never changes after discovery."""
    path: str
    name: str
    classification: TextureClassification = field(default=PLAIN)

    @classmethod
    def from_path(cls, path: str) -> "TextureAsset":
        name = helpers.asset_base_name(path)
        classification = classify_texture_name(name)
        logger.debug(f"Classified '{name}' as {classification.role.value} (base key: {classification.base_key})")
        return cls(path=path, name=name, classification=classification)

    @property
    def role(self) -> TextureRole:
        return self.classification.role

    @property
    def base_key(self) -> Optional[str]:
        return self.classification.base_key
