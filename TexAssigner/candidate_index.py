import logging
from dataclasses import dataclass, field
from typing import Dict, List, Iterable, Optional
from .naming import TextureAsset, TextureRole

logging.basicConfig()
logger = logging.getLogger('TexAssigner.candidate_index')
logger.setLevel(logging.INFO)


@dataclass
class CandidateIndex:
    """
    Lookups from a material name to the textures that could belong to it.

    exact: every texture under its full name, the last discovered one wins if names collide
    color_variants: base key -> color variant textures, in discovery order
    normal_maps: base key -> normal map textures, in discovery order
    """
    exact: Dict[str, TextureAsset] = field(default_factory=dict)
    color_variants: Dict[str, List[TextureAsset]] = field(default_factory=dict)
    normal_maps: Dict[str, List[TextureAsset]] = field(default_factory=dict)

    def exact_match(self, name: str) -> Optional[TextureAsset]:
        return self.exact.get(name)

    def first_color_variant(self, name: str) -> Optional[TextureAsset]:
        variants = self.color_variants.get(name)
        return variants[0] if variants else None

    def first_normal_map(self, name: str) -> Optional[TextureAsset]:
        normal_maps = self.normal_maps.get(name)
        return normal_maps[0] if normal_maps else None


def build_candidate_index(textures: Iterable[TextureAsset]) -> CandidateIndex:
    """
    Builds the candidate index from discovered textures. The order of the textures matters:
    it decides which texture wins an exact name collision (the last) and which variant is "first".

    Args:
        textures: The discovered textures, in discovery order.

    Returns:
        CandidateIndex: A freshly built index.
    """
    index = CandidateIndex()

    for texture in textures:
        # Every texture can be an exact match, whatever its role
        previous = index.exact.get(texture.name)
        if previous is not None and previous.path != texture.path:
            logger.debug(f"Texture name '{texture.name}' found twice, '{texture.path}' replaces '{previous.path}'")
        index.exact[texture.name] = texture

        if texture.role == TextureRole.NORMAL_MAP:
            index.normal_maps.setdefault(texture.base_key, []).append(texture)
            continue

        if texture.role == TextureRole.COLOR_VARIANT:
            index.color_variants.setdefault(texture.base_key, []).append(texture)

    logger.debug(f"Candidate index built: {len(index.exact)} names, {len(index.color_variants)} color variant keys, {len(index.normal_maps)} normal map keys")
    return index
