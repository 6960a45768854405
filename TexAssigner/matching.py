import logging
from enum import Enum
from typing import Optional
from dataclasses import dataclass
from .naming import TextureAsset
from .candidate_index import CandidateIndex

logging.basicConfig()
logger = logging.getLogger('TexAssigner.matching')
logger.setLevel(logging.INFO)


class AlbedoMatchKind(Enum):
    EXACT = "exact"
    COLOR_VARIANT = "color_variant"
    NONE = "none"


class NormalMatchKind(Enum):
    FOUND = "found"
    NONE = "none"


@dataclass(frozen=True)
class AlbedoMatch:
    """
    fallback is the first color variant of an EXACT match, used if the exact texture can't be loaded.
    It's always None for the other kinds.
    """
    kind: AlbedoMatchKind = AlbedoMatchKind.NONE
    texture: Optional[TextureAsset] = None
    fallback: Optional[TextureAsset] = None

    @property
    def matched(self) -> bool:
        return self.kind != AlbedoMatchKind.NONE


@dataclass(frozen=True)
class NormalMatch:
    kind: NormalMatchKind = NormalMatchKind.NONE
    texture: Optional[TextureAsset] = None

    @property
    def matched(self) -> bool:
        return self.kind == NormalMatchKind.FOUND


@dataclass(frozen=True)
class MatchDecision:
    """The albedo and normal map outcomes for one material. They are independent of each other."""
    albedo: AlbedoMatch = AlbedoMatch()
    normal: NormalMatch = NormalMatch()


def resolve_albedo(material_name: str, index: CandidateIndex) -> AlbedoMatch:
    """An exact name match always beats a color variant, and only the first variant is ever used"""
    variant = index.first_color_variant(material_name)

    texture = index.exact_match(material_name)
    if texture is not None:
        return AlbedoMatch(AlbedoMatchKind.EXACT, texture, fallback=variant)

    if variant is not None:
        return AlbedoMatch(AlbedoMatchKind.COLOR_VARIANT, variant)

    return AlbedoMatch()


def resolve_normal(material_name: str, index: CandidateIndex) -> NormalMatch:
    texture = index.first_normal_map(material_name)
    if texture is not None:
        return NormalMatch(NormalMatchKind.FOUND, texture)
    return NormalMatch()


def resolve_match(material_name: str, index: CandidateIndex) -> MatchDecision:
    """
    Decides which textures a material should get.

    Args:
        material_name: Base filename of the material.
        index: The candidate index built for this run.

    Returns:
        MatchDecision: albedo and normal outcomes, either of which may be NONE.
    """
    decision = MatchDecision(
        albedo=resolve_albedo(material_name, index),
        normal=resolve_normal(material_name, index),
    )
    logger.debug(f"Resolved '{material_name}': albedo={decision.albedo.kind.value}, normal={decision.normal.kind.value}")
    return decision
