from TexAssigner.candidate_index import build_candidate_index
from TexAssigner.matching import AlbedoMatchKind, NormalMatchKind, resolve_match
from TexAssigner.naming import TextureAsset


def index_of(*names):
    return build_candidate_index([TextureAsset.from_path(f"T/{name}.png") for name in names])


def test_exact_beats_color_variant():
    index = index_of("wood_floor_color_dark", "wood_floor")
    decision = resolve_match("wood_floor", index)
    assert decision.albedo.kind == AlbedoMatchKind.EXACT
    assert decision.albedo.texture.name == "wood_floor"


def test_first_color_variant_is_used():
    index = index_of("metal_panel_color_rusty", "metal_panel_color_clean")
    decision = resolve_match("metal_panel", index)
    assert decision.albedo.kind == AlbedoMatchKind.COLOR_VARIANT
    assert decision.albedo.texture.name == "metal_panel_color_rusty"


def test_normal_without_albedo():
    decision = resolve_match("glass", index_of("glass_normal_v2"))
    assert decision.albedo.kind == AlbedoMatchKind.NONE
    assert decision.albedo.texture is None
    assert decision.normal.kind == NormalMatchKind.FOUND
    assert decision.normal.texture.name == "glass_normal_v2"


def test_albedo_without_normal():
    decision = resolve_match("wood", index_of("wood"))
    assert decision.albedo.matched
    assert not decision.normal.matched
    assert decision.normal.kind == NormalMatchKind.NONE


def test_both_albedo_and_normal():
    decision = resolve_match("stone", index_of("stone_color_grey", "stone_normal"))
    assert decision.albedo.kind == AlbedoMatchKind.COLOR_VARIANT
    assert decision.normal.kind == NormalMatchKind.FOUND


def test_neither():
    decision = resolve_match("cloth", index_of("wood", "stone_normal"))
    assert not decision.albedo.matched
    assert not decision.normal.matched


def test_exact_match_can_be_a_role_tagged_texture():
    """A material named like a normal map texture gets that texture as its albedo."""
    decision = resolve_match("glass_normal_v2", index_of("glass_normal_v2"))
    assert decision.albedo.kind == AlbedoMatchKind.EXACT
    assert decision.albedo.texture.name == "glass_normal_v2"


def test_names_are_case_sensitive():
    decision = resolve_match("Wood", index_of("wood", "wood_normal"))
    assert not decision.albedo.matched
    assert not decision.normal.matched


def test_exact_match_keeps_color_variant_as_fallback():
    decision = resolve_match("wood", index_of("wood_color_dark", "wood"))
    assert decision.albedo.kind == AlbedoMatchKind.EXACT
    assert decision.albedo.fallback.name == "wood_color_dark"
    assert resolve_match("wood", index_of("wood")).albedo.fallback is None
    assert resolve_match("wood", index_of("wood_color_dark")).albedo.fallback is None
