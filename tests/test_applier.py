import pytest

from TexAssigner.applier import ApplyOutcome, MutationApplier, NormalMapStrategy
from TexAssigner.candidate_index import build_candidate_index
from TexAssigner.matching import AlbedoMatchKind, resolve_match
from TexAssigner.naming import TextureAsset
from TexAssigner.settings import UNITY_SLOT_NAMES
from TexAssigner.store import ImporterRole


def decide(store, material_name):
    textures = [TextureAsset.from_path(path) for path in store.textures]
    return resolve_match(material_name, build_candidate_index(textures))


def test_albedo_uses_first_exposed_slot(store):
    material = store.add_material("Assets/Materials/wood.mat", ("_BaseMap", "_BaseColorMap"))
    store.add_texture("Assets/Textures/wood.png")

    outcome = MutationApplier(store, UNITY_SLOT_NAMES).apply(material, decide(store, "wood"), dry_run=False)

    assert outcome.albedo_slot == "_BaseMap"
    assert material.textures["_BaseMap"].path == "Assets/Textures/wood.png"
    assert outcome.dirty
    assert store.dirty == [material]


def test_albedo_falls_back_to_primary_slot(store):
    material = store.add_material("Assets/Materials/wood.mat")
    store.add_texture("Assets/Textures/wood.png")

    outcome = MutationApplier(store, UNITY_SLOT_NAMES).apply(material, decide(store, "wood"), dry_run=False)

    assert outcome.albedo_slot == "_MainTex"
    assert "_MainTex" in material.textures


def test_normal_map_gets_tagged_and_reloaded(store):
    material = store.add_material("Assets/Materials/glass.mat", ("_BumpMap", "_BumpScale"))
    stale = store.add_texture("Assets/Textures/glass_normal.png")

    outcome = MutationApplier(store, UNITY_SLOT_NAMES).apply(material, decide(store, "glass"), dry_run=False)

    assert outcome.importer_reconfigured
    assert store.importers["Assets/Textures/glass_normal.png"].role == ImporterRole.NORMAL_MAP
    assigned = material.textures["_BumpMap"]
    assert assigned is not stale
    assert assigned.generation == 1
    assert outcome.normal_strategy == NormalMapStrategy.STRENGTH
    assert material.floats == {"_BumpScale": 1.0}


def test_already_tagged_normal_map_is_left_alone(store):
    material = store.add_material("Assets/Materials/glass.mat", ("_BumpMap",))
    texture = store.add_texture("Assets/Textures/glass_normal.png", role=ImporterRole.NORMAL_MAP)

    outcome = MutationApplier(store, UNITY_SLOT_NAMES).apply(material, decide(store, "glass"), dry_run=False)

    assert not outcome.importer_reconfigured
    assert not outcome.normal_needs_reimport
    assert store.importer_writes() == 0
    assert material.textures["_BumpMap"] is texture


def test_toggle_strategy_comes_first(store):
    material = store.add_material("Assets/Materials/glass.mat", ("_BumpMap", "_UseNormalMap", "_BumpScale"))
    store.add_texture("Assets/Textures/glass_normal.png", role=ImporterRole.NORMAL_MAP)

    outcome = MutationApplier(store, UNITY_SLOT_NAMES).apply(material, decide(store, "glass"), dry_run=False)

    assert outcome.normal_strategy == NormalMapStrategy.TOGGLE
    assert material.floats == {"_UseNormalMap": 1.0}


def test_no_normal_control_is_not_an_error(store):
    material = store.add_material("Assets/Materials/glass.mat", ("_BumpMap",))
    store.add_texture("Assets/Textures/glass_normal.png")

    outcome = MutationApplier(store, UNITY_SLOT_NAMES).apply(material, decide(store, "glass"), dry_run=False)

    assert outcome.normal_assigned
    assert outcome.normal_strategy is None
    assert material.floats == {}


def test_dry_run_writes_nothing(store):
    material = store.add_material("Assets/Materials/stone.mat", ("_MainTex", "_BumpMap", "_BumpScale"))
    store.add_texture("Assets/Textures/stone_color_grey.png")
    store.add_texture("Assets/Textures/stone_normal.png")

    outcome = MutationApplier(store, UNITY_SLOT_NAMES).apply(material, decide(store, "stone"), dry_run=True)

    assert outcome.albedo_assigned
    assert outcome.normal_assigned
    assert outcome.normal_needs_reimport
    assert not outcome.importer_reconfigured
    assert outcome.normal_strategy == NormalMapStrategy.STRENGTH
    assert not outcome.dirty
    assert store.writes == []
    assert store.dirty == []
    assert material.textures == {}


def test_unloadable_texture_only_skips_that_slot(store):
    material = store.add_material("Assets/Materials/stone.mat", ("_MainTex", "_BumpMap"))
    store.add_texture("Assets/Textures/stone.png", loadable=False)
    store.add_texture("Assets/Textures/stone_normal.png", role=ImporterRole.NORMAL_MAP)

    outcome = MutationApplier(store, UNITY_SLOT_NAMES).apply(material, decide(store, "stone"), dry_run=False)

    assert outcome.missing == ["Assets/Textures/stone.png"]
    assert not outcome.albedo_assigned
    assert outcome.normal_assigned
    assert list(material.textures) == ["_BumpMap"]
    assert outcome.dirty


def test_missing_importer_still_assigns(store):
    material = store.add_material("Assets/Materials/glass.mat", ("_BumpMap",))
    store.add_texture("Assets/Textures/glass_normal.png")
    del store.importers["Assets/Textures/glass_normal.png"]

    outcome = MutationApplier(store, UNITY_SLOT_NAMES).apply(material, decide(store, "glass"), dry_run=False)

    assert outcome.normal_assigned
    assert not outcome.importer_reconfigured
    assert "_BumpMap" in material.textures


def test_nothing_matched_leaves_material_clean(store):
    material = store.add_material("Assets/Materials/cloth.mat", ("_MainTex",))
    store.add_texture("Assets/Textures/wood.png")

    outcome = MutationApplier(store, UNITY_SLOT_NAMES).apply(material, decide(store, "cloth"), dry_run=False)

    assert not outcome.albedo_assigned
    assert not outcome.normal_assigned
    assert not outcome.dirty
    assert store.writes == []


def test_unloadable_exact_texture_falls_back_to_color_variant(store):
    material = store.add_material("Assets/Materials/wood.mat", ("_MainTex",))
    store.add_texture("Assets/Textures/wood.png", loadable=False)
    store.add_texture("Assets/Textures/wood_color_dark.png")

    outcome = MutationApplier(store, UNITY_SLOT_NAMES).apply(material, decide(store, "wood"), dry_run=False)

    assert outcome.albedo_assigned
    assert outcome.albedo_kind == AlbedoMatchKind.COLOR_VARIANT
    assert outcome.albedo_texture.path == "Assets/Textures/wood_color_dark.png"
    assert outcome.missing == ["Assets/Textures/wood.png"]
    assert material.textures["_MainTex"].path == "Assets/Textures/wood_color_dark.png"


def test_unloadable_exact_texture_without_variant(store):
    material = store.add_material("Assets/Materials/wood.mat", ("_MainTex",))
    store.add_texture("Assets/Textures/wood.png", loadable=False)

    outcome = MutationApplier(store, UNITY_SLOT_NAMES).apply(material, decide(store, "wood"), dry_run=False)

    assert not outcome.albedo_assigned
    assert outcome.albedo_kind == AlbedoMatchKind.NONE
    assert outcome.missing == ["Assets/Textures/wood.png"]
    assert material.textures == {}


def test_albedo_write_is_marked_dirty_before_normal_fails(store, monkeypatch):
    material = store.add_material("Assets/Materials/stone.mat", ("_MainTex", "_BumpMap"))
    store.add_texture("Assets/Textures/stone.png")
    store.add_texture("Assets/Textures/stone_normal.png", role=ImporterRole.NORMAL_MAP)
    original = store.set_texture

    def fail_on_normal_slot(material, slot, texture):
        if slot == "_BumpMap":
            raise RuntimeError("write failed")
        original(material, slot, texture)

    monkeypatch.setattr(store, "set_texture", fail_on_normal_slot)
    outcome = ApplyOutcome()

    with pytest.raises(RuntimeError):
        MutationApplier(store, UNITY_SLOT_NAMES).apply(material, decide(store, "stone"), dry_run=False, outcome=outcome)

    assert outcome.albedo_assigned
    assert outcome.dirty
    assert store.dirty == [material]
    assert "_MainTex" in material.textures


def test_identical_binding_is_not_written_again(store):
    material = store.add_material("Assets/Materials/glass.mat", ("_MainTex", "_BumpMap", "_BumpScale"))
    store.add_texture("Assets/Textures/glass.png")
    store.add_texture("Assets/Textures/glass_normal.png", role=ImporterRole.NORMAL_MAP)
    applier = MutationApplier(store, UNITY_SLOT_NAMES)
    applier.apply(material, decide(store, "glass"), dry_run=False)
    store.save_pending()
    writes_before = list(store.writes)

    outcome = applier.apply(material, decide(store, "glass"), dry_run=False)

    assert outcome.albedo_assigned
    assert outcome.normal_assigned
    assert outcome.normal_strategy == NormalMapStrategy.STRENGTH
    assert not outcome.dirty
    assert store.dirty == []
    assert store.writes == writes_before
