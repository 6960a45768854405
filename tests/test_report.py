from TexAssigner.applier import ApplyOutcome
from TexAssigner.matching import (
    AlbedoMatch, AlbedoMatchKind, MatchDecision, NormalMatch, NormalMatchKind,
)
from TexAssigner.naming import TextureAsset
from TexAssigner.report import Report


WOOD = TextureAsset.from_path("T/wood.png")
WOOD_VARIANT = TextureAsset.from_path("T/wood_color_dark.png")
WOOD_NORMAL = TextureAsset.from_path("T/wood_normal.png")


def assigned(kind, texture, **kwargs):
    return ApplyOutcome(albedo_assigned=True, albedo_kind=kind, albedo_texture=texture, **kwargs)


def test_exact_and_normal_counted_independently():
    report = Report()
    decision = MatchDecision(AlbedoMatch(AlbedoMatchKind.EXACT, WOOD), NormalMatch(NormalMatchKind.FOUND, WOOD_NORMAL))
    report.record("wood", decision, assigned(AlbedoMatchKind.EXACT, WOOD, normal_assigned=True))

    assert report.total_materials == 1
    assert report.albedo_matches == 1
    assert report.exact_albedo_matches == 1
    assert report.normal_map_matches == 1
    assert report.lines == [
        "Exact match found: Material 'wood' with texture 'T/wood.png'",
        "Normal map match found: Material 'wood' with texture 'T/wood_normal.png'",
    ]


def test_no_match_line():
    report = Report()
    report.record("cloth", MatchDecision(), ApplyOutcome())
    assert report.lines == ["No matching texture found for material 'cloth'"]
    assert report.entries[0].albedo == AlbedoMatchKind.NONE
    assert not report.entries[0].normal_found


def test_missing_texture_is_not_a_match():
    report = Report()
    decision = MatchDecision(albedo=AlbedoMatch(AlbedoMatchKind.COLOR_VARIANT, WOOD_VARIANT))
    report.record("wood", decision, ApplyOutcome(missing=["T/wood_color_dark.png"]))

    assert report.albedo_matches == 0
    assert report.color_variant_matches == 0
    assert report.missing_textures == 1
    assert report.lines[-1] == "No matching texture found for material 'wood'"


def test_counters_add_up():
    report = Report()
    report.record("a", MatchDecision(AlbedoMatch(AlbedoMatchKind.EXACT, WOOD)), assigned(AlbedoMatchKind.EXACT, WOOD))
    report.record("b", MatchDecision(AlbedoMatch(AlbedoMatchKind.COLOR_VARIANT, WOOD_VARIANT)), assigned(AlbedoMatchKind.COLOR_VARIANT, WOOD_VARIANT))
    report.record("c", MatchDecision(normal=NormalMatch(NormalMatchKind.FOUND, WOOD_NORMAL)), ApplyOutcome(normal_assigned=True))
    report.record_skip("d", "Could not load material at 'd.mat'")

    assert report.exact_albedo_matches + report.color_variant_matches == report.albedo_matches
    assert report.total_materials == 4
    assert report.skipped_materials == 1
    assert report.entries[-1].skipped


def test_summary_lines():
    report = Report(dry_run=True)
    report.record("a", MatchDecision(AlbedoMatch(AlbedoMatchKind.EXACT, WOOD)), assigned(AlbedoMatchKind.EXACT, WOOD))
    report.record("b", MatchDecision(), ApplyOutcome())
    report.finish()

    assert report.lines[-3:] == [
        "Completed! Preview 1 of 2 materials with albedo textures.",
        "Breakdown: 1 exact matches, 0 color variant matches.",
        "Normal maps: 0 of 2 materials.",
    ]


def test_abort():
    report = Report()
    report.abort("Materials folder 'Nope' does not exist!")
    assert report.aborted
    assert report.error == "Materials folder 'Nope' does not exist!"
    assert report.lines == ["Error: Materials folder 'Nope' does not exist!"]


def test_exact_fallback_counts_as_color_variant():
    report = Report()
    decision = MatchDecision(AlbedoMatch(AlbedoMatchKind.EXACT, WOOD, fallback=WOOD_VARIANT))
    outcome = assigned(AlbedoMatchKind.COLOR_VARIANT, WOOD_VARIANT, missing=["T/wood.png"])
    report.record("wood", decision, outcome)

    assert report.exact_albedo_matches == 0
    assert report.color_variant_matches == 1
    assert report.albedo_matches == 1
    assert report.missing_textures == 1
    assert report.lines == [
        "Texture 'T/wood.png' for material 'wood' could not be loaded, skipped",
        "Color variant match found: Material 'wood' with texture 'T/wood_color_dark.png'",
    ]
    assert report.entries[0].albedo == AlbedoMatchKind.COLOR_VARIANT
    assert report.entries[0].albedo_texture == "T/wood_color_dark.png"
