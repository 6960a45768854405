import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from .applier import ApplyOutcome
from .matching import AlbedoMatchKind, MatchDecision

logging.basicConfig()
logger = logging.getLogger('TexAssigner.report')
logger.setLevel(logging.INFO)


@dataclass(frozen=True)
class ReportEntry:
    """The outcome for one material, in a form that doesn't depend on the wording of the log"""
    material: str
    albedo: AlbedoMatchKind = AlbedoMatchKind.NONE
    albedo_texture: Optional[str] = None
    normal_found: bool = False
    normal_texture: Optional[str] = None
    skipped: bool = False


@dataclass
class Report:
    """
    Counters and log lines for one run. Built up while the run goes and read once at the end.
    exact_albedo_matches + color_variant_matches always equals albedo_matches.
    """
    dry_run: bool = False
    total_materials: int = 0
    albedo_matches: int = 0
    exact_albedo_matches: int = 0
    color_variant_matches: int = 0
    normal_map_matches: int = 0
    skipped_materials: int = 0
    missing_textures: int = 0
    importer_writes: int = 0
    aborted: bool = False
    error: Optional[str] = None
    lines: List[str] = field(default_factory=list)
    entries: List[ReportEntry] = field(default_factory=list)

    def log(self, message: str, level: int = logging.INFO):
        self.lines.append(message)
        logger.log(level, message)

    def counters(self) -> Dict[str, int]:
        """The match counters. Identical for a dry run and a real run on the same assets."""
        return {
            "total_materials": self.total_materials,
            "albedo_matches": self.albedo_matches,
            "exact_albedo_matches": self.exact_albedo_matches,
            "color_variant_matches": self.color_variant_matches,
            "normal_map_matches": self.normal_map_matches,
            "skipped_materials": self.skipped_materials,
            "missing_textures": self.missing_textures,
        }


    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#
    # RECORDING
    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#

    def record(self, material_name: str, decision: MatchDecision, outcome: ApplyOutcome):
        """Adds the outcome of one processed material"""
        self.total_materials += 1
        albedo_kind = AlbedoMatchKind.NONE
        albedo_texture = None
        normal_texture = None

        normal_path = decision.normal.texture.path if decision.normal.matched else None

        # Anything missing that isn't the normal map was an albedo candidate, and there can be two
        # of those when an exact texture fell back to its color variant
        for texture_path in outcome.missing:
            if texture_path != normal_path:
                self.missing_textures += 1
                self.log(f"Texture '{texture_path}' for material '{material_name}' could not be loaded, skipped", logging.WARNING)

        if outcome.albedo_assigned:
            albedo_kind = outcome.albedo_kind
            albedo_texture = outcome.albedo_texture.path
            self.albedo_matches += 1
            if albedo_kind == AlbedoMatchKind.EXACT:
                self.exact_albedo_matches += 1
                self.log(f"Exact match found: Material '{material_name}' with texture '{albedo_texture}'")
            else:
                self.color_variant_matches += 1
                self.log(f"Color variant match found: Material '{material_name}' with texture '{albedo_texture}'")

        if normal_path is not None:
            if outcome.normal_assigned:
                normal_texture = normal_path
                self.normal_map_matches += 1
                self.log(f"Normal map match found: Material '{material_name}' with texture '{normal_path}'")
            else:
                self.missing_textures += 1
                self.log(f"Normal map '{normal_path}' for material '{material_name}' could not be loaded, skipped", logging.WARNING)

        if outcome.importer_reconfigured:
            self.importer_writes += 1

        if albedo_texture is None and normal_texture is None:
            self.log(f"No matching texture found for material '{material_name}'")
        elif albedo_texture is None:
            self.log(f"No albedo texture found for material '{material_name}'")

        self.entries.append(ReportEntry(
            material=material_name,
            albedo=albedo_kind,
            albedo_texture=albedo_texture,
            normal_found=normal_texture is not None,
            normal_texture=normal_texture,
        ))

    def record_skip(self, material: str, reason: str):
        """Adds a material that couldn't be processed at all"""
        self.total_materials += 1
        self.skipped_materials += 1
        self.log(f"Skipped material '{material}': {reason}", logging.WARNING)
        self.entries.append(ReportEntry(material=material, skipped=True))

    def abort(self, message: str):
        """Records an error that stopped the run before anything was processed"""
        self.aborted = True
        self.error = message
        self.log(f"Error: {message}", logging.ERROR)

    def finish(self):
        """Adds the summary lines"""
        mode_text = "Preview" if self.dry_run else "Assigned"
        self.log(f"Completed! {mode_text} {self.albedo_matches} of {self.total_materials} materials with albedo textures.")
        self.log(f"Breakdown: {self.exact_albedo_matches} exact matches, {self.color_variant_matches} color variant matches.")
        self.log(f"Normal maps: {self.normal_map_matches} of {self.total_materials} materials.")
        if self.skipped_materials or self.missing_textures:
            self.log(f"Skipped {self.skipped_materials} materials and {self.missing_textures} textures that could not be loaded or processed.", logging.WARNING)
