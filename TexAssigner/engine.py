import logging
from typing import List, Tuple
from . import helpers
from .applier import ApplyOutcome, MutationApplier
from .candidate_index import CandidateIndex, build_candidate_index
from .errors import ConfigurationError, NotFoundError
from .matching import resolve_match
from .naming import TextureAsset
from .report import Report
from .settings import AssignerSettings
from .store import AssetKind, AssetStore

logging.basicConfig()
logger = logging.getLogger('TexAssigner.engine')
logger.setLevel(logging.INFO)


##### HOW A RUN WORKS #####
# 1. Both folders are resolved through the store. If either doesn't exist the run stops right there,
#    before anything has been looked at or changed.
# 2. Textures and materials are discovered. The store always searches recursively, so when
#    include_subfolders is off we throw away everything that isn't directly inside the folder.
# 3. The candidate index is built once from all textures (see candidate_index.py).
# 4. Every material is resolved and applied on its own. If one of them blows up it gets logged and
#    skipped, the rest of the batch carries on.
# 5. Outside of a dry run, everything that changed is saved once at the very end.
###########################


def resolve_folders(store: AssetStore, settings: AssignerSettings) -> Tuple[str, str]:
    """
    Resolves the materials and textures folders.

    Returns:
        tuple: (materials_folder, textures_folder) as the store names them

    Raises:
        ConfigurationError: If either folder isn't a valid container.
    """
    materials_folder = store.resolve_folder(AssetKind.MATERIAL, settings.materials_folder)
    if materials_folder is None:
        raise ConfigurationError("Materials", settings.materials_folder)

    textures_folder = store.resolve_folder(AssetKind.TEXTURE_2D, settings.textures_folder)
    if textures_folder is None:
        raise ConfigurationError("Textures", settings.textures_folder)

    return materials_folder, textures_folder


def discover_paths(store: AssetStore, kind: AssetKind, folder: str, include_subfolders: bool) -> List[str]:
    """Paths of every asset of a kind in the folder, in the order the store yields them"""
    paths = [store.resolve_path(identifier) for identifier in store.find_assets(kind, [folder])]
    if not include_subfolders:
        kept = [path for path in paths if helpers.is_direct_child(path, folder)]
        logger.debug(f"Ignoring {len(paths) - len(kept)} {kind.value} assets in subfolders of '{folder}'")
        paths = kept
    return paths


def discover_textures(store: AssetStore, folder: str, include_subfolders: bool) -> List[TextureAsset]:
    return [TextureAsset.from_path(path) for path in discover_paths(store, AssetKind.TEXTURE_2D, folder, include_subfolders)]


def process_material(store: AssetStore, applier: MutationApplier, index: CandidateIndex, material_path: str, report: Report, dry_run: bool, outcome: ApplyOutcome):
    """Resolves, applies and records one material. outcome is filled in as changes are made."""
    material = store.load_material(material_path)
    if material is None:
        raise NotFoundError("material", material_path)

    material_name = store.material_name(material_path)
    decision = resolve_match(material_name, index)
    applier.apply(material, decision, dry_run, outcome)
    report.record(material_name, decision, outcome)


def assign_textures(store: AssetStore, settings: AssignerSettings) -> Report:
    """
    Matches every material in the materials folder with textures from the textures folder and
    assigns them, or only reports what would be assigned if settings.dry_run is set.

    Args:
        store: The asset store to read from and write to.
        settings: Folders, flags and slot names for this run.

    Returns:
        Report: Counters and log lines. If a folder was invalid, report.aborted is True and nothing was changed.
    """
    report = Report(dry_run=settings.dry_run)

    try:
        materials_folder, textures_folder = resolve_folders(store, settings)
    except ConfigurationError as e:
        report.abort(str(e))
        return report

    material_paths = discover_paths(store, AssetKind.MATERIAL, materials_folder, settings.include_subfolders)
    if not material_paths:
        report.log("No materials found in the specified folder.", logging.WARNING)
        return report

    textures = discover_textures(store, textures_folder, settings.include_subfolders)
    if not textures:
        report.log("No textures found in the specified folder.", logging.WARNING)
        return report

    logger.info(f"Found {len(material_paths)} materials in '{materials_folder}' and {len(textures)} textures in '{textures_folder}'")

    index = build_candidate_index(textures)
    applier = MutationApplier(store, settings.slot_names)

    for material_path in material_paths:
        outcome = ApplyOutcome()
        try:
            process_material(store, applier, index, material_path, report, settings.dry_run, outcome)
        except NotFoundError as e:
            report.record_skip(store.material_name(material_path), str(e))
        except Exception as e:
            logger.exception(f"Error while processing material '{material_path}': {e}")
            material_name = store.material_name(material_path)
            report.record_skip(material_name, f"Error while processing: {e}")
            if outcome.dirty:
                # It's already marked dirty, so what was written gets saved with everything else
                report.log(f"Material '{material_name}' was partly updated before the error, the changes made so far are kept", logging.WARNING)

    if not settings.dry_run:
        store.save_pending()

    report.finish()
    return report
