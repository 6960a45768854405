import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence
from .errors import NotFoundError
from .matching import AlbedoMatch, AlbedoMatchKind, MatchDecision
from .naming import TextureAsset
from .settings import SlotNames
from .store import AssetStore, ImporterRole

logging.basicConfig()
logger = logging.getLogger('TexAssigner.applier')
logger.setLevel(logging.INFO)


class NormalMapStrategy(Enum):
    """Known ways of switching normal mapping on, tried in this order"""
    TOGGLE = "toggle"      # a boolean-like float property, set to 1.0
    STRENGTH = "strength"  # an intensity property, set to the default strength


@dataclass
class ApplyOutcome:
    """
    What applying a decision did to one material. In a dry run the flags describe what *would* have
    happened, so a dry run and a real run on the same assets produce the same outcome, except for
    importer_reconfigured and dirty which only a real run can do.

    albedo_kind and albedo_texture say what actually ended up in the albedo slot. That is the
    color variant if the exact texture couldn't be loaded.
    """
    albedo_slot: Optional[str] = None
    albedo_assigned: bool = False
    albedo_kind: AlbedoMatchKind = AlbedoMatchKind.NONE
    albedo_texture: Optional[TextureAsset] = None
    normal_slot: Optional[str] = None
    normal_assigned: bool = False
    normal_needs_reimport: bool = False
    importer_reconfigured: bool = False
    normal_strategy: Optional[NormalMapStrategy] = None
    missing: List[str] = field(default_factory=list)
    dirty: bool = False


class MutationApplier:
    """Turns match decisions into slot assignments and importer changes on an AssetStore"""

    def __init__(self, store: AssetStore, slot_names: SlotNames):
        self.store = store
        self.slot_names = slot_names

    def _first_exposed(self, material: Any, candidates: Sequence[str]) -> Optional[str]:
        for name in candidates:
            if self.store.has_property(material, name):
                return name
        return None

    def _pick_slot(self, material: Any, candidates: Sequence[str]) -> str:
        """First slot the material exposes. Falls back to the first candidate if it exposes none."""
        return self._first_exposed(material, candidates) or candidates[0]

    def _load_texture(self, texture: TextureAsset) -> Any:
        handle = self.store.load_texture(texture.path)
        if handle is None:
            raise NotFoundError("texture", texture.path)
        return handle

    def _changed(self, material: Any, outcome: ApplyOutcome):
        # Marked right after the write, so a later failure on the same material can't lose it
        if not outcome.dirty:
            self.store.mark_dirty(material)
            outcome.dirty = True

    def _set_texture(self, material: Any, slot: str, handle: Any, outcome: ApplyOutcome):
        if self.store.get_texture(material, slot) == handle:
            logger.debug(f"'{slot}' already holds that texture, leaving it alone")
            return
        self.store.set_texture(material, slot, handle)
        self._changed(material, outcome)

    def _set_float(self, material: Any, name: str, value: float, outcome: ApplyOutcome):
        if self.store.get_float(material, name) == value:
            return
        self.store.set_float(material, name, value)
        self._changed(material, outcome)


    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#
    # ALBEDO
    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#

    def apply_albedo(self, material: Any, match: AlbedoMatch, dry_run: bool, outcome: ApplyOutcome):
        """
        Assigns the albedo texture of a match. An exact texture that can't be loaded is replaced by
        the match's color variant fallback if there is one.

        Raises:
            NotFoundError: If no texture of the match could be loaded.
        """
        kind, texture = match.kind, match.texture
        try:
            handle = self._load_texture(texture)
        except NotFoundError as e:
            if match.fallback is None:
                raise
            logger.warning(f"{e}, trying color variant '{match.fallback.path}' instead")
            outcome.missing.append(e.path)
            kind, texture = AlbedoMatchKind.COLOR_VARIANT, match.fallback
            handle = self._load_texture(texture)

        slot = self._pick_slot(material, self.slot_names.albedo)
        if not dry_run:
            self._set_texture(material, slot, handle, outcome)
        outcome.albedo_slot = slot
        outcome.albedo_assigned = True
        outcome.albedo_kind = kind
        outcome.albedo_texture = texture


    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#
    # NORMAL MAP
    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#

    def ensure_normal_map_import(self, texture: TextureAsset, handle: Any, dry_run: bool, outcome: ApplyOutcome) -> Any:
        """
        Makes sure the texture is imported as a normal map. Only touches the importer if it isn't
        already tagged, and hands back a freshly loaded handle when a reimport happened.
        """
        importer = self.store.get_importer(texture.path)
        if importer is None:
            logger.warning(f"No import settings found for '{texture.path}', assigning it as it is")
            return handle

        if importer.role == ImporterRole.NORMAL_MAP:
            return handle

        outcome.normal_needs_reimport = True
        if dry_run:
            logger.info(f"Would mark '{texture.path}' as a normal map")
            return handle

        importer.role = ImporterRole.NORMAL_MAP
        importer.reimport()
        outcome.importer_reconfigured = True
        logger.info(f"Marked '{texture.path}' as a normal map and reimported it")
        # The old handle is stale after a reimport
        return self._load_texture(texture)

    def enable_normal_mapping(self, material: Any, dry_run: bool, outcome: ApplyOutcome) -> Optional[NormalMapStrategy]:
        """
        Tries each NormalMapStrategy in order and stops at the first one the material supports.
        Returns the strategy that applied, or None if the material has no such control (that's fine).
        """
        for strategy in NormalMapStrategy:
            if strategy == NormalMapStrategy.TOGGLE:
                candidates, value = self.slot_names.normal_toggle, 1.0
            else:
                candidates, value = self.slot_names.normal_strength, self.slot_names.default_normal_strength

            name = self._first_exposed(material, candidates)
            if name is None:
                continue
            if not dry_run:
                self._set_float(material, name, value, outcome)
            return strategy

        return None

    def apply_normal(self, material: Any, texture: TextureAsset, dry_run: bool, outcome: ApplyOutcome):
        handle = self._load_texture(texture)
        handle = self.ensure_normal_map_import(texture, handle, dry_run, outcome)
        slot = self._pick_slot(material, self.slot_names.normal)
        if not dry_run:
            self._set_texture(material, slot, handle, outcome)
        outcome.normal_slot = slot
        outcome.normal_assigned = True
        outcome.normal_strategy = self.enable_normal_mapping(material, dry_run, outcome)


    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#
    # BOTH
    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#

    def apply(self, material: Any, decision: MatchDecision, dry_run: bool, outcome: Optional[ApplyOutcome] = None) -> ApplyOutcome:
        """
        Applies a match decision to a loaded material.

        Args:
            material: Material handle from the store.
            decision: The resolved albedo and normal map matches.
            dry_run: If True, nothing in the store is changed.
            outcome: Filled in as the work happens, so a caller still sees what was written if a
                store call raises halfway through. A new one is made if not given.

        Returns:
            ApplyOutcome: What was (or would have been) done. Textures that failed to load are listed in missing.
        """
        if outcome is None:
            outcome = ApplyOutcome()

        if decision.albedo.matched:
            try:
                self.apply_albedo(material, decision.albedo, dry_run, outcome)
            except NotFoundError as e:
                logger.warning(str(e))
                outcome.missing.append(e.path)

        if decision.normal.matched:
            try:
                self.apply_normal(material, decision.normal.texture, dry_run, outcome)
            except NotFoundError as e:
                logger.warning(str(e))
                outcome.missing.append(e.path)

        return outcome
