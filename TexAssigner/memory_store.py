import uuid
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple
from . import helpers
from .store import AssetKind, ImporterRole

logging.basicConfig()
logger = logging.getLogger('TexAssigner.memory_store')
logger.setLevel(logging.INFO)


@dataclass(eq=False)
class MemoryTexture:
    """A loaded texture handle. Reimporting replaces the handle, so an old one can go stale."""
    path: str
    generation: int = 0


@dataclass(eq=False)
class MemoryMaterial:
    path: str
    properties: Set[str] = field(default_factory=set)
    textures: Dict[str, MemoryTexture] = field(default_factory=dict)
    floats: Dict[str, float] = field(default_factory=dict)


class MemoryImporter:
    """Import settings of one texture in a MemoryAssetStore"""

    def __init__(self, store: "MemoryAssetStore", path: str, role: str = ImporterRole.DEFAULT):
        self._store = store
        self._role = role
        self.path = path

    @property
    def role(self) -> str:
        return self._role

    @role.setter
    def role(self, value: str):
        self._store.record_write("importer_role", self.path, value)
        self._role = value

    def reimport(self):
        self._store.record_write("reimport", self.path)
        old = self._store.textures[self.path]
        self._store.textures[self.path] = MemoryTexture(self.path, old.generation + 1)


class MemoryAssetStore:
    """
    An asset store that lives entirely in memory. Assets are found in the order they were added,
    and every write is recorded in `writes` as a tuple so a caller can see exactly what a run changed.
    """

    def __init__(self):
        self.folders: Set[str] = set()
        self.identifiers: Dict[str, str] = {}
        self.kinds: Dict[str, AssetKind] = {}
        self.materials: Dict[str, MemoryMaterial] = {}
        self.textures: Dict[str, MemoryTexture] = {}
        self.importers: Dict[str, MemoryImporter] = {}
        self.unloadable: Set[str] = set()
        self.dirty: List[Any] = []
        self.saved: List[Any] = []
        self.writes: List[Tuple] = []


    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#
    # POPULATING
    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#

    def add_folder(self, folder: str):
        folder = helpers.normalize_folder(folder)
        while folder and folder not in ("/", "."):
            self.folders.add(folder)
            folder = helpers.parent_folder(folder)

    def _register(self, path: str, kind: AssetKind) -> str:
        identifier = uuid.uuid4().hex
        self.identifiers[identifier] = path
        self.kinds[identifier] = kind
        self.add_folder(helpers.parent_folder(path))
        return identifier

    def add_material(self, path: str, properties=(), loadable: bool = True) -> MemoryMaterial:
        material = MemoryMaterial(path, properties=set(properties))
        self.materials[path] = material
        self._register(path, AssetKind.MATERIAL)
        if not loadable:
            self.unloadable.add(path)
        return material

    def add_texture(self, path: str, role: str = ImporterRole.DEFAULT, loadable: bool = True) -> MemoryTexture:
        texture = MemoryTexture(path)
        self.textures[path] = texture
        self.importers[path] = MemoryImporter(self, path, role)
        self._register(path, AssetKind.TEXTURE_2D)
        if not loadable:
            self.unloadable.add(path)
        return texture

    def record_write(self, *write):
        self.writes.append(write)


    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#
    # ASSET STORE
    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#

    def resolve_folder(self, kind: AssetKind, folder: str) -> Optional[str]:
        folder = helpers.normalize_folder(folder)
        return folder if folder in self.folders else None

    def find_assets(self, kind: AssetKind, folders: Sequence[str]) -> List[str]:
        prefixes = [helpers.normalize_folder(folder) + "/" for folder in folders]
        found = []
        for identifier, path in self.identifiers.items():
            if self.kinds[identifier] != kind:
                continue
            if any(path.startswith(prefix) for prefix in prefixes):
                found.append(identifier)
        return found

    def resolve_path(self, identifier: str) -> str:
        return self.identifiers[identifier]

    def material_name(self, path: str) -> str:
        return helpers.asset_base_name(path)

    def load_material(self, path: str) -> Optional[MemoryMaterial]:
        if path in self.unloadable:
            return None
        return self.materials.get(path)

    def load_texture(self, path: str) -> Optional[MemoryTexture]:
        if path in self.unloadable:
            return None
        return self.textures.get(path)

    def get_importer(self, path: str) -> Optional[MemoryImporter]:
        return self.importers.get(path)

    def has_property(self, material: MemoryMaterial, name: str) -> bool:
        return name in material.properties

    def get_texture(self, material: MemoryMaterial, slot: str) -> Optional[MemoryTexture]:
        return material.textures.get(slot)

    def set_texture(self, material: MemoryMaterial, slot: str, texture: MemoryTexture):
        self.record_write("set_texture", material.path, slot, texture.path)
        material.textures[slot] = texture

    def get_float(self, material: MemoryMaterial, name: str) -> Optional[float]:
        return material.floats.get(name)

    def set_float(self, material: MemoryMaterial, name: str, value: float):
        self.record_write("set_float", material.path, name, value)
        material.floats[name] = value

    def mark_dirty(self, asset: Any):
        if not any(asset is pending for pending in self.dirty):
            self.dirty.append(asset)

    def save_pending(self):
        self.record_write("save", len(self.dirty))
        logger.debug(f"Saving {len(self.dirty)} pending assets")
        self.saved.extend(self.dirty)
        self.dirty.clear()

    def importer_writes(self) -> int:
        """How many importer settings changes and reimports have happened so far"""
        return sum(1 for write in self.writes if write[0] in ("importer_role", "reimport"))
