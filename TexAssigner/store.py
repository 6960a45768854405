from enum import Enum
from typing import Any, List, Optional, Sequence, Protocol


##### THE ASSET STORE #####
# The engine never touches assets directly, it goes through an object that follows AssetStore.
# memory_store.MemoryAssetStore keeps everything in dictionaries (used headless and in tests),
# blender_store.BlenderAssetStore maps the same calls onto bpy data.
# Material and texture handles are opaque to the engine, it only hands them back to the store.
###########################


class AssetKind(Enum):
    MATERIAL = "material"
    TEXTURE_2D = "texture_2d"


class ImporterRole:
    DEFAULT = "default"
    NORMAL_MAP = "normal_map"


class TextureImporter(Protocol):
    """Import settings of one texture. Changing role only takes effect after reimport()."""
    role: str

    def reimport(self) -> None:
        ...


class AssetStore(Protocol):

    def resolve_folder(self, kind: AssetKind, folder: str) -> Optional[str]:
        """Canonical path of a folder that can hold assets of this kind, None if there is no such folder"""
        ...

    def find_assets(self, kind: AssetKind, folders: Sequence[str]) -> List[str]:
        """Identifiers of every asset of this kind in the folders and all their subfolders"""
        ...

    def resolve_path(self, identifier: str) -> str:
        ...

    def material_name(self, path: str) -> str:
        """The name a material is matched by"""
        ...

    def load_material(self, path: str) -> Optional[Any]:
        ...

    def load_texture(self, path: str) -> Optional[Any]:
        ...

    def get_importer(self, path: str) -> Optional[TextureImporter]:
        ...

    def has_property(self, material: Any, name: str) -> bool:
        ...

    def get_texture(self, material: Any, slot: str) -> Optional[Any]:
        """The texture handle currently in a slot, None if it's empty"""
        ...

    def set_texture(self, material: Any, slot: str, texture: Any) -> None:
        ...

    def get_float(self, material: Any, name: str) -> Optional[float]:
        ...

    def set_float(self, material: Any, name: str, value: float) -> None:
        ...

    def mark_dirty(self, asset: Any) -> None:
        ...

    def save_pending(self) -> None:
        ...
