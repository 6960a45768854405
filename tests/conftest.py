import pytest

from TexAssigner.memory_store import MemoryAssetStore
from TexAssigner.settings import AssignerSettings
from TexAssigner.store import ImporterRole

MATERIALS = "Assets/Materials"
TEXTURES = "Assets/Textures"

LIT_PROPERTIES = ("_MainTex", "_BumpMap", "_BumpScale")


@pytest.fixture
def store():
    store = MemoryAssetStore()
    store.add_folder(MATERIALS)
    store.add_folder(TEXTURES)
    return store


@pytest.fixture
def settings():
    return AssignerSettings(materials_folder=MATERIALS, textures_folder=TEXTURES)


@pytest.fixture
def sample_store(store):
    """wood_floor has an exact texture, metal_panel a color variant, glass only a normal map"""
    for name in ("wood_floor", "metal_panel", "glass"):
        store.add_material(f"{MATERIALS}/{name}.mat", LIT_PROPERTIES)
    store.add_texture(f"{TEXTURES}/wood_floor.png")
    store.add_texture(f"{TEXTURES}/metal_panel_color_rusty.png")
    store.add_texture(f"{TEXTURES}/glass_normal_v2.png", role=ImporterRole.DEFAULT)
    return store
