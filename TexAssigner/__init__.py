bl_info = {
    "name": "TexAssigner",
    "author": "TexAssigner contributors",
    "version": (1, 0, 0),
    "blender": (4, 2, 0),
    "location": "View3D > Sidebar > TexAssigner",
    "description": "Assign base color and normal map textures to materials by file name",
    "category": "Material",
}

from . import helpers
from . import naming
from . import candidate_index
from . import matching
from . import settings
from . import applier
from . import report
from . import engine
from . import memory_store

from .engine import assign_textures
from .memory_store import MemoryAssetStore
from .settings import AssignerSettings, SlotNames, UNITY_SLOT_NAMES, BLENDER_SLOT_NAMES

# The Blender modules need bpy, they are only imported once Blender registers the addon


def register():
    from . import preferences
    from . import properties
    from . import operators
    from . import ui

    preferences.register()
    properties.register()
    operators.register()
    ui.register()


def unregister():
    from . import preferences
    from . import properties
    from . import operators
    from . import ui

    ui.unregister()
    operators.unregister()
    properties.unregister()
    preferences.unregister()

if __name__ == "__main__":
    register()
