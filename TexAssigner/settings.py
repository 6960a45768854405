import logging
from dataclasses import dataclass, field
from typing import Tuple
from . import helpers

logging.basicConfig()
logger = logging.getLogger('TexAssigner.settings')
logger.setLevel(logging.INFO)


#¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#
# SLOT NAMES
#¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#

@dataclass(frozen=True)
class SlotNames:
    """
    The fixed property names tried on a material, in priority order.
    The first entry of albedo and normal is used when a material exposes none of them.
    """
    albedo: Tuple[str, ...]
    normal: Tuple[str, ...]
    normal_toggle: Tuple[str, ...] = ()
    normal_strength: Tuple[str, ...] = ()
    default_normal_strength: float = 1.0


# Standard, URP and HDRP style shader properties
UNITY_SLOT_NAMES = SlotNames(
    albedo=("_MainTex", "_BaseMap", "_BaseColorMap"),
    normal=("_BumpMap", "_NormalMap"),
    normal_toggle=("_UseNormalMap", "_NormalMapEnabled"),
    normal_strength=("_BumpScale", "_NormalScale"),
)

# Principled BSDF inputs, see blender_store.py for how these are wired up
BLENDER_SLOT_NAMES = SlotNames(
    albedo=("Base Color",),
    normal=("Normal",),
    normal_toggle=(),
    normal_strength=("Normal Strength",),
)



#¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#
# RUN SETTINGS
#¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#

@dataclass
class AssignerSettings:
    """Everything one run of the assigner needs to know"""
    materials_folder: str = "Assets/Materials"
    textures_folder: str = "Assets/Textures"
    include_subfolders: bool = True
    dry_run: bool = False
    slot_names: SlotNames = field(default=UNITY_SLOT_NAMES)

    def __post_init__(self):
        self.materials_folder = helpers.normalize_folder(self.materials_folder)
        self.textures_folder = helpers.normalize_folder(self.textures_folder)
