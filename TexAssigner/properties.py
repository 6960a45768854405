import bpy
import logging
from bpy.props import StringProperty, BoolProperty, IntProperty, CollectionProperty, PointerProperty
from bpy.types import PropertyGroup
from .report import Report
from .settings import AssignerSettings, BLENDER_SLOT_NAMES

logging.basicConfig()
logger = logging.getLogger('TexAssigner.properties')
logger.setLevel(logging.INFO)


#¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#
# PROPERTIES
#¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#

class TexAssignerLogLine(PropertyGroup):
    message: StringProperty(name="Message", default="")


# Properties that live on the scene
class TexAssignerSceneProperties(PropertyGroup):
    """Settings and last results of the texture assigner"""

    materials_collection: StringProperty(
        name="Materials Collection",
        description="Collection whose objects' materials get textures. A path like \"Props/Wood\" or just a collection name",
        default=""
    )

    textures_folder: StringProperty(
        name="Textures Folder",
        subtype='DIR_PATH',
        description="Folder to look for texture files in. Uses the default from the addon preferences if empty",
        default=""
    )

    include_subfolders: BoolProperty(
        name="Include Subfolders",
        description="Also use child collections and texture subfolders",
        default=True
    )

    dry_run: BoolProperty(
        name="Dry Run (Preview Only)",
        description="Only report what would be assigned, don't change anything",
        default=False
    )

    log_lines: CollectionProperty(
        type=TexAssignerLogLine,
        name="Log",
        description="Log of the last run"
    )

    last_total: IntProperty(name="Materials", default=0)
    last_albedo: IntProperty(name="Albedo Matches", default=0)
    last_exact: IntProperty(name="Exact Matches", default=0)
    last_color_variant: IntProperty(name="Color Variant Matches", default=0)
    last_normal: IntProperty(name="Normal Maps", default=0)

    def to_settings(self, default_textures_folder: str = "") -> AssignerSettings:
        return AssignerSettings(
            materials_folder=self.materials_collection,
            textures_folder=self.textures_folder or default_textures_folder,
            include_subfolders=self.include_subfolders,
            dry_run=self.dry_run,
            slot_names=BLENDER_SLOT_NAMES,
        )

    def store_report(self, report: Report):
        """Keeps the log and counters of a finished run so the panel can show them"""
        for line in report.lines:
            item = self.log_lines.add()
            item.message = line
        self.last_total = report.total_materials
        self.last_albedo = report.albedo_matches
        self.last_exact = report.exact_albedo_matches
        self.last_color_variant = report.color_variant_matches
        self.last_normal = report.normal_map_matches

    def clear_log(self):
        self.log_lines.clear()


def register():
    bpy.utils.register_class(TexAssignerLogLine)
    bpy.utils.register_class(TexAssignerSceneProperties)
    bpy.types.Scene.texassigner = PointerProperty(type=TexAssignerSceneProperties)

def unregister():
    if hasattr(bpy.types.Scene, 'texassigner'):
        del bpy.types.Scene.texassigner
    bpy.utils.unregister_class(TexAssignerSceneProperties)
    bpy.utils.unregister_class(TexAssignerLogLine)
