import bpy
import logging
from bpy.types import AddonPreferences
from bpy.props import StringProperty, BoolProperty
from . import helpers

logging.basicConfig()
logger = logging.getLogger('TexAssigner.preferences')
logger.setLevel(logging.INFO)


def update_log_level(self, context):
    helpers.set_log_level(logging.DEBUG if self.verbose_logging else logging.INFO)


#¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#
# PREFERENCES
#¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#

class TexAssignerAddonPreferences(AddonPreferences):
    bl_idname = __package__

    default_textures_folder: StringProperty(
        name="Default Textures Folder",
        subtype='DIR_PATH',
        description="Texture folder used when a scene doesn't set its own"
    )

    verbose_logging: BoolProperty(
        name="Verbose Logging",
        description="Print every classification and match decision to the console",
        default=False,
        update=update_log_level,
    )

    def draw(self, context):
        layout = self.layout
        box = layout.box()
        col = box.column()
        col.prop(self, "default_textures_folder")
        col.prop(self, "verbose_logging")

        box = layout.box()
        col = box.column()
        col.label(text="How textures are matched:", icon='INFO')
        col.label(text="\"wood_floor\" gets the texture \"wood_floor\" as its base color.")
        col.label(text="Without one, it takes the first \"wood_floor_color_<anything>\" instead.")
        col.label(text="Independently, \"wood_floor_normal<anything>\" becomes its normal map.")


def get_preferences(context):
    addon = context.preferences.addons.get(__package__)
    return addon.preferences if addon else None


def register():
    bpy.utils.register_class(TexAssignerAddonPreferences)

    prefs = get_preferences(bpy.context)
    if prefs and prefs.verbose_logging:
        helpers.set_log_level(logging.DEBUG)

def unregister():
    bpy.utils.unregister_class(TexAssignerAddonPreferences)
