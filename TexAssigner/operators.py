import bpy
import logging
from bpy.types import Operator
from . import engine
from . import preferences
from .blender_store import BlenderAssetStore

logging.basicConfig()
logger = logging.getLogger('TexAssigner.operators')
logger.setLevel(logging.INFO)


#¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#
# OPERATORS
#¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#

class TexAssignerAssignTextures(Operator):
    """Match the materials of a collection with texture files by name and assign base color and normal maps.
    Enable Dry Run to only see what would happen"""
    bl_idname = "texassigner.assign_textures"
    bl_label = "Assign Textures"
    bl_options = {'REGISTER', 'UNDO'}

    @classmethod
    def poll(cls, context):
        return context.scene is not None and hasattr(context.scene, "texassigner")

    def execute(self, context):
        props = context.scene.texassigner
        prefs = preferences.get_preferences(context)
        default_folder = prefs.default_textures_folder if prefs else ""

        settings = props.to_settings(default_folder)
        store = BlenderAssetStore(context.scene)

        # Spinny Cursor
        context.window.cursor_set('WAIT')
        try:
            report = engine.assign_textures(store, settings)
        finally:
            context.window.cursor_set('DEFAULT')

        props.store_report(report)

        if report.aborted:
            self.report({'ERROR'}, report.error)
            return {'CANCELLED'}

        if report.total_materials == 0:
            self.report({'WARNING'}, report.lines[-1] if report.lines else "Nothing to do")
            return {'CANCELLED'}

        mode = "Previewed" if settings.dry_run else "Assigned"
        self.report({'INFO'}, f"{mode} {report.albedo_matches} albedo and {report.normal_map_matches} normal map textures on {report.total_materials} materials")
        return {'FINISHED'}


class TexAssignerClearLog(Operator):
    """Clear the log of the last run"""
    bl_idname = "texassigner.clear_log"
    bl_label = "Clear Log"
    bl_options = {'REGISTER'}

    def execute(self, context):
        context.scene.texassigner.clear_log()
        return {'FINISHED'}



#¤¤¤¤¤¤¤¤¤¤¤¤¤#
# Registering #
#¤¤¤¤¤¤¤¤¤¤¤¤¤#

classes = (
    TexAssignerAssignTextures,
    TexAssignerClearLog,
)

def register():
    for cls in classes:
        bpy.utils.register_class(cls)

def unregister():
    for cls in reversed(classes):
        bpy.utils.unregister_class(cls)
