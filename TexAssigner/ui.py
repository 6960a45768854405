import bpy

# Only the newest lines fit in the panel, the full log is in the console
MAX_LOG_LINES = 30


class TexAssignerPanel(bpy.types.Panel):
    """Texture Assigner Panel"""
    bl_label = "Texture Assigner"
    bl_idname = "VIEW3D_PT_texassigner"
    bl_space_type = 'VIEW_3D'
    bl_region_type = 'UI'
    bl_category = "TexAssigner"


    @classmethod
    def poll(cls, context):
        return hasattr(context.scene, "texassigner")


    def draw(self, context):
        layout = self.layout
        props = context.scene.texassigner

        # Settings Box
        box = layout.box()
        box.label(text="Assign base color and normal maps by name:")
        col = box.column(align=True)
        col.prop_search(props, "materials_collection", bpy.data, "collections", text="Materials")
        col.prop(props, "textures_folder", text="Textures")
        col = box.column(align=True)
        col.prop(props, "include_subfolders")
        col.prop(props, "dry_run")

        row = box.row()
        row.scale_y = 1.4
        row.operator("texassigner.assign_textures",
                     text="Preview Assignment" if props.dry_run else "Assign Textures",
                     icon='VIEWZOOM' if props.dry_run else 'TEXTURE')

        if len(props.log_lines) == 0:
            return

        # Results Box
        box = layout.box()
        box.label(text="Last Run:")
        col = box.column(align=True)
        col.label(text=f"Albedo: {props.last_albedo} of {props.last_total}  ({props.last_exact} exact, {props.last_color_variant} color variant)")
        col.label(text=f"Normal maps: {props.last_normal} of {props.last_total}")

        # Log Box
        box = layout.box()
        row = box.row()
        row.label(text="Log", icon='TEXT')
        row.operator("texassigner.clear_log", text="", icon='X')
        col = box.column(align=True)
        start = max(0, len(props.log_lines) - MAX_LOG_LINES)
        if start > 0:
            col.label(text=f"... {start} earlier lines in the console")
        for line in props.log_lines[start:]:
            col.label(text=line.message)



def register():
    bpy.utils.register_class(TexAssignerPanel)

def unregister():
    bpy.utils.unregister_class(TexAssignerPanel)
