import os
import bpy
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence
from . import helpers
from .store import AssetKind, ImporterRole

logging.basicConfig()
logger = logging.getLogger('TexAssigner.blender_store')
logger.setLevel(logging.INFO)


##### HOW BLENDER DATA IS MAPPED ONTO THE ASSET STORE #####
# Materials: "folders" are collections. A collection path looks like "Props/Wood", and the path of
#            a material is "<collection path>/<material name>". A material belongs to a collection if
#            an object directly in that collection uses it. Child collections are the subfolders.
#            A "/" in a material name is written as "%2F" in its path. Materials are matched by their
#            name without the ".001" style duplicate suffix, so "wood.001" gets the same textures as "wood".
# Textures:  "folders" are directories on disk (blend-relative "//" paths work). Every image file
#            in them is a texture.
# Importer:  the role of a texture is its colorspace. Non-Color means normal map, and reimport()
#            reloads the image. Changing the colorspace marks the image dirty.
# Slots:     inputs on the material's Principled BSDF. Image nodes (and the Normal Map node) made by
#            this store are named so the next run reuses them instead of piling up new ones.
#            A material without a Principled BSDF gets one on the first write, so until then it
#            reports the inputs that node will have.
###########################################################

IMAGE_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.tga', '.bmp', '.exr', '.tif', '.tiff', '.hdr', '.webp')
NORMAL_MAP_COLORSPACE = 'Non-Color'
DEFAULT_COLORSPACE = 'sRGB'
NODE_PREFIX = "TexAssigner"
NORMAL_INPUTS = ("Normal",)
NORMAL_STRENGTH_PROPERTY = "Normal Strength"
# Inputs of a freshly added Principled BSDF that slot names can refer to
PRINCIPLED_INPUTS = ("Base Color", "Metallic", "Roughness", "IOR", "Alpha", "Normal", "Emission Color", "Emission Strength", "Coat Normal")


class BlenderImageImporter:
    """Import settings of an image, see the mapping above"""

    def __init__(self, image: bpy.types.Image, store: "BlenderAssetStore"):
        self.image = image
        self.store = store

    @property
    def role(self) -> str:
        if self.image.colorspace_settings.name == NORMAL_MAP_COLORSPACE:
            return ImporterRole.NORMAL_MAP
        return ImporterRole.DEFAULT

    @role.setter
    def role(self, value: str):
        colorspace = NORMAL_MAP_COLORSPACE if value == ImporterRole.NORMAL_MAP else DEFAULT_COLORSPACE
        if self.image.colorspace_settings.name != colorspace:
            self.image.colorspace_settings.name = colorspace
            self.store.mark_dirty(self.image)

    def reimport(self):
        self.image.reload()


class BlenderAssetStore:
    """AssetStore over the open blend file and the texture directories on disk"""

    def __init__(self, scene: bpy.types.Scene):
        self.scene = scene
        self.pending = []
        # Material path -> material name, filled in by find_assets
        self.material_names: Dict[str, str] = {}


    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#
    # DISCOVERY
    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#

    def collection_paths(self) -> Dict[str, bpy.types.Collection]:
        """Every collection in the scene keyed by its path, parents before children"""
        paths = {}

        def walk(collection, prefix):
            for child in collection.children:
                path = f"{prefix}/{child.name}" if prefix else child.name
                paths[path] = child
                walk(child, path)

        walk(self.scene.collection, "")
        return paths

    def resolve_folder(self, kind: AssetKind, folder: str) -> Optional[str]:
        if not folder:
            return None

        if kind == AssetKind.MATERIAL:
            paths = self.collection_paths()
            if folder in paths:
                return folder
            # A bare collection name is fine too, as long as it's somewhere in the scene
            for path, collection in paths.items():
                if collection.name == folder:
                    return path
            return None

        directory = bpy.path.abspath(folder)
        if not os.path.isdir(directory):
            return None
        return Path(directory).resolve().as_posix()

    def find_assets(self, kind: AssetKind, folders: Sequence[str]) -> List[str]:
        if kind == AssetKind.MATERIAL:
            return self._find_materials(folders)
        return self._find_images(folders)

    def _find_materials(self, folders: Sequence[str]) -> List[str]:
        paths = self.collection_paths()
        found = []
        seen = set()
        for folder in folders:
            for path, collection in paths.items():
                if path != folder and not path.startswith(folder + "/"):
                    continue
                for obj in collection.objects:
                    for slot in obj.material_slots:
                        if slot.material is None or slot.material.name in seen:
                            continue
                        seen.add(slot.material.name)
                        material_path = f"{path}/{slot.material.name.replace('/', '%2F')}"
                        self.material_names[material_path] = slot.material.name
                        found.append(material_path)
        return found

    def _find_images(self, folders: Sequence[str]) -> List[str]:
        found = []
        for folder in folders:
            for path in sorted(Path(folder).rglob("*")):
                if path.is_file() and path.suffix.lower() in IMAGE_EXTENSIONS:
                    found.append(path.as_posix())
        return found

    def resolve_path(self, identifier: str) -> str:
        return identifier


    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#
    # LOADING
    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#

    def material_name(self, path: str) -> str:
        return helpers.strip_duplicate_suffix(self.material_names.get(path, path.rsplit("/", 1)[-1]))

    def load_material(self, path: str) -> Optional[bpy.types.Material]:
        name = self.material_names.get(path)
        if name is None:
            return None
        return bpy.data.materials.get(name)

    def load_texture(self, path: str) -> Optional[bpy.types.Image]:
        try:
            return bpy.data.images.load(path, check_existing=True)
        except RuntimeError as e:
            logger.error(f"Error loading image {path}: {e}")
            return None

    def get_importer(self, path: str) -> Optional[BlenderImageImporter]:
        image = self.load_texture(path)
        if image is None:
            return None
        return BlenderImageImporter(image, self)


    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#
    # NODES
    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#

    def _principled(self, material, create=False):
        if not material.use_nodes:
            if not create:
                return None
            material.use_nodes = True
        nodes = material.node_tree.nodes
        for node in nodes:
            if node.type == 'BSDF_PRINCIPLED':
                return node
        if not create:
            return None

        logger.warning(f"No Principled BSDF in '{material.name}', adding one")
        principled = nodes.new('ShaderNodeBsdfPrincipled')
        for node in nodes:
            if node.type == 'OUTPUT_MATERIAL':
                material.node_tree.links.new(principled.outputs[0], node.inputs['Surface'])
                principled.location = (node.location.x - 300, node.location.y)
                break
        return principled

    def _named_node(self, material, node_type, name, location):
        nodes = material.node_tree.nodes
        node = nodes.get(name)
        if node is None:
            node = nodes.new(node_type)
            node.name = name
            node.label = name
            node.location = location
        return node

    def _normal_map_node(self, material, principled):
        return self._named_node(material, 'ShaderNodeNormalMap', f"{NODE_PREFIX} Normal Map",
                                (principled.location.x - 250, principled.location.y - 400))

    def has_property(self, material: bpy.types.Material, name: str) -> bool:
        principled = self._principled(material)
        if principled is None:
            # Not there yet, set_texture() adds it
            return name in PRINCIPLED_INPUTS or name == NORMAL_STRENGTH_PROPERTY
        if name == NORMAL_STRENGTH_PROPERTY:
            # The Normal Map node that carries it is created together with the normal slot
            return any(normal_input in principled.inputs for normal_input in NORMAL_INPUTS)
        return name in principled.inputs

    def get_texture(self, material: bpy.types.Material, slot: str) -> Optional[bpy.types.Image]:
        """The image in this store's image node for the slot, if that node is still wired up"""
        principled = self._principled(material)
        if principled is None or slot not in principled.inputs:
            return None
        image_node = material.node_tree.nodes.get(f"{NODE_PREFIX} {slot}")
        if image_node is None or not principled.inputs[slot].is_linked:
            return None
        return image_node.image

    def get_float(self, material: bpy.types.Material, name: str) -> Optional[float]:
        principled = self._principled(material)
        if principled is None:
            return None
        if name == NORMAL_STRENGTH_PROPERTY:
            normal_map = material.node_tree.nodes.get(f"{NODE_PREFIX} Normal Map")
            return None if normal_map is None else normal_map.inputs['Strength'].default_value
        if name not in principled.inputs:
            return None
        return principled.inputs[name].default_value

    def set_texture(self, material: bpy.types.Material, slot: str, texture: bpy.types.Image):
        principled = self._principled(material, create=True)
        links = material.node_tree.links
        offset = -400 if slot in NORMAL_INPUTS else 0
        image_node = self._named_node(material, 'ShaderNodeTexImage', f"{NODE_PREFIX} {slot}",
                                      (principled.location.x - 600, principled.location.y + offset))
        image_node.image = texture

        if slot in NORMAL_INPUTS:
            normal_map = self._normal_map_node(material, principled)
            links.new(image_node.outputs['Color'], normal_map.inputs['Color'])
            links.new(normal_map.outputs['Normal'], principled.inputs[slot])
        else:
            links.new(image_node.outputs['Color'], principled.inputs[slot])
        logger.debug(f"Linked '{texture.name}' to '{slot}' on '{material.name}'")

    def set_float(self, material: bpy.types.Material, name: str, value: float):
        principled = self._principled(material, create=True)
        if name == NORMAL_STRENGTH_PROPERTY:
            self._normal_map_node(material, principled).inputs['Strength'].default_value = value
        else:
            principled.inputs[name].default_value = value


    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#
    # SAVING
    #¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#

    def mark_dirty(self, asset):
        if asset not in self.pending:
            self.pending.append(asset)

    def save_pending(self):
        if not self.pending:
            return
        if not bpy.data.filepath:
            logger.warning(f"The blend file has never been saved, {len(self.pending)} changed materials are only in the open file")
        else:
            bpy.ops.wm.save_mainfile()
            logger.info(f"Saved {len(self.pending)} changed materials to {bpy.data.filepath}")
        self.pending.clear()
