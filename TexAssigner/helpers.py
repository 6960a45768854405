import re
import logging
from pathlib import PurePosixPath

logging.basicConfig()
logger = logging.getLogger('TexAssigner.helpers')
logger.setLevel(logging.INFO)

LOGGER_PREFIX = "TexAssigner"
DUPLICATE_SUFFIX_REGEX = re.compile(r"\.\d{3}$")



#¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#
# FUNCTIONS
#¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤¤#

def normalize_folder(folder: str) -> str:
    """
    Turns a folder path into the form used for comparisons: forward slashes, no trailing slash.
    A lone "/" is kept as is.

    Args:
        folder: The folder path to normalize.

    Returns:
        The normalized folder path.
    """
    if not folder:
        return ""
    folder = folder.replace("\\", "/")
    if len(folder) > 1:
        folder = folder.rstrip("/")
    return folder


def asset_base_name(path: str) -> str:
    """
    Returns the filename of an asset path without its folder and without its extension.
    "Assets/Textures/wood_floor.png" -> "wood_floor"
    """
    return PurePosixPath(path.replace("\\", "/")).stem


def strip_duplicate_suffix(name: str) -> str:
    """
    Removes the ".001" style suffix Blender adds to duplicated datablocks. Other dots are kept.
    "wood.001" -> "wood", "Mat.Wood" -> "Mat.Wood"
    """
    return DUPLICATE_SUFFIX_REGEX.sub("", name)


def parent_folder(path: str) -> str:
    """Returns the folder an asset path lives in, normalized"""
    return normalize_folder(str(PurePosixPath(path.replace("\\", "/")).parent))


def is_direct_child(path: str, folder: str) -> bool:
    """
    Checks if an asset sits directly inside a folder and not in one of its subfolders.

    Args:
        path: Path of the asset.
        folder: The folder to check against.

    Returns:
        True if the parent folder of the asset is the folder itself, otherwise False.
    """
    return parent_folder(path) == normalize_folder(folder)


def set_log_level(level: int):
    """
    Sets the level of every TexAssigner logger at once. Loggers are created per module so this
    has to walk all of them.
    """
    for name, existing in logging.root.manager.loggerDict.items():
        if name.startswith(LOGGER_PREFIX) and isinstance(existing, logging.Logger):
            existing.setLevel(level)
    logger.debug(f"Log level for all {LOGGER_PREFIX} loggers set to {logging.getLevelName(level)}")
