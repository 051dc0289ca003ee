"""Save and load battlefield snapshots as PNG (with embedded metadata) or JSON.

The primary format is PNG: the rendered board image is saved with the full
battlefield JSON embedded in a PNG tEXt chunk (key: ``deployment_board``).
A saved file is both a shareable picture of the deployment and a complete,
machine-readable snapshot that can be loaded back and re-checked. JSON files
are also supported as a plain-text alternative.

Used by ``scripts/check_board.py``.
"""

import json

from PIL import Image
from PIL.PngImagePlugin import PngInfo

from rules.types import Battlefield

METADATA_KEY = "deployment_board"


def save_board_png(img: Image.Image, board: Battlefield, path: str) -> None:
    """Save a rendered board image with the snapshot as a PNG tEXt chunk."""
    info = PngInfo()
    info.add_text(METADATA_KEY, json.dumps(board.to_dict()))
    img.save(path, pnginfo=info)


def load_board_png(path: str) -> Battlefield:
    """Load a battlefield from a PNG file's tEXt metadata.

    Raises ValueError if the PNG does not contain board metadata.
    """
    with Image.open(path) as img:
        text_data = getattr(img, "text", None)
        if not text_data or METADATA_KEY not in text_data:
            raise ValueError(
                "PNG file does not contain board metadata "
                f"(missing '{METADATA_KEY}' chunk)"
            )
        raw = text_data[METADATA_KEY]
    return Battlefield.from_dict(json.loads(raw))


def save_board_json(board: Battlefield, path: str) -> None:
    with open(path, "w") as f:
        json.dump(board.to_dict(), f, indent=2)


def load_board_json(path: str) -> Battlefield:
    """Load a battlefield from a JSON file."""
    with open(path) as f:
        return Battlefield.from_dict(json.load(f))


def load_board(path: str) -> Battlefield:
    """Load a battlefield from a file, dispatching by extension.

    Supports .png (reads embedded metadata) and .json (reads raw JSON).
    Raises ValueError for unsupported extensions.
    """
    lower = path.lower()
    if lower.endswith(".png"):
        return load_board_png(path)
    elif lower.endswith(".json"):
        return load_board_json(path)
    else:
        raise ValueError(f"Unsupported file extension: {path}")
