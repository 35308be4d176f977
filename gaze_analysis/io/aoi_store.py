"""JSON persistence of AOI lists (one ``aoi.json`` per result/stimulus)."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from ..domain.aoi import AoiElement, AoiShape


def aoi_to_dict(aoi: AoiElement) -> Dict[str, Any]:
    return {
        "Uid": aoi.uid,
        "Name": aoi.name,
        "Type": aoi.shape.value,
        "NormalizedPoints": [{"X": float(x), "Y": float(y)} for x, y in aoi.normalized_points],
        "ColorHex": aoi.color_hex,
        "LineWidth": aoi.line_width,
        "FontSize": aoi.font_size,
    }


def _parse_shape(value: Any) -> AoiShape:
    # the application writes enum names, older files the ordinal
    if isinstance(value, int):
        return list(AoiShape)[value]
    return AoiShape(str(value))


def aoi_from_dict(data: Dict[str, Any]) -> AoiElement:
    kwargs: Dict[str, Any] = {
        "shape": _parse_shape(data["Type"]),
        "normalized_points": [(float(p["X"]), float(p["Y"])) for p in data.get("NormalizedPoints", [])],
        "name": data.get("Name", "AOI"),
        "color_hex": data.get("ColorHex", "#FFFF0000"),
        "line_width": float(data.get("LineWidth", 2.0)),
        "font_size": float(data.get("FontSize", 12.0)),
    }
    if data.get("Uid"):
        kwargs["uid"] = data["Uid"]
    return AoiElement(**kwargs)


def load_aois(path: Union[str, Path]) -> List[AoiElement]:
    """Load an AOI list; a missing file is an empty list."""
    path = Path(path)
    if not path.exists():
        return []
    with path.open("r", encoding="utf-8") as f:
        payload = json.load(f)
    return [aoi_from_dict(item) for item in payload or []]


def save_aois(aois: List[AoiElement], path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump([aoi_to_dict(a) for a in aois], f, indent=2)
