"""
Rune highlight definitions

Each rune has a ``<rune>_rune.json`` unit definition under
``hd/items/misc/rune``. The highlighted variant adds light and aura effects
to the dropped rune; the plain variant is the stock model only.
"""

from __future__ import annotations

from typing import Any, Mapping

HORADRIC_LIGHT = "data/hd/vfx/particles/overlays/object/horadric_light/fx_horadric_light.particles"
FANATIC_AURA = "data/hd/vfx/particles/overlays/paladin/aura_fanatic/aura_fanatic.particles"
VALKYRIE_START = "data/hd/vfx/particles/overlays/common/valkyriestart/valkriestart_overlay.particles"
HIGHLIGHT_EFFECTS = ("horadric_light", "aura_fanatic", "valkriestart")

DROPPED_SKELETON = "data/hd/items/dropped_items/skeleton/dropped_items.skeleton"
DROPPED_STATE_MACHINE = "data/hd/items/dropped_items/dropped_items_helms_flip_nw.json"
DROPLIGHT_VFX_NAME = "entity_vfx_gousemyideaandshareyourfilthymods"

Document = dict[str, Any]


def highlight_name(rune: str) -> str:
    return f"{rune}_rune"


def highlight_file_name(rune: str) -> str:
    return f"{highlight_name(rune)}.json"


def _vector(x: float, y: float, z: float) -> Document:
    return {"x": x, "y": y, "z": z}


def _quaternion(x: float, y: float, z: float, w: float) -> Document:
    return {"x": x, "y": y, "z": z, "w": w}


def _transform(name: str, position: Document) -> Document:
    return {
        "type": "TransformDefinitionComponent",
        "name": name,
        "position": position,
        "orientation": _quaternion(0.0, 0.0, 0.0, 1.0),
        "scale": _vector(1.0, 1.0, 1.0),
        "inheritOnlyPosition": False,
    }


def _vfx(name: str, filename: str) -> Document:
    return {
        "type": "VfxDefinitionComponent",
        "name": name,
        "filename": filename,
        "hardKillOnDestroy": False,
    }


def _entity(name: str, entity_id: int, components: list[Document]) -> Document:
    return {"type": "Entity", "name": name, "id": entity_id, "components": components}


def _paths(*paths: str) -> list[Document]:
    return [{"path": path} for path in paths]


def _droplight(particles: str) -> Document:
    return _entity("droplight", 9999996974, [
        _transform("component_transform1", _vector(0.0, 0.0, 0.0)),
        _vfx(DROPLIGHT_VFX_NAME, particles),
    ])


def build_rune_highlight(rune: str, highlighted: bool) -> Document:
    """Unit definition document for the dropped ``rune``."""
    name = highlight_name(rune)
    model = f"data/hd/items/misc/rune/{name}/{name}.model"
    texture = f"data/hd/items/misc/rune/{name}/misc_{name}"

    dependencies: Document = {}
    if highlighted:
        dependencies["particles"] = _paths(HORADRIC_LIGHT)
    dependencies.update({
        "models": _paths(model),
        "skeletons": _paths(DROPPED_SKELETON),
        "animations": [],
        "textures": _paths(f"{texture}_ALB.texture", f"{texture}_NRM.texture", f"{texture}_ORM.texture"),
        "physics": [],
        "json": _paths(DROPPED_STATE_MACHINE),
        "variantdata": [],
        "objecteffects": [],
        "other": [],
    })

    entities = [
        _entity("entity_root", 2426448561, [
            {
                "type": "UnitRootComponent",
                "name": "component_root",
                "state_machine_filename": DROPPED_STATE_MACHINE,
                "doNotInheritRotation": False,
                "rotationOverride": _quaternion(0.0, 0.3826834, 0.0, 0.9238795),
                "doNotUseHDHeight": False,
                "hideAllMeshWhenInOpenedMode": False,
                "onCreateEventName": "",
                "animations": [],
            },
            {
                "type": "SkeletonDefinitionComponent",
                "name": "component_skeleton",
                "filename": DROPPED_SKELETON,
            },
            _transform("entity_root_TransformDefinition", _vector(-1.0, 0.0, -0.9)),
        ]),
        _entity("entity_model", 1071332909, [
            {
                "type": "ModelDefinitionComponent",
                "name": f"component_model_{name}",
                "filename": model,
                "visibleLayers": 1,
                "lightMask": 19,
                "shadowMask": 3,
                "ghostShadows": False,
                "floorModel": False,
                "terrainBlendEnableYUpBlend": False,
                "terrainBlendMode": 1,
            },
        ]),
    ]

    if highlighted:
        entities.extend([
            _droplight(HORADRIC_LIGHT),
            _entity("entity_root", 1079187010, [
                _vfx("entity_root_VfxDefinition", FANATIC_AURA),
            ]),
            _droplight(VALKYRIE_START),
        ])

    return {
        "dependencies": dependencies,
        "type": "UnitDefinition",
        "name": name,
        "entities": entities,
    }


def is_highlighted_document(document: Mapping[str, Any]) -> bool:
    """True when a unit definition carries any of the highlight effects."""
    for entity in document.get("entities") or ():
        for component in entity.get("components") or ():
            if component.get("type") != "VfxDefinitionComponent":
                continue
            filename = component.get("filename") or ""
            if any(effect in filename for effect in HIGHLIGHT_EFFECTS):
                return True
    return False
