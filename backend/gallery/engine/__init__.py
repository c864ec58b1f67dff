"""Infinite photo collage engine — placement, toroidal camera, inertia, culling."""

from gallery.engine.audit import audit_layout
from gallery.engine.culler import cull_visible, hit_test
from gallery.engine.items import ItemSpec, Layout, PlacedItem
from gallery.engine.motion import CameraState, MotionController, MotionPhase, advance
from gallery.engine.rng import SeededRng
from gallery.engine.solver import PlacementSolver, placeholder_layout, solve
from gallery.engine.view import CanvasView, Frame
from gallery.engine.world import World

__all__ = [
    "audit_layout",
    "cull_visible",
    "hit_test",
    "ItemSpec",
    "Layout",
    "PlacedItem",
    "CameraState",
    "MotionController",
    "MotionPhase",
    "advance",
    "SeededRng",
    "PlacementSolver",
    "placeholder_layout",
    "solve",
    "CanvasView",
    "Frame",
    "World",
]
