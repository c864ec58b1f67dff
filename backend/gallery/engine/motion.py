"""Camera / motion controller — drag, release, glide, recenter.

All camera state lives in one ``CameraState`` record owned by a
``MotionController``. Pointer handlers and ``tick()`` run on one serialized
timeline (never concurrently), so no locking is involved. Pointer handlers
only record deltas and velocity samples; ``advance()`` is the single per-frame
step and is a pure function of (state, dt, now).

Phases:
    IDLE           camera settles toward its target
    DRAGGING       target follows the pointer 1:1 (unwrapped)
    INERTIAL       target glides under exponential friction
    RECENTERING    ease-out-cubic animation back to world-center

Offsets are screen pixels, time is milliseconds, velocity is px/ms.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, replace

from gallery.engine.config import MotionConfig
from gallery.engine.geometry import clamp, ease_out_cubic, wrap_translate
from gallery.engine.world import World, responsive_scale

logger = logging.getLogger(__name__)


class MotionPhase(str, enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    INERTIAL = "inertial"
    RECENTERING = "recentering"


@dataclass(frozen=True)
class RecenterAnimation:
    start_x: float
    start_y: float
    end_x: float
    end_y: float
    start_time: float
    duration: float

    def progress(self, now: float) -> float:
        if self.duration <= 0:
            return 1.0
        return clamp((now - self.start_time) / self.duration, 0.0, 1.0)


@dataclass
class CameraState:
    """The single mutable camera record."""

    # Where the camera is being driven toward (unwrapped)
    target_x: float = 0.0
    target_y: float = 0.0
    # Smoothed camera position (unwrapped)
    current_x: float = 0.0
    current_y: float = 0.0
    # Glide velocity, px/ms
    velocity_x: float = 0.0
    velocity_y: float = 0.0
    scale: float = 1.0
    viewport_w: float = 0.0
    viewport_h: float = 0.0
    phase: MotionPhase = MotionPhase.IDLE

    # --- Gesture tracking ---
    pointer_id: int | None = None
    last_pointer_x: float = 0.0
    last_pointer_y: float = 0.0
    last_pointer_time: float = 0.0
    moved_distance: float = 0.0
    suppress_click_until: float = float("-inf")

    # --- Frame timing / animation ---
    last_tick_time: float | None = None
    recenter: RecenterAnimation | None = None

    # --- Published to the presentation layer ---
    show_recenter: bool = False

    @property
    def speed(self) -> float:
        return math.hypot(self.velocity_x, self.velocity_y)


@dataclass(frozen=True)
class CameraSnapshot:
    """Read-only view of the camera after a tick."""

    phase: MotionPhase
    target: tuple[float, float]
    current: tuple[float, float]
    display: tuple[float, float]
    velocity: tuple[float, float]
    scale: float
    show_recenter: bool
    time: float = 0.0


def follow_speed(phase: MotionPhase, config: MotionConfig) -> float:
    """Tighter while dragging, a touch looser while coasting."""
    if phase is MotionPhase.DRAGGING:
        return config.follow_dragging
    if phase is MotionPhase.INERTIAL:
        return config.follow_inertial
    return config.follow_idle


def advance(
    state: CameraState,
    dt: float,
    now: float,
    world: World,
    config: MotionConfig,
) -> CameraState:
    """One frame step. Returns a new state; ``state`` is left untouched."""
    s = replace(state)

    anim = s.recenter
    if anim is not None:
        t = anim.progress(now)
        e = ease_out_cubic(t)
        s.target_x = anim.start_x + (anim.end_x - anim.start_x) * e
        s.target_y = anim.start_y + (anim.end_y - anim.start_y) * e
        s.velocity_x = s.velocity_y = 0.0
        if t >= 1:
            s.current_x, s.current_y = s.target_x, s.target_y
            s.recenter = None
            s.phase = MotionPhase.IDLE

    if s.phase is MotionPhase.INERTIAL:
        s.target_x += s.velocity_x * dt
        s.target_y += s.velocity_y * dt
        decay = math.exp(-dt * config.friction)
        s.velocity_x *= decay
        s.velocity_y *= decay
        if s.speed < config.stop_speed:
            s.velocity_x = s.velocity_y = 0.0
            s.phase = MotionPhase.IDLE

    # Time-based follow: frame-rate independent
    alpha = 1 - math.exp(-dt * follow_speed(s.phase, config))
    s.current_x += (s.target_x - s.current_x) * alpha
    s.current_y += (s.target_y - s.current_y) * alpha

    display = world.wrap_offset(s.current_x, s.current_y, s.scale)
    if s.viewport_w > 0 and s.viewport_h > 0:
        dist = world.distance_from_center(display, s.viewport_w, s.viewport_h, s.scale)
        s.show_recenter = dist > config.recenter_threshold_px

    # Invisible rebase: only wrapped values are ever rendered
    if abs(s.current_x) > config.rebase_limit or abs(s.current_y) > config.rebase_limit:
        s.current_x, s.current_y = display
        s.target_x, s.target_y = display

    return s


class MotionController:
    """Owns the camera state; translates pointer gestures into motion."""

    def __init__(
        self,
        world: World,
        viewport_w: float,
        viewport_h: float,
        config: MotionConfig | None = None,
    ) -> None:
        self.world = world
        self.config = config or MotionConfig()
        self.state = CameraState()
        self._apply_viewport(viewport_w, viewport_h, center=True)

    # ── Viewport ──

    def _apply_viewport(self, viewport_w: float, viewport_h: float, center: bool) -> None:
        s = self.state
        s.viewport_w = viewport_w
        s.viewport_h = viewport_h
        s.scale = responsive_scale(viewport_w, viewport_h, self.config)
        tile = self.world.period(s.scale)
        if center:
            x = wrap_translate(viewport_w / 2 - tile / 2, tile)
            y = wrap_translate(viewport_h / 2 - tile / 2, tile)
            s.target_x = s.current_x = x
            s.target_y = s.current_y = y
        else:
            s.current_x = wrap_translate(s.current_x, tile)
            s.current_y = wrap_translate(s.current_y, tile)
            s.target_x = wrap_translate(s.target_x, tile)
            s.target_y = wrap_translate(s.target_y, tile)

    def resize(self, viewport_w: float, viewport_h: float) -> None:
        """New viewport: recompute scale and re-wrap into the new tile period."""
        self._apply_viewport(viewport_w, viewport_h, center=False)

    # ── Pointer gestures ──

    def _set_phase(self, phase: MotionPhase) -> None:
        if self.state.phase is not phase:
            logger.debug("Camera %s -> %s", self.state.phase.value, phase.value)
            self.state.phase = phase

    def pointer_down(
        self,
        pointer_id: int,
        x: float,
        y: float,
        now: float,
        button: int = 0,
        pointer_type: str = "mouse",
    ) -> bool:
        """Start a drag. Returns False when the event is ignored."""
        if pointer_type == "mouse" and button != 0:
            return False
        s = self.state
        s.pointer_id = pointer_id
        s.last_pointer_x, s.last_pointer_y = x, y
        s.last_pointer_time = now
        s.last_tick_time = None
        s.velocity_x = s.velocity_y = 0.0
        s.moved_distance = 0.0
        # Drag always wins over a scripted animation
        s.recenter = None
        self._set_phase(MotionPhase.DRAGGING)
        return True

    def pointer_move(self, pointer_id: int, x: float, y: float, now: float) -> bool:
        s = self.state
        if s.phase is not MotionPhase.DRAGGING or pointer_id != s.pointer_id:
            return False
        dx = x - s.last_pointer_x
        dy = y - s.last_pointer_y
        s.last_pointer_x, s.last_pointer_y = x, y
        s.moved_distance += math.hypot(dx, dy)

        dt = max(self.config.min_move_dt, now - s.last_pointer_time)
        s.last_pointer_time = now

        # 1:1 and unwrapped; wrapping happens at render time only
        s.target_x += dx
        s.target_y += dy

        keep, gain = self.config.velocity_keep, self.config.velocity_gain
        s.velocity_x = s.velocity_x * keep + (dx / dt) * gain
        s.velocity_y = s.velocity_y * keep + (dy / dt) * gain
        return True

    def pointer_up(self, pointer_id: int, now: float) -> bool:
        """End a drag. Returns True if the gesture started an inertial glide."""
        s = self.state
        if s.phase is not MotionPhase.DRAGGING or pointer_id != s.pointer_id:
            return False
        cfg = self.config

        if s.moved_distance > cfg.click_suppress_distance:
            s.suppress_click_until = now + cfg.click_suppress_ms

        speed = s.speed
        if speed > cfg.max_speed:
            k = cfg.max_speed / speed
            s.velocity_x *= k
            s.velocity_y *= k

        glide = s.moved_distance > cfg.inertia_min_distance and speed > cfg.inertia_min_speed
        if not glide:
            s.velocity_x = s.velocity_y = 0.0
        s.pointer_id = None
        self._set_phase(MotionPhase.INERTIAL if glide else MotionPhase.IDLE)
        return glide

    def pointer_cancel(self, pointer_id: int | None = None) -> None:
        """Abort a drag without inertia."""
        s = self.state
        if s.phase is not MotionPhase.DRAGGING:
            return
        if pointer_id is not None and pointer_id != s.pointer_id:
            return
        s.pointer_id = None
        s.velocity_x = s.velocity_y = 0.0
        self._set_phase(MotionPhase.IDLE)

    def lost_capture(self, pointer_id: int | None = None) -> None:
        """Pointer capture lost mid-gesture: same as a cancel."""
        self.pointer_cancel(pointer_id)

    def click_allowed(self, now: float) -> bool:
        """False inside the short window after a real drag."""
        return now >= self.state.suppress_click_until

    # ── Recenter ──

    def recenter(self, now: float) -> None:
        """Animate back to world-center along the shortest wrapped path."""
        s = self.state
        desired = self.world.center_offset(s.viewport_w, s.viewport_h, s.scale)
        (sx, sy), (ex, ey) = self.world.shortest_path(
            (s.current_x, s.current_y), desired, s.scale
        )
        s.current_x = s.target_x = sx
        s.current_y = s.target_y = sy
        s.velocity_x = s.velocity_y = 0.0
        s.pointer_id = None
        s.recenter = RecenterAnimation(
            start_x=sx,
            start_y=sy,
            end_x=ex,
            end_y=ey,
            start_time=now,
            duration=self.config.recenter_duration_ms,
        )
        self._set_phase(MotionPhase.RECENTERING)

    # ── Frame loop ──

    def frame_dt(self, now: float) -> float:
        last = self.state.last_tick_time
        raw = 0.0 if last is None else now - last
        return clamp(raw, self.config.min_frame_dt, self.config.max_frame_dt)

    def tick(self, now: float) -> CameraSnapshot:
        dt = self.frame_dt(now)
        before = self.state.phase
        self.state = advance(self.state, dt, now, self.world, self.config)
        self.state.last_tick_time = now
        if self.state.phase is not before:
            logger.debug("Camera %s -> %s", before.value, self.state.phase.value)
        return self.snapshot(now)

    def display_offset(self) -> tuple[float, float]:
        s = self.state
        return self.world.wrap_offset(s.current_x, s.current_y, s.scale)

    def snapshot(self, now: float = 0.0) -> CameraSnapshot:
        s = self.state
        return CameraSnapshot(
            phase=s.phase,
            target=(s.target_x, s.target_y),
            current=(s.current_x, s.current_y),
            display=self.display_offset(),
            velocity=(s.velocity_x, s.velocity_y),
            scale=s.scale,
            show_recenter=s.show_recenter,
            time=now,
        )
