"""Engine configuration — layout solver and motion controller tuning."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SizeTier:
    """One weighted size class. Width/height ranges are in world units."""

    name: str
    weight: float
    min_w: float
    max_w: float
    min_h: float
    max_h: float


DEFAULT_TIERS: tuple[SizeTier, ...] = (
    SizeTier("large", 0.08, 520, 940, 380, 720),
    SizeTier("medium", 0.27, 300, 620, 220, 480),
    SizeTier("small", 0.65, 170, 410, 130, 330),
)

DEFAULT_SHADES: tuple[str, ...] = (
    "bg-red-950",
    "bg-slate-900",
    "bg-neutral-900",
    "bg-stone-500",
    "bg-blue-950",
)


@dataclass
class LayoutConfig:
    """Controls the placement solver."""

    seed: int = 1337

    # Size mix: mostly small, some medium, a few large
    tiers: tuple[SizeTier, ...] = DEFAULT_TIERS
    default_aspect_ratio: float = 4 / 3

    # World-space breathing room along every edge
    margin: float = 320.0

    # Caption strip below each tile
    caption_gap: float = 10.0
    caption_height: float = 22.0

    # Overlap rules
    max_cover_ratio: float = 0.10  # 10% of either tile

    # Attempt budgets
    max_attempts: int = 6000
    shrink_steps: tuple[float, ...] = (1.0, 0.88, 0.78)
    min_shrunk_w: float = 120.0
    min_shrunk_h: float = 90.0
    fallback_w: float = 180.0
    fallback_h: float = 140.0
    fallback_attempt_factor: int = 2

    # Ring sampler around world center
    ring_probability: float = 0.82
    ring_min_radius: float = 380.0
    ring_max_radius: float = 1600.0
    ring_bias_exponent: float = 2.0  # >1 pulls samples toward the inner edge

    # Center title box
    exclusion_w: float = 1300.0
    exclusion_h: float = 440.0

    # Cosmetics
    max_rotation_deg: float = 5.0
    shades: tuple[str, ...] = DEFAULT_SHADES

    @property
    def caption_strip(self) -> float:
        return self.caption_gap + self.caption_height


@dataclass
class PlaceholderConfig:
    """Skeleton layout shown while the photo inventory loads."""

    seed: int = 777
    count: int = 24
    margin: float = 360.0
    min_w: float = 160.0
    span_w: float = 260.0
    min_h: float = 130.0
    span_h: float = 210.0


@dataclass
class MotionConfig:
    """Controls the camera / inertia model. Times in ms, speeds in screen px/ms."""

    # Frame delta clamp
    min_frame_dt: float = 1.0
    max_frame_dt: float = 40.0

    # Drag velocity estimate
    min_move_dt: float = 4.0
    velocity_keep: float = 0.82
    velocity_gain: float = 0.18

    # Release -> inertia gate
    max_speed: float = 2.2  # ~2200 px/s
    inertia_min_distance: float = 10.0
    inertia_min_speed: float = 0.04

    # Glide
    friction: float = 0.0105
    stop_speed: float = 0.02

    # Follow smoothing per phase
    follow_dragging: float = 0.12
    follow_inertial: float = 0.09
    follow_idle: float = 0.14

    # Recenter animation
    recenter_duration_ms: float = 650.0

    # Tap vs drag
    click_suppress_distance: float = 6.0
    click_suppress_ms: float = 140.0

    # "Back to center" affordance
    recenter_threshold_px: float = 240.0

    # Re-cull only after sub-pixel movement is exceeded
    republish_epsilon: float = 0.5

    # Keep float magnitudes bounded over long sessions
    rebase_limit: float = 10_000_000.0

    # Responsive (non-user) scale
    scale_base: float = 900.0
    scale_min: float = 0.72
    scale_max: float = 1.0


@dataclass
class CullConfig:
    buffer_px: float = 500.0
    tile_range: tuple[int, ...] = field(default_factory=lambda: (-1, 0, 1))
