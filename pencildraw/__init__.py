from .api import PencilDrawing, RunConfig, render_pencil_drawing, render_pencil_drawing_lod
from .config import (
    BilateralConfig,
    EdgeConfig,
    FlowConfig,
    LICConfig,
    MainConfig,
    NoiseConfig,
    PipelineConfig,
    ProjectConfig,
)
from .engines import EdgeEngine, FlowEngine, LICEngine, compute_edge_map, compute_flow_field
from .noise import compose_noise, dense_noise
from .orientation import edge_distance_field, quantize_orientation
from .pipeline import PencilPipeline
from .utils.image_utils import bilateral_smooth, resize_image, to_float_image, to_gray

__all__ = [
    # High-level API
    "render_pencil_drawing",
    "render_pencil_drawing_lod",
    "PencilDrawing",
    "RunConfig",
    "PencilPipeline",
    # Configuration
    "PipelineConfig",
    "LICConfig",
    "BilateralConfig",
    "EdgeConfig",
    "FlowConfig",
    "NoiseConfig",
    "ProjectConfig",
    "MainConfig",
    # Components
    "quantize_orientation",
    "edge_distance_field",
    "compose_noise",
    "dense_noise",
    "LICEngine",
    "EdgeEngine",
    "FlowEngine",
    # Collaborators
    "compute_edge_map",
    "compute_flow_field",
    "bilateral_smooth",
    "resize_image",
    "to_float_image",
    "to_gray",
]
