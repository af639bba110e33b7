from typing import Optional

from pydantic import BaseModel, Field, validator

from . import consts


class LICConfig(BaseModel):
    tau: float = Field(consts.TAU, gt=0.0)
    t_disc: int = Field(consts.T_DISC, ge=1)
    s_disc: int = Field(consts.S_DISC, ge=1)
    sigma_1: float = Field(consts.SIGMA_1, gt=0.0)  # along the flow (angle axis)
    sigma_2: float = Field(consts.SIGMA_2, gt=0.0)  # tone similarity
    stroke_length: float = Field(consts.STROKE_LENGTH, gt=0.0)
    jitter_n: int = Field(consts.JITTER_N, ge=1)
    device: str = "cpu"
    num_workers: Optional[int] = Field(None, ge=1)  # None -> cpu_count() // torch threads
    rows_per_block: int = Field(8, ge=1)

    @validator("device")
    def device_must_be_valid(cls, v):
        if v != "cpu" and not v.startswith("cuda"):
            raise ValueError("device must be 'cpu' or 'cuda[:index]'")
        return v


class BilateralConfig(BaseModel):
    diameter: int = Field(consts.BILATERAL_DIAMETER, ge=1)
    sigma_color: float = Field(consts.BILATERAL_SIGMA_COLOR, gt=0.0)
    sigma_space: float = Field(consts.BILATERAL_SIGMA_SPACE, gt=0.0)


class EdgeConfig(BaseModel):
    # Difference-of-Gaussians parameters
    sigma: float = Field(1.0, gt=0.0)
    k: float = Field(1.6, gt=1.0)
    tau: float = Field(0.98, ge=0.0, le=1.0)
    phi: float = Field(10.0, gt=0.0)
    # Orientation quantization
    threshold: float = Field(consts.EDGE_THRESHOLD, ge=0.0, le=1.0)
    band_divisor: float = Field(consts.EDGE_BAND_DIVISOR, gt=0.0)


class FlowConfig(BaseModel):
    ksize: int = consts.FLOW_KSIZE

    @validator("ksize")
    def ksize_must_be_odd(cls, v):
        if v < 1 or v % 2 == 0:
            raise ValueError("ksize must be a positive odd integer")
        return v


class NoiseConfig(BaseModel):
    dense_density: float = Field(consts.DENSE_NOISE_DENSITY, gt=0.0, le=1.0)
    dense_budget: float = Field(consts.DENSE_NOISE_BUDGET, gt=0.0)
    dense_ratio_factor: float = Field(consts.DENSE_RATIO_FACTOR, gt=0.0)
    anchor_ratio_factor: float = Field(consts.ANCHOR_RATIO_FACTOR, gt=0.0)


class PipelineConfig(BaseModel):
    levels: int = Field(1, ge=1)
    seed: int = Field(0, ge=0)
    verbose: bool = True
    benchmark: bool = False
    lic: LICConfig = Field(default_factory=LICConfig)
    bilateral: BilateralConfig = Field(default_factory=BilateralConfig)
    edge: EdgeConfig = Field(default_factory=EdgeConfig)
    flow: FlowConfig = Field(default_factory=FlowConfig)
    noise: NoiseConfig = Field(default_factory=NoiseConfig)


class ProjectConfig(BaseModel):
    name: str = "DefaultProject"
    # --- REQUIRED PATHS ---
    input_path: str
    output_path: str
    # --- OPTIONAL PATHS ---
    anchors_path: Optional[str] = None


class MainConfig(BaseModel):
    project: ProjectConfig
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)

