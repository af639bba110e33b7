import math

import pytest
from pydantic import ValidationError

from pencildraw.api import RunConfig
from pencildraw.config import (
    EdgeConfig,
    FlowConfig,
    LICConfig,
    MainConfig,
    NoiseConfig,
    PipelineConfig,
)


def test_lic_defaults():
    cfg = LICConfig()
    assert cfg.tau == pytest.approx(math.pi / 6)
    assert (cfg.t_disc, cfg.s_disc) == (24, 24)
    assert (cfg.sigma_1, cfg.sigma_2) == (4.0, 2.0)
    assert cfg.stroke_length == 7.0
    assert cfg.jitter_n == 2
    assert cfg.device == "cpu"


def test_field_defaults():
    assert FlowConfig().ksize == 11
    assert EdgeConfig().threshold == 0.75
    assert EdgeConfig().band_divisor == 50.0
    noise = NoiseConfig()
    assert noise.dense_ratio_factor * noise.dense_density == pytest.approx(0.3)
    assert noise.anchor_ratio_factor == 1.2


@pytest.mark.parametrize(
    "factory",
    [
        lambda: LICConfig(t_disc=0),
        lambda: LICConfig(sigma_2=0.0),
        lambda: LICConfig(device="metal"),
        lambda: FlowConfig(ksize=4),
        lambda: PipelineConfig(levels=0),
        lambda: EdgeConfig(threshold=1.5),
    ],
)
def test_invalid_values_are_rejected(factory):
    with pytest.raises(ValidationError):
        factory()


def test_main_config_from_mapping():
    cfg = MainConfig(
        **{
            "project": {"input_path": "in.png", "output_path": "out.png"},
            "pipeline": {"levels": 3, "lic": {"s_disc": 12}},
        }
    )
    assert cfg.pipeline.levels == 3
    assert cfg.pipeline.lic.s_disc == 12
    assert cfg.pipeline.lic.t_disc == 24
    assert cfg.project.anchors_path is None


def test_run_config_translation():
    cfg = RunConfig(levels=2, seed=7, t_disc=5, flow_ksize=7, verbose=False)
    pipeline_cfg = cfg.to_pipeline_config()
    assert pipeline_cfg.levels == 2
    assert pipeline_cfg.seed == 7
    assert pipeline_cfg.lic.t_disc == 5
    assert pipeline_cfg.flow.ksize == 7
    assert pipeline_cfg.verbose is False
