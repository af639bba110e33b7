from .edge_engine import EdgeEngine, compute_edge_map
from .flow_engine import FlowEngine, compute_flow_field
from .lic_engine import LICEngine

__all__ = [
    "EdgeEngine",
    "FlowEngine",
    "LICEngine",
    "compute_edge_map",
    "compute_flow_field",
]
