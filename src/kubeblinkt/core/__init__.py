"""Core reconciliation: registry, render pass and controller."""

from .controller import Controller
from .reconciler import Reconciler, RenderReport
from .registry import ResourceRegistry

__all__ = [
    "Controller",
    "Reconciler",
    "RenderReport",
    "ResourceRegistry",
]
