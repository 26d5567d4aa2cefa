"""Binding synthesis from the interface model."""

from .synthesizer import SynthesisOptions, Synthesizer, sort_interfaces, synthesize

__all__ = ["SynthesisOptions", "Synthesizer", "sort_interfaces", "synthesize"]
