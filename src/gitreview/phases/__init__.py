"""Phases of a gitreview session."""

from gitreview.phases.selection import BranchSelector
from gitreview.phases.preflight import Preflight
from gitreview.phases.materialize import Materializer
from gitreview.phases.finalize import Finalizer

__all__ = ["BranchSelector", "Preflight", "Materializer", "Finalizer"]
