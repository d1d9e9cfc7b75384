"""Consensus, debate, and orchestration."""

from orchestra.analysis.consensus import ConsensusEngine
from orchestra.analysis.debate import DebateCoordinator
from orchestra.analysis.orchestrator import Orchestra

__all__ = ["ConsensusEngine", "DebateCoordinator", "Orchestra"]
