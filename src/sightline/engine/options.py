"""Engine configuration sent during the UCI handshake."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class EngineOptions:
    """Fixed set of UCI options applied once after ``uci``."""

    hash_size_mb: int = 32
    thread_count: int = 1
    skill_level: int = 20
    multi_pv_count: int = 1
    move_overhead_ms: int = 100

    def uci_options(self) -> tuple[tuple[str, int], ...]:
        """(UCI option name, value) pairs in handshake order."""
        return (
            ("Hash", self.hash_size_mb),
            ("Threads", self.thread_count),
            ("Skill Level", self.skill_level),
            ("MultiPV", self.multi_pv_count),
            ("Move Overhead", self.move_overhead_ms),
        )
