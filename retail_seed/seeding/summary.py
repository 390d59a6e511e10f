"""
Seed Summary

Tallies rows created vs. already present per entity and renders the
human-readable report printed at the end of a run.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

# Report order and labels
ENTITY_LABELS: Tuple[Tuple[str, str], ...] = (
    ("users", "users"),
    ("stores", "store location(s)"),
    ("user_stores", "user-store assignments"),
    ("categories", "product categories"),
    ("suppliers", "suppliers"),
    ("products", "products"),
    ("inventory", "inventory records"),
    ("customers", "customers"),
    ("customer_preferences", "customer preference records"),
    ("leads", "leads"),
)


@dataclass
class EntityTally:
    created: int = 0
    existing: int = 0

    @property
    def total(self) -> int:
        return self.created + self.existing


@dataclass
class SeedSummary:
    """Outcome of one seeding run"""
    profile: str
    tallies: Dict[str, EntityTally] = field(default_factory=dict)
    skipped_phases: List[str] = field(default_factory=list)
    completed_phases: List[str] = field(default_factory=list)
    credentials: Tuple[Tuple[str, str, str], ...] = ()

    def record(self, entity: str, created: bool) -> None:
        tally = self.tallies.setdefault(entity, EntityTally())
        if created:
            tally.created += 1
        else:
            tally.existing += 1

    def created(self, entity: str) -> int:
        tally = self.tallies.get(entity)
        return tally.created if tally else 0

    def existing(self, entity: str) -> int:
        tally = self.tallies.get(entity)
        return tally.existing if tally else 0

    @property
    def total_created(self) -> int:
        return sum(t.created for t in self.tallies.values())

    def render(self, credentials: Optional[bool] = None) -> str:
        """
        Render the end-of-run report.

        Args:
            credentials: Include login credentials; defaults to whether any were attached
        """
        lines = [f"Database seeding completed (profile: {self.profile})", "", "Summary:"]
        for entity, label in ENTITY_LABELS:
            tally = self.tallies.get(entity)
            if tally is None:
                continue
            lines.append(f"- Created {tally.created} {label} ({tally.existing} already present)")
        if self.skipped_phases:
            lines.append(f"- Skipped phases: {', '.join(self.skipped_phases)}")

        show = bool(self.credentials) if credentials is None else credentials
        if show and self.credentials:
            lines.extend(["", "Login credentials:"])
            for role, username, password in self.credentials:
                lines.append(f"- {role}: {username} / {password}")
        return "\n".join(lines)
