"""
Hierarchy keys for the Program -> Week -> Workout -> Exercise -> Set tree.

Every non-root document carries its full ancestor id chain. DocumentRef makes
that chain an explicit composite key: the ids from the Program down to the
addressed node, with the entity kind implied by the depth.

Usage:
    week = DocumentRef.week("program-1", "week-1")
    workout = week.child(EntityKind.WORKOUT)      # fresh UUID identity
    workout.ancestor_fields()
    # {"program_id": "program-1", "week_id": "week-1"}
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple
from uuid import uuid4

from core.constants import (
    EXERCISES_TABLE,
    PROGRAMS_TABLE,
    SETS_TABLE,
    WEEKS_TABLE,
    WORKOUTS_TABLE,
)


class EntityKind(str, Enum):
    """Entity kinds, ordered from root to leaf."""

    PROGRAM = "program"
    WEEK = "week"
    WORKOUT = "workout"
    EXERCISE = "exercise"
    SET = "set"

    @property
    def depth(self) -> int:
        return KIND_ORDER.index(self)

    @property
    def table(self) -> str:
        return KIND_TABLES[self]

    @property
    def id_field(self) -> str:
        """Field that descendants use to reference an entity of this kind."""
        return f"{self.value}_id"

    @property
    def order_field(self) -> str:
        return KIND_ORDER_FIELDS[self]

    @property
    def child_kind(self) -> Optional["EntityKind"]:
        if self is EntityKind.SET:
            return None
        return KIND_ORDER[self.depth + 1]


KIND_ORDER: Tuple[EntityKind, ...] = (
    EntityKind.PROGRAM,
    EntityKind.WEEK,
    EntityKind.WORKOUT,
    EntityKind.EXERCISE,
    EntityKind.SET,
)

KIND_TABLES: Dict[EntityKind, str] = {
    EntityKind.PROGRAM: PROGRAMS_TABLE,
    EntityKind.WEEK: WEEKS_TABLE,
    EntityKind.WORKOUT: WORKOUTS_TABLE,
    EntityKind.EXERCISE: EXERCISES_TABLE,
    EntityKind.SET: SETS_TABLE,
}

KIND_ORDER_FIELDS: Dict[EntityKind, str] = {
    EntityKind.PROGRAM: "created_at",
    EntityKind.WEEK: "order_index",
    EntityKind.WORKOUT: "order_index",
    EntityKind.EXERCISE: "order_index",
    EntityKind.SET: "set_number",
}

# Kinds that can be the root of a count or cascade delete
DELETE_SCOPE_KINDS = frozenset(
    {EntityKind.WEEK, EntityKind.WORKOUT, EntityKind.EXERCISE}
)

OWNER_FIELD = "user_id"
IDENTITY_FIELD = "id"
TIMESTAMP_FIELDS = frozenset({"created_at", "updated_at", "checked_at"})
ANCESTOR_FIELDS = frozenset(kind.id_field for kind in KIND_ORDER[:-1])


@dataclass(frozen=True)
class DocumentRef:
    """Composite key of a document: ids from the Program down to the node."""

    path: Tuple[str, ...]

    def __post_init__(self):
        if not 1 <= len(self.path) <= len(KIND_ORDER):
            raise ValueError(f"Invalid document path length: {len(self.path)}")
        if any(not segment for segment in self.path):
            raise ValueError(f"Document path contains an empty id: {self.path}")

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def program(cls, program_id: str) -> "DocumentRef":
        return cls((program_id,))

    @classmethod
    def week(cls, program_id: str, week_id: str) -> "DocumentRef":
        return cls((program_id, week_id))

    @classmethod
    def workout(cls, program_id: str, week_id: str, workout_id: str) -> "DocumentRef":
        return cls((program_id, week_id, workout_id))

    @classmethod
    def exercise(
        cls,
        program_id: str,
        week_id: str,
        workout_id: str,
        exercise_id: str,
    ) -> "DocumentRef":
        return cls((program_id, week_id, workout_id, exercise_id))

    @classmethod
    def exercise_set(
        cls,
        program_id: str,
        week_id: str,
        workout_id: str,
        exercise_id: str,
        set_id: str,
    ) -> "DocumentRef":
        return cls((program_id, week_id, workout_id, exercise_id, set_id))

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    @property
    def kind(self) -> EntityKind:
        return KIND_ORDER[len(self.path) - 1]

    @property
    def id(self) -> str:
        return self.path[-1]

    @property
    def program_id(self) -> str:
        return self.path[0]

    @property
    def parent(self) -> Optional["DocumentRef"]:
        if len(self.path) == 1:
            return None
        return DocumentRef(self.path[:-1])

    def child(self, kind: EntityKind, child_id: Optional[str] = None) -> "DocumentRef":
        """
        Address a child of this document.

        Args:
            kind: Kind of the child; must be the next level down
            child_id: Existing id, or None to allocate a new identity

        Returns:
            DocumentRef of the child
        """
        if kind is not self.kind.child_kind:
            raise ValueError(f"A {self.kind.value} cannot contain a {kind.value}")
        return DocumentRef(self.path + (child_id or str(uuid4()),))

    def ancestor_fields(self) -> Dict[str, str]:
        """
        Ancestor-id fields a document at this key stores.

        Returns:
            Mapping such as {"program_id": ..., "week_id": ...}
        """
        return {
            KIND_ORDER[depth].id_field: ancestor_id
            for depth, ancestor_id in enumerate(self.path[:-1])
        }

    def key_fields(self) -> Dict[str, str]:
        """Ancestor fields plus this document's own id."""
        return {**self.ancestor_fields(), IDENTITY_FIELD: self.id}

    def __str__(self) -> str:
        return "/".join(
            f"{KIND_ORDER[depth].value}:{segment}"
            for depth, segment in enumerate(self.path)
        )
