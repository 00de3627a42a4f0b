"""
Shared constants.

This module has no dependencies on models or services to avoid circular imports.
"""

# Maximum number of operations the store accepts in a single atomic write batch
STORE_BATCH_HARD_LIMIT = 500

# Operations grouped into one batch by the cascade engine. Kept below the hard
# limit so the store can inject its own writes into the same transaction.
DEFAULT_BATCH_BUDGET = 450

# Suffix appended to duplicated names: "<base> Copy <N>"
COPY_SUFFIX_WORD = "Copy"

# Table backing each entity kind
PROGRAMS_TABLE = "training_programs"
WEEKS_TABLE = "program_weeks"
WORKOUTS_TABLE = "program_workouts"
EXERCISES_TABLE = "workout_exercises"
SETS_TABLE = "exercise_sets"
DUPLICATION_LOGS_TABLE = "duplication_logs"
