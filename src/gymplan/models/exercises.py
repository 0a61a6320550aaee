"""Exercise definitions and the seed exercise library."""

from dataclasses import dataclass, field
from enum import Enum

from .equipment import Equipment


class ExerciseCategory(str, Enum):
    """How an exercise is classified in the catalog."""

    COMPOUND = "compound"
    ISOLATION = "isolation"
    MACHINE = "machine"
    BODYWEIGHT = "bodyweight"
    CARDIO = "cardio"
    AI_GENERATED = "ai_generated"


class Difficulty(str, Enum):
    """Exercise difficulty."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass
class ExerciseEquipment:
    """Equipment an exercise uses; primary equipment is mandatory."""

    equipment_id: str
    is_primary: bool = True
    equipment: Equipment | None = None

    def to_dict(self) -> dict:
        data = {"equipmentId": self.equipment_id, "isPrimary": self.is_primary}
        if self.equipment is not None:
            data["equipment"] = self.equipment.to_dict()
        return data


@dataclass
class Exercise:
    """Represents an exercise with metadata."""

    name: str
    muscle_group: str  # free text, e.g. "Chest, Triceps"
    category: str = ExerciseCategory.COMPOUND.value
    difficulty: str = Difficulty.BEGINNER.value
    equipment: list[ExerciseEquipment] = field(default_factory=list)
    id: str | None = None

    @property
    def primary_equipment_ids(self) -> set[str]:
        """IDs of the equipment this exercise cannot be done without."""
        return {eq.equipment_id for eq in self.equipment if eq.is_primary}

    @property
    def is_bodyweight(self) -> bool:
        return not self.primary_equipment_ids

    def is_available_with(self, equipment_ids: set[str]) -> bool:
        """Whether every primary equipment piece is in `equipment_ids`."""
        return self.primary_equipment_ids <= equipment_ids

    def targets(self, muscle_group: str) -> bool:
        """Case-insensitive substring match against the muscle group text."""
        return muscle_group.lower() in self.muscle_group.lower()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "muscleGroup": self.muscle_group,
            "category": self.category,
            "difficulty": self.difficulty,
        }


@dataclass
class SeedExercise:
    """Catalog entry referencing equipment by name, resolved at seed time."""

    name: str
    muscle_group: str
    category: ExerciseCategory
    difficulty: Difficulty
    equipment_names: list[str] = field(default_factory=list)


SEED_EXERCISES: list[SeedExercise] = [
    # Legs
    SeedExercise(
        name="Barbell Squat",
        muscle_group="Legs, Quads, Glutes",
        category=ExerciseCategory.COMPOUND,
        difficulty=Difficulty.INTERMEDIATE,
        equipment_names=["Barbell", "Squat Rack"],
    ),
    SeedExercise(
        name="Leg Press",
        muscle_group="Legs, Quads",
        category=ExerciseCategory.MACHINE,
        difficulty=Difficulty.BEGINNER,
        equipment_names=["Leg Press"],
    ),
    SeedExercise(
        name="Leg Curl",
        muscle_group="Legs, Hamstrings",
        category=ExerciseCategory.MACHINE,
        difficulty=Difficulty.BEGINNER,
        equipment_names=["Leg Curl"],
    ),
    SeedExercise(
        name="Romanian Deadlift",
        muscle_group="Hamstrings, Glutes, Back",
        category=ExerciseCategory.COMPOUND,
        difficulty=Difficulty.INTERMEDIATE,
        equipment_names=["Barbell"],
    ),
    SeedExercise(
        name="Bodyweight Squat",
        muscle_group="Legs, Quads, Glutes",
        category=ExerciseCategory.BODYWEIGHT,
        difficulty=Difficulty.BEGINNER,
    ),
    SeedExercise(
        name="Walking Lunge",
        muscle_group="Legs, Quads, Glutes, Hamstrings",
        category=ExerciseCategory.BODYWEIGHT,
        difficulty=Difficulty.BEGINNER,
    ),
    SeedExercise(
        name="Glute Bridge",
        muscle_group="Glutes, Hamstrings",
        category=ExerciseCategory.BODYWEIGHT,
        difficulty=Difficulty.BEGINNER,
    ),
    SeedExercise(
        name="Calf Raise",
        muscle_group="Calves",
        category=ExerciseCategory.BODYWEIGHT,
        difficulty=Difficulty.BEGINNER,
    ),
    # Chest
    SeedExercise(
        name="Bench Press",
        muscle_group="Chest, Triceps, Shoulders",
        category=ExerciseCategory.COMPOUND,
        difficulty=Difficulty.INTERMEDIATE,
        equipment_names=["Barbell", "Bench Press"],
    ),
    SeedExercise(
        name="Cable Fly",
        muscle_group="Chest",
        category=ExerciseCategory.ISOLATION,
        difficulty=Difficulty.INTERMEDIATE,
        equipment_names=["Cable Machine"],
    ),
    SeedExercise(
        name="Push-up",
        muscle_group="Chest, Triceps",
        category=ExerciseCategory.BODYWEIGHT,
        difficulty=Difficulty.BEGINNER,
    ),
    # Back
    SeedExercise(
        name="Pull-up",
        muscle_group="Back, Biceps",
        category=ExerciseCategory.BODYWEIGHT,
        difficulty=Difficulty.INTERMEDIATE,
        equipment_names=["Pull-up Bar"],
    ),
    SeedExercise(
        name="Lat Pulldown",
        muscle_group="Back, Biceps",
        category=ExerciseCategory.MACHINE,
        difficulty=Difficulty.BEGINNER,
        equipment_names=["Lat Pulldown"],
    ),
    SeedExercise(
        name="Dumbbell Row",
        muscle_group="Back, Biceps, Traps",
        category=ExerciseCategory.COMPOUND,
        difficulty=Difficulty.BEGINNER,
        equipment_names=["Dumbbells"],
    ),
    SeedExercise(
        name="Superman Hold",
        muscle_group="Back, Core",
        category=ExerciseCategory.BODYWEIGHT,
        difficulty=Difficulty.BEGINNER,
    ),
    # Shoulders & arms
    SeedExercise(
        name="Dumbbell Shoulder Press",
        muscle_group="Shoulders, Triceps",
        category=ExerciseCategory.COMPOUND,
        difficulty=Difficulty.BEGINNER,
        equipment_names=["Dumbbells"],
    ),
    SeedExercise(
        name="Pike Push-up",
        muscle_group="Shoulders, Triceps",
        category=ExerciseCategory.BODYWEIGHT,
        difficulty=Difficulty.INTERMEDIATE,
    ),
    SeedExercise(
        name="Dumbbell Curl",
        muscle_group="Biceps, Arms",
        category=ExerciseCategory.ISOLATION,
        difficulty=Difficulty.BEGINNER,
        equipment_names=["Dumbbells"],
    ),
    SeedExercise(
        name="Bench Dip",
        muscle_group="Triceps, Arms",
        category=ExerciseCategory.BODYWEIGHT,
        difficulty=Difficulty.BEGINNER,
    ),
    SeedExercise(
        name="Dumbbell Shrug",
        muscle_group="Traps",
        category=ExerciseCategory.ISOLATION,
        difficulty=Difficulty.BEGINNER,
        equipment_names=["Dumbbells"],
    ),
    # Core
    SeedExercise(
        name="Plank",
        muscle_group="Core",
        category=ExerciseCategory.BODYWEIGHT,
        difficulty=Difficulty.BEGINNER,
    ),
    SeedExercise(
        name="Hanging Leg Raise",
        muscle_group="Core",
        category=ExerciseCategory.BODYWEIGHT,
        difficulty=Difficulty.ADVANCED,
        equipment_names=["Pull-up Bar"],
    ),
]
