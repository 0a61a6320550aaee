"""Prompt templates for the AI service."""

from ..models.exercises import Exercise

# Reference names the vision model should prefer
STANDARD_EQUIPMENT_LIST = """
- Free Weights: Barbell, Dumbbells, Kettlebells, EZ Bar, Bench Press, Incline Bench Press, Decline Bench Press, Squat Rack, Power Rack, Smith Machine, Preacher Curl Bench
- Machines: Leg Press, Leg Extension, Leg Curl, Hack Squat, Chest Press Machine, Shoulder Press Machine, Lat Pulldown, Seated Cable Row, Pec Deck / Fly Machine, Assisted Pull-up Machine, Calf Raise Machine, Abdominal Crunch Machine, Hip Abduction/Adduction
- Machines (Extended): Chest Fly Machine, Iso-Lateral Chest Press, Incline Chest Press Machine, Seated Leg Press, Standing Leg Curl, Lying Leg Curl, Glute Kickback Machine, Hip Thrust Machine, Vertical Row Machine, Low Row Machine, High Row Machine, Pullover Machine, Lateral Raise Machine, Rear Delt Fly Machine, Bicep Curl Machine, Tricep Extension Machine, Tricep Dip Machine, Ab Coaster, Torso Rotation Machine, Seated Ab Crunch, Standing Calf Raise Machine, Seated Calf Raise Machine, Smith Squat Machine, V-Squat Machine, Pendulum Squat Machine, Selectorized Multi-Gym
- Cable: Cable Crossover, Functional Trainer
- Cardio: Treadmill, Elliptical, Stationary Bike, Rowing Machine, Stair Climber, Assault Bike, SkiErg
- Bodyweight: Pull-up Bar, Dip Station, Parallel Bars, Roman Chair / Back Extension, Plyometric Box, TRX / Suspension Trainer, Gymnastic Rings
- Other: Medicine Ball, Slam Ball, Battle Ropes, Landmine Attachment, Trap Bar / Hex Bar
"""


def build_scan_prompt() -> str:
    """Prompt asking the vision model to list equipment in the images."""
    return f"""
Task: Identify all gym equipment in the provided images.

Instructions:
1. Provide a unique list of found items.
2. For each item, use the most accurate name from this list if it matches:
{STANDARD_EQUIPMENT_LIST}
3. If no match, provide a clear, descriptive name.
4. CRITICAL: Never use a category name (e.g., 'machines', 'cardio') or a technical field name (e.g., 'confidence', 'name') as the equipment name itself.
5. Consolidate items detected across multiple images into one single list without duplicates.
6. category must be one of: free_weights, machines, cable, cardio, bodyweight, other.

Format Requirement:
Return a JSON object with the key "equipment", which is an array of objects.
Example structure:
{{
  "equipment": [
    {{ "name": "Leg Press", "category": "machines", "confidence": 0.99 }},
    {{ "name": "Dumbbells", "category": "free_weights", "confidence": 0.95 }}
  ]
}}
"""


def format_equipment_constraints(available_exercises: list[Exercise]) -> str:
    """Format equipment constraints for inclusion in prompts."""
    if not available_exercises:
        return "- Only bodyweight exercises are possible"

    names = [ex.name for ex in available_exercises]
    lines = []
    # Show first 30 exercises as examples
    if len(names) > 30:
        lines.append(
            f"- Available exercises include: {', '.join(names[:30])}, and {len(names) - 30} more"
        )
    else:
        lines.append(f"- Available exercises: {', '.join(names)}")
    lines.append("- ONLY recommend exercises from the available exercises list above")
    lines.append("- Do NOT suggest exercises requiring equipment the user doesn't have")
    return "\n".join(lines)


def build_plan_prompt(
    split_type: str,
    goal: str | None,
    experience_level: str | None,
    available_exercises: list[Exercise],
) -> str:
    """Prompt asking for a 7-day plan in the declared response shape."""
    return f"""
Task: Create a 7-day weekly workout plan.

User:
- Split type: {split_type}
- Fitness goal: {goal or "general fitness"}
- Experience level: {experience_level or "unknown"}

Equipment constraints:
{format_equipment_constraints(available_exercises)}

Format Requirement:
Return a JSON object with the key "days": exactly 7 entries, one per day, each with
"dayNumber" (1-7), "dayName", "focus" (comma-separated muscle groups), "isRestDay",
and "exercises" (empty on rest days), where each exercise has "name", "muscleGroup",
"sets" (integer), "reps" (string, ranges like "8-12" allowed) and "notes".
"""
