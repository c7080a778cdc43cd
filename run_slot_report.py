"""
Main Execution Script for the lesson slot planner.
Loads (or generates) a teacher's availability and agreements, computes the
slot grid for a lesson type over a period and prints / exports it.
"""

import os
import sys
import argparse
import logging
import json
from datetime import date, timedelta

# Add current directory to path so imports work
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from pydantic import ValidationError

from lessons import SlotWithStatus
from occupancy import InMemoryRepository, LessonTypeNotFound, SlotFinder, agreement_occurrences, day_name
from occupancy.display import find_slot, group_slots_by_day, slot_label

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger("Main")

# --- CONFIGURATION ---
CACHE_FILENAME = "lesson_data.json"
USE_CACHE = True  # Set to False to force new AI generation
API_KEY = os.environ.get("GOOGLE_API_KEY")
DEFAULT_PERIOD_DAYS = 28
# ---------------------


def load_repository(filename: str, allow_generate: bool = not USE_CACHE):
    """
    Load the JSON data file; fall back to the Gemini generator when the file
    is missing and generation is allowed.
    """
    try:
        return InMemoryRepository.from_json(filename)
    except (FileNotFoundError, json.JSONDecodeError):
        logger.warning(f"Data file {filename} not found or invalid.")
    except ValidationError as e:
        logger.error(f"Data file {filename} holds invalid records: {e}")
        return None

    if not (allow_generate and API_KEY):
        return None

    from seeding import DataGenerator

    generator = DataGenerator(api_key=API_KEY)
    data, cost = generator.generate_teacher_data(start_date=date.today())
    logger.info(f"Total Estimated LLM Cost: ${cost:.4f}")

    repo = InMemoryRepository.from_dict(data)
    repo.to_json(filename)
    return repo


def build_report(slots, period_start: date, period_end: date, selected=None, current_dates=None) -> dict:
    """Serializes the slot grid into the JSON document the booking UI reads."""
    return {
        "period": {"start": period_start.isoformat(), "end": period_end.isoformat()},
        "slots": [s.model_dump(mode='json', by_alias=True) for s in slots],
        "days": {
            day_name(day): [s.start_time for s in day_slots]
            for day, day_slots in group_slots_by_day(slots).items()
        },
        "selected": selected.model_dump(mode='json', by_alias=True) if selected else None,
        "current_dates": [d.isoformat() for d in current_dates or []],
    }


def print_grid(slots, selected: SlotWithStatus = None) -> None:
    if not slots:
        print("No slots available in this period.")
        return

    for day, day_slots in group_slots_by_day(slots).items():
        print(f"\n{day_name(day)}")
        for slot in day_slots:
            marker = "*" if selected is not None and slot == selected else " "
            print(f" {marker} {slot.start_time}-{slot.end_time}  {slot_label(slot)}")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show which lesson slots of a teacher are free in a period.")
    parser.add_argument("--data", default=CACHE_FILENAME, help="JSON data file")
    parser.add_argument("--teacher", help="Teacher id (defaults to the first teacher in the data)")
    parser.add_argument("--lesson-type", required=True, help="Lesson type id being booked")
    parser.add_argument("--start", type=date.fromisoformat, default=date.today(), help="Period start (YYYY-MM-DD)")
    parser.add_argument("--end", type=date.fromisoformat, help="Period end (YYYY-MM-DD)")
    parser.add_argument("--exclude-agreement", help="Agreement being edited; its own slot is not counted")
    parser.add_argument("--generate", action="store_true", help="Generate demo data with Gemini if the file is missing")
    parser.add_argument("--export", help="Write the slot grid as JSON to this file")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    period_start = args.start
    period_end = args.end or period_start + timedelta(days=DEFAULT_PERIOD_DAYS - 1)

    repo = load_repository(args.data, allow_generate=args.generate or not USE_CACHE)
    if repo is None:
        logger.error("No data available. Exiting.")
        return 1

    teacher_id = args.teacher
    if teacher_id is None:
        teachers = repo.teacher_ids()
        if not teachers:
            logger.error("Data file holds no teachers. Exiting.")
            return 1
        teacher_id = teachers[0]

    finder = SlotFinder(repo)
    try:
        slots = finder.find_slots(
            teacher_id, args.lesson_type, period_start, period_end,
            exclude_agreement_id=args.exclude_agreement,
        )
    except (LessonTypeNotFound, ValueError) as e:
        logger.error(str(e))
        return 2

    # Edit mode: highlight the slot the agreement currently sits in and list its lessons
    selected = None
    current_dates = []
    if args.exclude_agreement:
        current = next(
            (a for a in repo.get_agreements(teacher_id) if a.id == args.exclude_agreement), None
        )
        if current is not None:
            selected = find_slot(slots, current.day_of_week, current.start_time)
            lesson_type = repo.get_lesson_type(current.lesson_type_id)
            current_dates = agreement_occurrences(
                current.to_slot_agreement(lesson_type), period_start, period_end
            )

    print(f"Slots for {teacher_id} from {period_start} to {period_end}:")
    print_grid(slots, selected)
    if current_dates:
        print(f"\nLessons of {args.exclude_agreement}: {', '.join(d.isoformat() for d in current_dates)}")

    if args.export:
        with open(args.export, 'w') as f:
            json.dump(build_report(slots, period_start, period_end, selected, current_dates), f, indent=2)
        logger.info(f"Exported slot grid to {args.export}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
