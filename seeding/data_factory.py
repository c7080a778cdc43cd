"""
LLM-powered demo data generator for the lesson slot planner.
STRATEGY: one request per record category, strong schema prompts, robust parsing,
every item validated by the pydantic models before it is kept.
"""

import os
import json
import logging
import re
import google.generativeai as genai
from typing import List, Tuple, Any, Type
from datetime import date
from pydantic import ValidationError, BaseModel

from lessons import AvailabilitySlot, LessonAgreement, LessonType, TeacherAvailability
from occupancy.constants import AVAILABILITY_START_HOUR, AVAILABILITY_END_HOUR, availability_grid_times

logger = logging.getLogger(__name__)

MODEL_NAME = "gemini-2.5-flash"


class DataGenerator:
    def __init__(self, api_key: str | None = None):
        self.api_key = api_key or os.environ.get("GOOGLE_API_KEY")
        if not self.api_key:
            raise ValueError("GOOGLE_API_KEY not found. Please set it in environment.")

        genai.configure(api_key=self.api_key)
        self.model = genai.GenerativeModel(MODEL_NAME)
        self.total_cost = 0.0

    def _estimate_cost(self, prompt_tokens: int, response_tokens: int) -> float:
        return (prompt_tokens * 0.075 + response_tokens * 0.30) / 1_000_000

    @staticmethod
    def _robust_parse_json(raw_text: str) -> List[Any]:
        """
        Handles Markdown stripping and shape normalization.
        Always returns a list of dicts (possibly empty).
        """
        if not raw_text:
            return []

        # 1. Clean Markdown Code Blocks
        clean_text = re.sub(r"```json\s*|\s*```", "", raw_text).strip()

        try:
            data = json.loads(clean_text)
        except json.JSONDecodeError:
            # Fallback: try to extract the main list
            match = re.search(r'(\[.*\])', clean_text, re.DOTALL)
            if not match:
                return []
            try:
                data = json.loads(match.group(1))
            except json.JSONDecodeError:
                return []

        # 2. Normalize Data Shape
        if isinstance(data, list):
            return [item for item in data if isinstance(item, dict)]
        if isinstance(data, dict):
            for key in ['availability', 'slots', 'lesson_types', 'agreements', 'result']:
                if key in data and isinstance(data[key], list):
                    return [item for item in data[key] if isinstance(item, dict)]
            return [data]
        return []

    @staticmethod
    def _validate_items(data_list: List[dict], model_class: Type[BaseModel]) -> List[Any]:
        valid_items = []
        for i, item in enumerate(data_list):
            try:
                valid_items.append(model_class(**item))
            except ValidationError as e:
                logger.warning(f"Skipping invalid item {i} in batch: {e.json()}")
        return valid_items

    def _fetch_big_batch(self, prompt: str, model_class: Type[BaseModel]) -> Tuple[List[Any], float]:
        """
        Executes a generation request with robust parsing.
        """
        try:
            generation_config = genai.GenerationConfig(
                response_mime_type="application/json",
                max_output_tokens=16000,
                temperature=0.7
            )
            response = self.model.generate_content(prompt, generation_config=generation_config)

            cost = 0.0
            if hasattr(response, 'usage_metadata'):
                p_tok = response.usage_metadata.prompt_token_count
                r_tok = response.usage_metadata.candidates_token_count
                cost = self._estimate_cost(p_tok, r_tok)
            self.total_cost += cost

            return self._validate_items(self._robust_parse_json(response.text), model_class), cost

        except Exception as e:
            logger.error(f"Batch Generation Failed: {e}")
            return [], 0.0

    @staticmethod
    def _on_grid(slot: AvailabilitySlot) -> bool:
        grid = availability_grid_times()
        return slot.start_time[:5] in grid and slot.end_time[:5] in grid

    def generate_availability(self, teacher_id: str, window_count: int = 6) -> Tuple[TeacherAvailability, float]:
        prompt = f"""
        Generate {window_count} weekly teaching availability windows for a music teacher.
        OUTPUT: JSON Array.
        RULES:
        - "day_of_week": INTEGER 0-6 where 0 = Sunday, 1 = Monday ... 6 = Saturday.
        - "start_time" / "end_time": "HH:MM" strings between {AVAILABILITY_START_HOUR:02d}:00 and
          {AVAILABILITY_END_HOUR:02d}:00, on :00 or :30 only, end strictly after start.
        - Windows on the same day must not overlap.
        FIELDS: day_of_week, start_time, end_time.
        """
        slots, cost = self._fetch_big_batch(prompt, AvailabilitySlot)
        on_grid = [s for s in slots if self._on_grid(s)]
        if len(on_grid) < len(slots):
            logger.warning(f"Dropped {len(slots) - len(on_grid)} windows outside the availability grid")
        return TeacherAvailability(teacher_id=teacher_id, slots=on_grid), cost

    def generate_lesson_types(self, count: int = 4) -> Tuple[List[LessonType], float]:
        prompt = f"""
        Generate {count} lesson types for a music school.
        OUTPUT: JSON Array.
        RULES:
        - "id": Must be a STRING (e.g., "LT001").
        - "duration_minutes": INTEGER, one of 30, 45, 60.
        - VALID "frequency" VALUES (lowercase): ["daily", "weekly", "biweekly", "monthly"].
          Most lesson types are "weekly".
        FIELDS: id, name, duration_minutes, frequency.
        """
        return self._fetch_big_batch(prompt, LessonType)

    def generate_agreements(
        self,
        teacher_id: str,
        availability: TeacherAvailability,
        lesson_types: List[LessonType],
        count: int = 10,
        start_date: date = None
    ) -> Tuple[List[LessonAgreement], float]:
        if start_date is None:
            start_date = date.today()

        windows = json.dumps([s.model_dump(mode='json') for s in availability.slots])
        type_ids = json.dumps([lt.id for lt in lesson_types])

        prompt = f"""
        Generate {count} recurring lesson agreements for teacher "{teacher_id}" starting around {start_date}.
        OUTPUT: JSON Array.
        RULES:
        - "id": Must be a STRING (e.g., "A001"). "student_id": STRING (e.g., "S001").
        - "teacher_id": always "{teacher_id}".
        - "lesson_type_id": one of {type_ids}.
        - "day_of_week" and "start_time" MUST fall inside one of these availability windows: {windows}
        - "start_date" / "end_date": "YYYY-MM-DD"; end_date may be null; end_date never before start_date.
        FIELDS: id, teacher_id, student_id, lesson_type_id, day_of_week, start_time, start_date, end_date, is_active.
        """
        return self._fetch_big_batch(prompt, LessonAgreement)

    def generate_teacher_data(self, teacher_id: str = "t_demo", agreement_count: int = 10,
                              start_date: date = None) -> Tuple[dict, float]:
        """Availability, lesson types and agreements for one teacher, in repository JSON shape."""
        logger.info(f"Generating demo data for {teacher_id} (3 API Calls)...")
        step_cost = 0.0

        availability, c1 = self.generate_availability(teacher_id)
        step_cost += c1

        lesson_types, c2 = self.generate_lesson_types()
        step_cost += c2

        agreements: List[LessonAgreement] = []
        if availability.slots and lesson_types:
            agreements, c3 = self.generate_agreements(
                teacher_id, availability, lesson_types, agreement_count, start_date
            )
            step_cost += c3

        logger.info(
            f"Generated {len(availability.slots)} windows, {len(lesson_types)} lesson types, "
            f"{len(agreements)} agreements (~${step_cost:.4f})"
        )
        return {
            "availability": [availability.model_dump(mode='json')],
            "lesson_types": [lt.model_dump(mode='json') for lt in lesson_types],
            "agreements": [a.model_dump(mode='json') for a in agreements],
        }, step_cost
