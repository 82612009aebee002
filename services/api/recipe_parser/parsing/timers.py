import re
from typing import List

from ..schemas import TimerSuggestion
from .parser import Direction, Recipe

# Durations like "10 min", "5 minutes", "1 hour", "2-3 minutes", "10 to 15 mins"
DURATION_REGEX = re.compile(
    r'(?<!\d)(\d{1,5})(?:\s*(?:-|–|to)\s*(\d{1,5}))?\s*(min|mins|minute|minutes|hr|hrs|hour|hours)\b',
    re.IGNORECASE,
)

# Keywords to attempt to label the timer
LABEL_KEYWORDS = ["bake", "simmer", "rest", "marinate", "broil", "boil", "roast", "cool", "chill", "cook", "fry", "steep", "rise"]


def duration_seconds(amount: int, unit: str) -> int:
    unit = unit.lower()
    if "hr" in unit or "hour" in unit:
        return amount * 3600
    return amount * 60


def extract_timers(direction: Direction, recipe_title: str = "") -> List[TimerSuggestion]:
    """
    Parse direction text for durations and return timer suggestions.
    Ranges use the upper bound. Duplicate (label, duration) pairs are dropped.
    """
    suggestions: List[TimerSuggestion] = []
    text = direction.text
    lower = text.lower()

    # Label from the earliest cooking verb in the direction
    label, first = "Timer", None
    for kw in LABEL_KEYWORDS:
        m = re.search(rf"\b{kw}", lower)
        if m and (first is None or m.start() < first):
            label, first = kw.title(), m.start()

    for match in DURATION_REGEX.finditer(text):
        amount = int(match.group(2) or match.group(1))
        duration_s = duration_seconds(amount, match.group(3))
        if duration_s == 0:
            continue

        client_id = f"step-{direction.index}-{label.lower()}-{duration_s}"
        if any(s.client_id == client_id for s in suggestions):
            continue

        suggestions.append(TimerSuggestion(
            client_id=client_id,
            label=label,
            recipe=recipe_title,
            step_index=direction.index,
            duration_s=duration_s,
            source_text=match.group(0),
        ))

    return suggestions


def recipe_timers(recipe: Recipe) -> List[TimerSuggestion]:
    timers = []
    for sub in recipe.walk():
        for direction in sub.directions:
            timers.extend(extract_timers(direction, sub.title))
    return timers
