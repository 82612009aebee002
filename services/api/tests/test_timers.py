from recipe_parser.parsing import Direction
from recipe_parser.parsing.timers import extract_timers, recipe_timers


def test_recipe_timers(pancakes):
    timers = recipe_timers(pancakes)
    assert [(t.recipe, t.step_index, t.label, t.duration_s) for t in timers] == [
        ("Buttermilk Pancakes", 3, "Cook", 180),
        ("Blueberry Compote", 1, "Simmer", 600),
    ]
    assert timers[0].client_id == "step-3-cook-180"
    assert timers[0].source_text == "2-3 minutes"


def test_multiple_durations_in_one_step():
    direction = Direction(index=2, text="Bake for 20 minutes, then rest 1 hr.")
    timers = extract_timers(direction)
    assert [t.duration_s for t in timers] == [1200, 3600]
    assert {t.label for t in timers} == {"Bake"}


def test_duplicates_dropped():
    direction = Direction(index=1, text="Boil 5 min. Stir. Boil 5 minutes more.")
    assert len(extract_timers(direction)) == 1


def test_no_keyword():
    direction = Direction(index=4, text="Leave it alone for 10 to 15 mins.")
    timers = extract_timers(direction, "Dough")
    assert timers[0].label == "Timer"
    assert timers[0].duration_s == 900
    assert timers[0].recipe == "Dough"


def test_no_durations():
    assert extract_timers(Direction(index=1, text="Serve hot.")) == []


def test_label_from_earliest_verb():
    direction = Direction(index=1, text="Boil, then bake 10 minutes")
    assert extract_timers(direction)[0].label == "Boil"


def test_oversized_durations_ignored():
    direction = Direction(index=1, text="Cook " + "9" * 5000 + " minutes")
    assert extract_timers(direction) == []
