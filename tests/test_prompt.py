import re

from food_lens.prompt import build_prompt


def test_build_prompt_is_byte_stable():
    first = build_prompt()
    assert all(build_prompt() == first for _ in range(5))
    assert build_prompt() is first


def test_prompt_demands_json_only():
    assert "ONLY a valid JSON object" in build_prompt()


def test_prompt_schema_names_every_result_field():
    prompt = build_prompt()
    for field in (
        "food",
        "nutritionInfo",
        "calories",
        "protein",
        "fat",
        "carbs",
        "fiber",
        "sugar",
        "sodium",
        "healthierAlternative",
        "mealType",
        "isDietFriendly",
        "keto",
        "vegan",
        "vegetarian",
        "glutenFree",
        "confidence",
    ):
        assert f'"{field}"' in prompt


def test_prompt_lists_closed_sets():
    prompt = build_prompt()
    assert "Breakfast/Lunch/Dinner/Snack" in prompt
    assert "high/medium/low" in prompt


def test_prompt_schema_block_is_brace_balanced():
    block = re.search(r"\{.*\}", build_prompt(), flags=re.S).group(0)
    assert block.count("{") == block.count("}") == 3
