"""Prompt builder — the fixed instruction text the validator relies on."""

FOOD_ANALYSIS_PROMPT = """\
Analyze this food image and return ONLY a valid JSON object with the structure below.
Do not include any explanatory text, markdown formatting, code blocks, or any other content - ONLY valid JSON.

Required JSON structure:
{
  "food": "Name of the detected food item",
  "nutritionInfo": {
    "calories": "X kcal",
    "protein": "X g",
    "fat": "X g",
    "carbs": "X g",
    "fiber": "X g",
    "sugar": "X g",
    "sodium": "X mg"
  },
  "healthierAlternative": "A healthier alternative with brief explanation",
  "mealType": "Breakfast/Lunch/Dinner/Snack",
  "isDietFriendly": {
    "keto": true/false,
    "vegan": true/false,
    "vegetarian": true/false,
    "glutenFree": true/false
  },
  "confidence": "high/medium/low"
}

Make reasonable estimations based on visual appearance. For nutritional values, give your best \
estimate for a typical serving size. If you are uncertain about any value, still provide your best \
estimate and set the confidence level accordingly.
"""


def build_prompt() -> str:
    return FOOD_ANALYSIS_PROMPT
