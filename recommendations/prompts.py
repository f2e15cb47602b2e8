from .models import RecommendationRequest


SYSTEM_PROMPT = (
    "You are a professional nutritionist. Generate meal plans as valid JSON only. "
    "Be concise but complete. No text outside JSON object."
)


USER_PROMPT_TEMPLATE = """Generate a {days}-day meal plan for {member_count} family member(s):

Family Members: {members}
Cuisine: {cuisine}
Restrictions: {restrictions}
Pantry: {pantry}
Nutrition plan: {nutrition_plan}

CRITICAL: Respond with ONLY valid JSON. Keep recipes concise but complete.
Use lowercase weekday names as keys of weeklyPlan, starting with monday.

Return a JSON response with this schema:
{{
  "weeklyPlan": {{
    "monday": {{
      "breakfast": {{
        "name": "Greek Yogurt Bowl",
        "description": "Protein-rich breakfast",
        "prepTime": 5,
        "cookTime": 0,
        "servings": 1,
        "difficulty": "Easy",
        "ingredients": [{{"name": "greek yogurt", "amount": "1", "unit": "cup"}}],
        "instructions": ["Place yogurt in bowl"],
        "nutrition": {{"calories": 200, "protein": 20, "carbs": 15, "fat": 5, "fiber": 3}},
        "tips": ["Use plain yogurt"],
        "tags": ["quick"]
      }},
      "lunch": {{"name": "...", "ingredients": [], "instructions": [], "nutrition": {{}}}},
      "dinner": {{"name": "...", "ingredients": [], "instructions": [], "nutrition": {{}}}},
      "snacks": [{{"name": "...", "ingredients": [], "instructions": [], "nutrition": {{}}}}]
    }}
  }},
  "shoppingList": {{
    "proteins": [{{"name": "chicken breast", "quantity": "1 lb"}}],
    "vegetables": [],
    "grains": [],
    "dairy": [],
    "pantry": [],
    "snacks": []
  }},
  "macroSummary": {{
    "{first_member}": {{
      "dailyTotals": {{"calories": 1200, "protein": 100, "carbs": 120, "fat": 40}}
    }}
  }}
}}
"""


def build_user_prompt(request: RecommendationRequest, days: int = 3) -> str:
    members = ", ".join(
        f"{member.name} ({member.goal}, {member.target_calories} calories)"
        for member in request.family_members
    )
    pantry = ", ".join(
        f"{item.name} ({item.quantity:g})" for item in request.pantry_items
    ) or "None"

    return USER_PROMPT_TEMPLATE.format(
        days=days,
        member_count=len(request.family_members),
        members=members,
        cuisine=request.preferences.cuisine_type or "Mediterranean",
        restrictions=request.preferences.dietary_restrictions or "None",
        pantry=pantry,
        nutrition_plan=request.nutrition_plan or "Balanced",
        first_member=request.family_members[0].name,
    )
