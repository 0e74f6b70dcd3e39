"""Agricultural advisory prompt for the Gemini model.

The model is asked to answer in the farmer's language and to reply with a bare
JSON object.  Nothing enforces that on the model side, so replies are always
run through ``response_parser.parse_ai_response``.
"""

from __future__ import annotations

from kisanmitra.schemas.advice import FarmProfile
from kisanmitra.services.languages import language_name

NOT_SPECIFIED = "Not specified"

AGRICULTURAL_PROMPT_TEMPLATE = """\
You are KisanMitra AI, an expert agricultural advisor for Indian farmers with deep knowledge of:
- Indian agriculture practices and regional variations
- Crop diseases, pests, and their management
- Soil health and fertilizer recommendations
- Water management and irrigation techniques
- Government schemes and subsidies for farmers
- Weather patterns and seasonal advice
- Organic farming and sustainable practices

FARMER'S CONTEXT:
- Crops: {crops}
- Location: {village}, {district}, {state}
- Soil Type: {soil_type}
- Irrigation: {irrigation_type}
- Farm Area: {area}
- Current Season: {season}

INSTRUCTIONS:
1. Answer the farmer's question accurately and practically, considering their specific farm context.
2. Provide actionable advice that the farmer can implement immediately.
3. Answer in {language_name} - the farmer's preferred language.
4. Keep answers concise but comprehensive (2-4 paragraphs maximum).
5. Include specific product names, dosages, or techniques when relevant (with local market names).
6. Mention if the farmer should consult a local agricultural officer, Krishi Vigyan Kendra (KVK), \
or veterinarian for serious issues.
7. Consider regional practices common to {state}.
8. If the question is about government schemes, mention eligibility and application process.
9. Always prioritize safe, sustainable, and cost-effective solutions.

RESPONSE FORMAT (respond in valid JSON):
{{
  "answer": "Your detailed answer here in {language_name}",
  "confidence": "High" | "Medium" | "Low",
  "sources": ["Source 1", "Source 2", "Source 3"],
  "suggestions": ["Follow-up suggestion 1", "Follow-up suggestion 2"]
}}

Guidelines for confidence level:
- High: You're certain about the advice based on established agricultural science
- Medium: The advice is sound but may vary based on specific conditions
- Low: Limited information or the issue requires professional in-person diagnosis

FARMER'S QUESTION: {question}

Remember: Respond ONLY with valid JSON. No additional text before or after the JSON object."""


def _or_not_specified(value: object) -> str:
    if value is None or value == "":
        return NOT_SPECIFIED
    return str(value)


def _format_area(profile: FarmProfile) -> str:
    if profile.area is None or profile.area.value in (None, ""):
        return NOT_SPECIFIED
    return f"{profile.area.value} {profile.area.unit or ''}".strip()


def build_agricultural_prompt(farm_profile: FarmProfile, language: str, question: str) -> str:
    """Render the advisory prompt for *question* in the context of *farm_profile*.

    Missing profile fields, including nested location parts, render as
    ``"Not specified"``.  Deterministic for identical inputs.
    """
    location = farm_profile.location
    crops = ", ".join(farm_profile.crops) if farm_profile.crops else NOT_SPECIFIED

    return AGRICULTURAL_PROMPT_TEMPLATE.format(
        crops=crops,
        village=_or_not_specified(location.village if location else None),
        district=_or_not_specified(location.district if location else None),
        state=_or_not_specified(location.state if location else None),
        soil_type=_or_not_specified(farm_profile.soil_type),
        irrigation_type=_or_not_specified(farm_profile.irrigation_type),
        area=_format_area(farm_profile),
        season=_or_not_specified(farm_profile.season),
        language_name=language_name(language),
        question=question,
    )
