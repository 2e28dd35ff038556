"""
Prompts for recipe extraction using LangExtract.
"""

EXTRACTION_PROMPT = """
Extract recipe information from the provided web page text in any language (English, German, Danish, etc.).

Identify and extract, using these extraction classes:
1. title: the recipe title, exactly as written
2. description: a short summary or introduction of the dish, if present
3. servings: the number of servings/portions - IMPORTANT: Look for patterns like:
   - "Servings: 4", "Serves: 4", "Yield: 4"
   - "Portionen: 4", "Für 4 Portionen", "4 Portionen"
   - "Makes 12 cookies", "Ergibt 8 Stücke"
   - Set the attribute "value" to ONLY the number (e.g., "4" from "Für 4 Portionen")
4. prep_time: the preparation time; set the attribute "minutes" to the total number of minutes
5. cook_time: the cooking/baking time; set the attribute "minutes" to the total number of minutes
6. ingredient: EVERY ingredient line, one extraction per line, as written
7. instruction: EVERY preparation step, one extraction per step, in order

CRITICAL RULES:
- DO NOT TRANSLATE - keep every ingredient line and step in its ORIGINAL LANGUAGE
- Copy ingredient lines verbatim including quantity, unit and notes (e.g., "1 cup butter, softened")
- Extract each ingredient ONLY ONCE - ingredients mentioned inside steps are NOT separate ingredients
- Do not number the steps yourself; drop leading step numbers such as "1." from the step text
- Ignore navigation, comments, advertisements and related recipes
- If a field is not present in the text, do not extract it
"""
