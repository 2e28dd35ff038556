"""
Example recipes for guiding the LangExtract model.
"""
from langextract.data import ExampleData, Extraction


RECIPE_EXAMPLES = [
    ExampleData(
        text="""
Chocolate Chip Cookies
Soft and chewy cookies loaded with chocolate.
Prep Time: 15 minutes
Cook Time: 1 hour 10 minutes
Makes 24 cookies

Ingredients:
- 2 1/4 cups all-purpose flour
- 1 tsp baking soda
- 1 cup butter, softened
- 3/4 cup granulated sugar
- 2 large eggs
- 2 cups chocolate chips

Instructions:
1. Preheat the oven to 375°F.
2. Cream the butter and sugar, then beat in the eggs.
3. Stir in the flour and baking soda, then fold in the chocolate chips.
4. Bake for 10 minutes.
""",
        extractions=[
            Extraction(
                extraction_class="title",
                extraction_text="Chocolate Chip Cookies"
            ),
            Extraction(
                extraction_class="description",
                extraction_text="Soft and chewy cookies loaded with chocolate."
            ),
            Extraction(
                extraction_class="prep_time",
                extraction_text="15 minutes",
                attributes={"minutes": "15"}
            ),
            Extraction(
                extraction_class="cook_time",
                extraction_text="1 hour 10 minutes",
                attributes={"minutes": "70"}
            ),
            Extraction(
                extraction_class="servings",
                extraction_text="Makes 24 cookies",
                attributes={"value": "24"}
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="2 1/4 cups all-purpose flour"
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="1 tsp baking soda"
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="1 cup butter, softened"
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="3/4 cup granulated sugar"
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="2 large eggs"
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="2 cups chocolate chips"
            ),
            Extraction(
                extraction_class="instruction",
                extraction_text="Preheat the oven to 375°F."
            ),
            Extraction(
                extraction_class="instruction",
                extraction_text="Cream the butter and sugar, then beat in the eggs."
            ),
            Extraction(
                extraction_class="instruction",
                extraction_text="Stir in the flour and baking soda, then fold in the chocolate chips."
            ),
            Extraction(
                extraction_class="instruction",
                extraction_text="Bake for 10 minutes."
            ),
        ]
    ),

    ExampleData(
        text="""
Gewürzkuchen

Für 12 Stücke
Zubereitungszeit: 20 Min.

Zutaten:
4 Ei(er)
300 g Zucker
350 g Mehl
1 Pck. Backpulver
250 ml Olivenöl

Zubereitung:
Eier und Zucker schaumig schlagen.
Mehl, Backpulver und Öl unterrühren und 45 Minuten backen.
""",
        extractions=[
            Extraction(
                extraction_class="title",
                extraction_text="Gewürzkuchen"
            ),
            Extraction(
                extraction_class="servings",
                extraction_text="Für 12 Stücke",
                attributes={"value": "12"}
            ),
            Extraction(
                extraction_class="prep_time",
                extraction_text="20 Min.",
                attributes={"minutes": "20"}
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="4 Ei(er)"
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="300 g Zucker"
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="350 g Mehl"
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="1 Pck. Backpulver"
            ),
            Extraction(
                extraction_class="ingredient",
                extraction_text="250 ml Olivenöl"
            ),
            Extraction(
                extraction_class="instruction",
                extraction_text="Eier und Zucker schaumig schlagen."
            ),
            Extraction(
                extraction_class="instruction",
                extraction_text="Mehl, Backpulver und Öl unterrühren und 45 Minuten backen."
            ),
        ]
    ),
]
