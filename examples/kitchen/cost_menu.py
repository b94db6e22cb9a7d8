"""
Example: Cost a small menu.

Run:
    python examples/kitchen/cost_menu.py

Or via CLI:
    foodcost ingredient add "Chicken breast" --price 200 --qty 1 --unit kg --yield 80
    foodcost recipe add "Grilled chicken" --item "Chicken breast:500:g" --servings 2 --price 350
"""

from foodcost import RecipeBook, RecipeItem
from foodcost.exporters import render_markdown


def main() -> None:
    book = RecipeBook()

    chicken = book.add_ingredient(
        name="Chicken breast",
        category="protein",
        price_per_unit=200,
        purchase_quantity=1,
        purchase_unit="kg",
        yield_percentage=80,
    )
    garlic = book.add_ingredient(
        name="Garlic",
        category="vegetable",
        price_per_unit=120,
        purchase_quantity=1,
        purchase_unit="kg",
        yield_percentage=85,
    )
    cream = book.add_ingredient(
        name="Cream",
        category="dairy",
        price_per_unit=95,
        purchase_quantity=1,
        purchase_unit="l",
    )
    eggs = book.add_ingredient(
        name="Eggs",
        category="protein",
        price_per_unit=4,
        purchase_quantity=1,
        purchase_unit="pcs",
    )

    book.add_recipe(
        name="Garlic cream chicken",
        items=[
            RecipeItem(ingredient_id=chicken.id, used_quantity=500, used_unit="g"),
            RecipeItem(ingredient_id=garlic.id, used_quantity=30, used_unit="g"),
            RecipeItem(ingredient_id=cream.id, used_quantity=200, used_unit="ml"),
        ],
        servings=2,
        sale_price=420,
    )
    book.add_recipe(
        name="Omelette",
        items=[RecipeItem(ingredient_id=eggs.id, used_quantity=3, used_unit="pcs")],
        servings=1,
        sale_price=60,
    )

    for recipe in book.list_recipes():
        print(render_markdown(book.summarize(recipe.id)))
        print()


if __name__ == "__main__":
    main()
