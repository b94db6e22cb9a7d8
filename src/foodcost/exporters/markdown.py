"""
Markdown recipe cost sheet exporter.

Generates a printable cost sheet from a RecipeSummary, suitable for any
Markdown viewer or for converting to PDF.
"""

from __future__ import annotations

from datetime import datetime, timezone

from foodcost.book import RecipeSummary
from foodcost.calculations import FoodCostStatus
from foodcost.config import FoodCostConfig
from foodcost.formatters import format_currency, format_percentage, format_quantity


_STATUS_LABELS = {
    FoodCostStatus.UNPRICED: "⚪ No sale price set",
    FoodCostStatus.LOW: "🔵 Below target range",
    FoodCostStatus.IDEAL: "🟢 Within target range",
    FoodCostStatus.HIGH: "🔴 Above target range",
}


def render_markdown(summary: RecipeSummary, config: FoodCostConfig | None = None) -> str:
    """Render a RecipeSummary as a Markdown cost sheet."""
    config = config or FoodCostConfig()

    def money(amount: float) -> str:
        return format_currency(amount, config.currency_symbol, config.decimals)

    lines: list[str] = []

    # Header
    lines.append(f"# 🍽️ {summary.recipe_name} — Cost Sheet")
    lines.append("")
    lines.append(f"*Generated: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}*")
    lines.append("")

    # Metrics
    lines.append("## 📊 Summary")
    lines.append("")
    lines.append("| Metric | Value |")
    lines.append("|--------|-------|")
    lines.append(f"| **Total Cost** | {money(summary.total_cost)} |")
    lines.append(f"| **Servings** | {summary.servings} |")
    lines.append(f"| **Cost per Serving** | {money(summary.cost_per_serving)} |")
    lines.append(f"| **Sale Price** | {money(summary.sale_price)} |")
    lines.append(f"| **Food Cost %** | {format_percentage(summary.food_cost_percentage)} |")
    lines.append(f"| **Gross Profit** | {money(summary.gross_profit)} |")
    lines.append(f"| **Gross Margin** | {format_percentage(summary.gross_profit_margin)} |")
    lines.append("")
    lines.append(
        f"**Status:** {_STATUS_LABELS[summary.status]} "
        f"({config.thresholds.low_food_cost_pct:g}–{config.thresholds.high_food_cost_pct:g}%)"
    )
    lines.append("")

    # Ingredients, most expensive first
    lines.append("## 🥕 Ingredients")
    lines.append("")
    breakdown = summary.breakdown
    if breakdown.lines:
        lines.append("| Ingredient | Quantity | Cost | Share |")
        lines.append("|------------|----------|------|-------|")
        for line in sorted(breakdown.lines, key=lambda x: x.cost, reverse=True):
            lines.append(
                f"| {line.ingredient_name} "
                f"| {format_quantity(line.used_quantity, line.used_unit)} "
                f"| {money(line.cost)} "
                f"| {format_percentage(breakdown.share_of(line))} |"
            )
    else:
        lines.append("*No costed ingredients.*")
    lines.append("")

    if breakdown.missing_ingredient_ids:
        lines.append("## ⚠️ Missing Ingredients")
        lines.append("")
        lines.append("These lines reference ingredients that no longer exist and were costed at zero:")
        lines.append("")
        for ingredient_id in breakdown.missing_ingredient_ids:
            lines.append(f"- `{ingredient_id}`")
        lines.append("")

    return "\n".join(lines)
