from collections.abc import Sequence

from catalog.core.config import settings
from catalog.models.dto.pricing import OrderItemData

MARGIN_TIERS = (
    (50, "excellent", "Excellent"),
    (30, "good", "Good"),
    (15, "average", "Average"),
    (0, "low", "Low"),
)


def _driver_payment(item: OrderItemData, order_items: Sequence[OrderItemData] | None) -> float:
    """Share of the flat delivery payment carried by one item of its order."""
    if item.order_type != "delivery" or not item.has_assigned_driver:
        return 0.0
    if not order_items or not item.order_id:
        return 0.0
    siblings = sum(1 for other in order_items if other.order_id == item.order_id)
    if siblings == 0:
        return 0.0
    return settings.driver_payment_per_delivery / siblings


def calculate_item_profit(
    item: OrderItemData,
    order_items: Sequence[OrderItemData] | None = None,
) -> dict:
    revenue = item.total_price or item.price * item.quantity

    cost = 0.0
    if item.total_cost:
        cost = item.total_cost
    elif item.cost_price:
        if item.is_weight_based and item.weight_quantity:
            # cost_price is per kg, weight_quantity is grams
            cost = item.cost_price * (item.weight_quantity / 1000)
        else:
            cost = item.cost_price * item.quantity

    driver_payment = _driver_payment(item, order_items)
    total_cost = cost + driver_payment
    profit = revenue - total_cost
    margin = profit / revenue * 100 if revenue > 0 else 0.0

    return {
        "revenue": revenue,
        "cost": cost,
        "driver_payment": driver_payment,
        "total_cost": total_cost,
        "profit": profit,
        "margin": margin,
        "is_profit": profit >= 0,
    }


def calculate_order_profit_summary(items: Sequence[OrderItemData]) -> dict:
    total_revenue = 0.0
    total_cost = 0.0
    total_driver_payments = 0.0
    profitable_items = 0
    loss_items = 0

    for item in items:
        item_profit = calculate_item_profit(item, items)
        total_revenue += item_profit["revenue"]
        total_cost += item_profit["cost"]
        total_driver_payments += item_profit["driver_payment"]
        if item_profit["is_profit"]:
            profitable_items += 1
        else:
            loss_items += 1

    total_cost_with_driver = total_cost + total_driver_payments
    total_profit = total_revenue - total_cost_with_driver
    average_margin = total_profit / total_revenue * 100 if total_revenue > 0 else 0.0

    return {
        "total_revenue": total_revenue,
        "total_cost": total_cost,
        "total_driver_payments": total_driver_payments,
        "total_cost_with_driver": total_cost_with_driver,
        "total_profit": total_profit,
        "average_margin": average_margin,
        "profitable_items": profitable_items,
        "loss_items": loss_items,
        "total_items": len(items),
    }


def get_profit_status(profit: float) -> str:
    if profit > 0:
        return "profit"
    if profit < 0:
        return "loss"
    return "break-even"


def get_profit_margin_tier(margin: float) -> dict[str, str]:
    for threshold, tier, label in MARGIN_TIERS:
        if margin >= threshold:
            return {"tier": tier, "label": label}
    return {"tier": "loss", "label": "Loss"}


def format_profit_rows(items: Sequence[OrderItemData]) -> list[dict[str, str | int | float]]:
    """Flat rows for CSV/PDF report export."""
    rows = []
    for item in items:
        profit = calculate_item_profit(item, items)
        driver = profit["driver_payment"]
        rows.append({
            "Product Name": item.product_name,
            "Variant": item.variant_title or "N/A",
            "Order Type": item.order_type or "N/A",
            "Quantity": item.quantity,
            "Weight (g)": item.weight_quantity if item.weight_quantity else "N/A",
            "Unit Price": f"{item.price:.2f}",
            "Cost Price": f"{item.cost_price:.2f}" if item.cost_price else "N/A",
            "Total Revenue": f"{profit['revenue']:.2f}",
            "Product Cost": f"{profit['cost']:.2f}",
            "Driver Payment": f"-{driver:.2f}" if driver > 0 else f"{driver:.2f}",
            "Total Cost": f"{profit['total_cost']:.2f}",
            "Profit/Loss": f"{profit['profit']:.2f}",
            "Margin %": f"{profit['margin']:.2f}",
            "Status": "Profit" if profit["is_profit"] else "Loss",
        })
    return rows
