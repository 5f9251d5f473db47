from catalog.models.dto.pricing import TaxSetting


def _tax_amount(base_amount: float, tax: TaxSetting) -> float:
    if not tax.enabled:
        return 0.0
    if tax.type == "percentage":
        return base_amount * tax.value / 100
    return tax.value


def calculate_taxes(base_amount: float, vat_tax: TaxSetting, service_tax: TaxSetting) -> dict:
    """VAT and service tax on top of ``base_amount``, each rounded to cents."""
    vat_amount = _tax_amount(base_amount, vat_tax)
    service_amount = _tax_amount(base_amount, service_tax)
    total_tax_amount = vat_amount + service_amount

    return {
        "vat_amount": round(vat_amount, 2),
        "service_amount": round(service_amount, 2),
        "total_tax_amount": round(total_tax_amount, 2),
        "final_amount": round(base_amount + total_tax_amount, 2),
    }


def describe_tax(tax: TaxSetting) -> str:
    if not tax.enabled:
        return "Disabled"
    if tax.type == "percentage":
        return f"{tax.value:g}%"
    return f"${tax.value:.2f} fixed"
