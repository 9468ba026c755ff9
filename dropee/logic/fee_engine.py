# dropee/logic/fee_engine.py
from decimal import Decimal

from .. import config
from .breakdown import build_breakdown
from .models import (
    DeliveryFeeRequest,
    FeeBreakdown,
    FeeComponents,
    PricingConfig,
    Urgency,
    WeatherCondition,
    round_money,
    to_decimal,
)

_ONE = Decimal(1)
_ZERO = Decimal(0)
_FREE_WEIGHT_KG = to_decimal(config.FREE_WEIGHT_KG)
_HEAVY_RAIN_FACTOR = to_decimal(config.HEAVY_RAIN_FACTOR)


def compute_components(request: DeliveryFeeRequest, pricing: PricingConfig) -> FeeComponents:
    """Calcula cada componente da taxa, sem arredondar.

    Todas as sobretaxas (frágil, clima, urgência) são proporcionais à taxa
    base e independentes entre si.
    """
    distance = to_decimal(request.distance_km)
    weight = to_decimal(request.weight_kg)

    base_fee = pricing.base_price
    distance_fee = distance * pricing.price_per_km
    weight_fee = max(_ZERO, weight - _FREE_WEIGHT_KG) * pricing.price_per_kg

    fragile_fee = base_fee * (pricing.fragile_multiplier - _ONE) if request.is_fragile else _ZERO

    if request.weather_condition == WeatherCondition.RAIN:
        weather_fee = base_fee * (pricing.rain_multiplier - _ONE)
    elif request.weather_condition == WeatherCondition.HEAVY_RAIN:
        weather_fee = base_fee * (pricing.rain_multiplier - _ONE) * _HEAVY_RAIN_FACTOR
    else:
        weather_fee = _ZERO

    # agendado não tem sobretaxa
    urgency_fee = base_fee * (pricing.urgent_multiplier - _ONE) if request.urgency == Urgency.URGENT else _ZERO

    return FeeComponents(
        base_fee=base_fee,
        distance_fee=distance_fee,
        weight_fee=weight_fee,
        fragile_fee=fragile_fee,
        weather_fee=weather_fee,
        urgency_fee=urgency_fee,
    )


def clamp_total(raw_total: Decimal, pricing: PricingConfig) -> Decimal:
    return max(pricing.min_fee, min(pricing.max_fee, raw_total))


def calculate_fee(request: DeliveryFeeRequest, pricing: PricingConfig) -> FeeBreakdown:
    """Função pura: (pedido, tabela de preços) -> detalhamento completo.

    O limite mínimo/máximo é aplicado uma única vez, sobre o total.
    O arredondamento acontece só na saída.
    """
    components = compute_components(request, pricing)
    total_fee = clamp_total(components.raw_total, pricing)

    return FeeBreakdown(
        base_fee=round_money(components.base_fee),
        distance_fee=round_money(components.distance_fee),
        weight_fee=round_money(components.weight_fee),
        fragile_fee=round_money(components.fragile_fee),
        weather_fee=round_money(components.weather_fee),
        urgency_fee=round_money(components.urgency_fee),
        total_fee=round_money(total_fee),
        breakdown=tuple(build_breakdown(components, request)),
    )
